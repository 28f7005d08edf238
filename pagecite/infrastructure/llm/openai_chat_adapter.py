from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from pagecite.application.ports.llm_port import (
    ChatMessage,
    LLMPort,
    LLMResponse,
    RawToolCall,
    ToolSpec,
)
from pagecite.domain.errors import LLMError


def _tool_payload(spec: ToolSpec) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": spec.name,
            "description": spec.description,
            "parameters": spec.parameters,
        },
    }


@dataclass
class OpenAIChatAdapter(LLMPort):
    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str | None = None  # e.g. "http://localhost:8000/v1" for an OpenAI-compatible server
    max_tokens: int = 1024

    def __post_init__(self) -> None:
        # Defer import of OpenAI to invoke() to avoid hard dependency in tests
        self._client: Any | None = None

    def invoke(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        tools: Sequence[ToolSpec] = (),
        temperature: float = 0.0,
    ) -> LLMResponse:
        try:
            if self._client is None:
                module = import_module("openai")
                OpenAI = module.OpenAI
                self._client = OpenAI(api_key=self.api_key or None, base_url=self.base_url)
            assert self._client is not None

            payload: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
            payload.extend({"role": m.role, "content": m.content} for m in messages)
            kwargs: dict[str, Any] = {
                "model": self.model,
                "messages": payload,
                "temperature": temperature,
                "max_tokens": self.max_tokens,
            }
            if tools:
                kwargs["tools"] = [_tool_payload(t) for t in tools]
                kwargs["tool_choice"] = "auto"

            resp: Any = self._client.chat.completions.create(**kwargs)
            choice = resp.choices[0]
            calls = tuple(
                RawToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=tc.function.arguments or "{}",
                )
                for tc in (choice.message.tool_calls or [])
            )
            usage = getattr(resp, "usage", None)
            return LLMResponse(
                text=choice.message.content or "",
                tool_calls=calls,
                finish_reason=choice.finish_reason or "stop",
                usage_tokens=getattr(usage, "total_tokens", None),
            )
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            raise LLMError(f"LLM communication failed: {ex}") from ex
