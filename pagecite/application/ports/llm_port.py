from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" | "assistant"
    content: str


@dataclass(frozen=True)
class ToolSpec:
    """A capability advertised to the model: name, description, JSON schema of its arguments."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RawToolCall:
    """Tool call as emitted by the model; ``arguments`` is unvalidated JSON text."""

    id: str
    name: str
    arguments: str = "{}"


@dataclass(frozen=True)
class LLMResponse:
    text: str
    tool_calls: tuple[RawToolCall, ...] = ()
    finish_reason: str = "stop"
    usage_tokens: int | None = None


class LLMPort(Protocol):
    def invoke(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        tools: Sequence[ToolSpec] = (),
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Run one model turn.

        Args:
            system_prompt: Policy/instructions sent as the system message
            messages: Conversation history, oldest first
            tools: Capability catalog the model may call (empty: plain generation)
            temperature: Sampling temperature (0 for deterministic turns)

        Returns:
            LLMResponse with the direct text (possibly empty) and requested tool calls

        Raises:
            LLMError: If the backend fails (adapters translate library errors)
        """
        ...
