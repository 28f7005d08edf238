# pagecite/application/use_cases/run_agent_turn.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from pagecite.application.dto.chat_dto import ConversationTurn, RequestContext
from pagecite.application.ports.llm_port import LLMPort, LLMResponse, RawToolCall
from pagecite.application.prompts import build_system_prompt
from pagecite.application.tools.catalog import TOOL_SPECS, ToolName, ToolResult
from pagecite.application.tools.executor import ToolExecutor
from pagecite.domain.errors import LLMError
from pagecite.domain.services.citations import NOT_FOUND_MESSAGE, format_snippet_answer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnOutcome:
    """Terminal state of one agent turn.

    - candidate:    answer to hand to the guardrail (may be empty if the model failed)
    - tool_calls:   raw tool calls the model emitted, for observability
    - tool_results: results of executing them, in call order
    - transcript:   the turn plus a synthetic assistant message carrying the results
    """

    candidate: str
    tool_calls: list[RawToolCall] = field(default_factory=list)
    tool_results: list[ToolResult] = field(default_factory=list)
    transcript: ConversationTurn | None = None


def _first_snippet(payload: Any) -> tuple[int, str] | None:
    """(page, snippet) of the top result in a successful search payload."""
    if not isinstance(payload, dict) or not payload.get("success"):
        return None
    results = payload.get("results") or []
    if not results:
        return None
    top = results[0]
    return int(top["page"]), str(top["snippet"])


def synthesize_answer(results: Sequence[ToolResult]) -> str:
    """Build an answer from tool results alone, without another model call.

    First choice is the first search result's top snippet, then the search
    embedded in the first navigation result, else the not-found sentence.
    """
    search = next((r for r in results if r.name == ToolName.SEARCH_DOCUMENT.value), None)
    if search is not None and search.ok:
        hit = _first_snippet(search.payload)
        if hit is not None:
            return format_snippet_answer(*hit)

    nav = next((r for r in results if r.name == ToolName.NAVIGATE_AND_SEARCH.value), None)
    if nav is not None and nav.ok:
        hit = _first_snippet(nav.payload.get("searchResults"))
        if hit is not None:
            return format_snippet_answer(*hit)

    return NOT_FOUND_MESSAGE


class ToolOrchestrator:
    """
    Drives one forced-tool-use turn: Invoke -> Inspect -> Recover -> Terminal.
    Never raises; every failure degrades to a (possibly empty) candidate.
    """

    def __init__(self, llm: LLMPort, executor: ToolExecutor, max_workers: int = 8) -> None:
        self.llm = llm
        self.executor = executor
        self.max_workers = max_workers

    def run(self, ctx: RequestContext) -> TurnOutcome:
        # 1) Invoke
        try:
            response = self.llm.invoke(
                build_system_prompt(ctx),
                ctx.turn.messages,
                tools=TOOL_SPECS,
                temperature=0.0,
            )
        except LLMError as ex:
            logger.error("model invocation failed", extra={"error": str(ex)})
            return TurnOutcome(candidate="", transcript=ctx.turn)

        logger.info(
            "model turn finished",
            extra={
                "conversation_id": ctx.conversation_id,
                "text_length": len(response.text.strip()),
                "tool_calls": [c.name for c in response.tool_calls],
                "finish_reason": response.finish_reason,
            },
        )

        # 2) Execute requested tools; side effects such as navigation apply either way
        results = self.execute_all(response.tool_calls, ctx)
        transcript = ctx.turn.with_tool_results(results) if results else ctx.turn

        # 3) Inspect: direct text wins, tool results were exploratory
        if response.text.strip():
            return self._outcome(response.text, response, results, transcript)

        # 4) Recover
        if response.tool_calls:
            return self._outcome(synthesize_answer(results), response, results, transcript)
        return self._outcome("", response, results, transcript)

    def execute_all(self, calls: Sequence[RawToolCall], ctx: RequestContext) -> list[ToolResult]:
        """Run all calls concurrently; results keep call order, failures stay isolated."""
        if not calls:
            return []
        workers = max(1, min(self.max_workers, len(calls)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda c: self.executor.execute_raw(c, ctx), calls))

    @staticmethod
    def _outcome(
        candidate: str,
        response: LLMResponse,
        results: list[ToolResult],
        transcript: ConversationTurn,
    ) -> TurnOutcome:
        return TurnOutcome(
            candidate=candidate,
            tool_calls=list(response.tool_calls),
            tool_results=results,
            transcript=transcript,
        )
