"""System prompts for the agent turn and the guardrail regeneration."""

from __future__ import annotations

from collections.abc import Sequence

from pagecite.application.dto.chat_dto import RequestContext
from pagecite.domain.models import RankedSnippet
from pagecite.domain.services.citations import NOT_FOUND_MESSAGE

_BASE = (
    "You are a helpful AI tutor and assistant. You can help users with various tasks, "
    "answer questions, and work with PDF documents."
)

_POLICY = f"""
TOOLS USAGE POLICY (CRITICAL):
- If the question relates to the PDF, call "search_document" with the PDF ID above to retrieve \
the most relevant snippets with page numbers BEFORE answering.
- Use "navigate_and_search" to move the viewer to the page you cite; pass search_query to search \
in the same step.
- Do NOT guess or rely on the filename. Base your answer on the snippets returned by the tools.
- If tools fail, apologize and explain that the PDF text could not be read.

STYLE POLICY (CRITICAL):
- Output ONLY the final answer. Do NOT describe your process or say things like "let me check", \
"searching", or "I will call a tool".
- Be concise and direct. Include page citations inline, e.g. "(p. 3)".
- Only cite page numbers that exist in the PDF.
- If the answer is not in the tool results, say "{NOT_FOUND_MESSAGE}"
- NEVER say "{NOT_FOUND_MESSAGE}" if the tool results contain relevant snippets."""


def build_system_prompt(ctx: RequestContext) -> str:
    parts = [_BASE]
    doc = ctx.active_document
    if doc is not None:
        parts.append(
            "Current PDF context:\n"
            f"- PDF: {doc.display_name}\n"
            f"- PDF ID: {doc.id}\n"
            f"- Current page: {ctx.current_page or 1} of {doc.page_count}\n\n"
            f"IMPORTANT: This PDF has exactly {doc.page_count} pages. "
            f"Do NOT reference page numbers beyond {doc.page_count}."
        )
    parts.append(_POLICY.strip())
    return "\n\n".join(parts)


def build_guardrail_prompt(snippets: Sequence[RankedSnippet]) -> str:
    block = "\n\n".join(f"Page {s.page}: {s.snippet}" for s in snippets)
    return (
        "Answer strictly using the provided PDF snippets. Output ONLY the final answer; "
        "no process narration. Include inline page citations like (p. N). "
        f'If the snippets do not contain the answer, reply: "{NOT_FOUND_MESSAGE}"\n\n'
        f"PDF SNIPPETS:\n{block}"
    )
