"""Inline page citation rules and the fixed user-facing sentences."""

from __future__ import annotations

import re

NOT_FOUND_MESSAGE = "I couldn't find this in the PDF."
APOLOGY_MESSAGE = "I apologize, but I couldn't generate a response. Please try again."

SYNTHESIS_SNIPPET_CHARS = 200

_CITATION = re.compile(r"\(p\.\s*(\d+)\)", re.IGNORECASE)


def has_citation(answer: str | None) -> bool:
    return bool(answer) and _CITATION.search(answer) is not None


def cited_pages(answer: str) -> list[int]:
    return [int(m) for m in _CITATION.findall(answer)]


def citations_within(answer: str, total_pages: int) -> bool:
    """True when every cited page lies in ``[1, total_pages]``."""
    return all(1 <= page <= total_pages for page in cited_pages(answer))


def format_snippet_answer(page: int, snippet: str) -> str:
    """Extractive answer built from one snippet, quoting at most 200 characters."""
    return f"Based on the PDF content: {snippet[:SYNTHESIS_SNIPPET_CHARS]}... (p. {page})."
