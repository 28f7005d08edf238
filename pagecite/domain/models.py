# pagecite/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

SNIPPET_MAX_CHARS = 1200


@dataclass(frozen=True)
class Chunk:
    """A page-aligned slice of a document's extracted text.

    Produced fresh per request by the segmenter and never persisted.
    """

    page: int
    text: str


@dataclass(frozen=True)
class RankedSnippet:
    """
    Retrieval evidence returned by the ranker.

    - page:     1-based page number of the chunk the snippet came from
    - snippet:  trimmed chunk text, at most SNIPPET_MAX_CHARS characters
    - score:    strategy-specific relevance (hit-rate or cosine); internal only
    """

    page: int
    snippet: str
    score: float = 0.0

    def to_payload(self) -> dict[str, Any]:
        return {"page": self.page, "snippet": self.snippet}


@dataclass(frozen=True)
class DocumentRecord:
    """Upload-time metadata of a document, owned by the external document store."""

    id: str
    display_name: str
    page_count: int
    source_ref: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "displayName": self.display_name,
            "pageCount": self.page_count,
        }


@dataclass(frozen=True)
class ExtractedText:
    text: str
    page_count: int


@dataclass(frozen=True)
class PageContext:
    """Viewing position of one conversation: active document and current page."""

    conversation_id: str
    active_document_id: str | None = None
    current_page: int | None = None
    updated_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "conversationId": self.conversation_id,
            "activeDocumentId": self.active_document_id,
            "currentPage": self.current_page,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
