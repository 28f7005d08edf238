# pagecite/application/dto/search_dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pagecite.domain.models import RankedSnippet


@dataclass(frozen=True)
class SearchRequest:
    """
    DTO for ranked retrieval inside one document.

    - document_id: document to search
    - query: free-text question (non-empty)
    - top_k: number of snippets to return (clamped to the number of pages)
    """

    document_id: str
    query: str
    top_k: int = 3


@dataclass(frozen=True)
class SearchOutcome:
    """Ranked snippets plus the page count the segmentation produced."""

    results: list[RankedSnippet] = field(default_factory=list)
    total_pages: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "success": True,
            "results": [r.to_payload() for r in self.results],
            "totalPages": self.total_pages,
        }
