# pagecite/application/use_cases/search_document.py
from __future__ import annotations

import logging

from pagecite.application.dto.search_dto import SearchOutcome, SearchRequest
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.ports.text_extractor_port import TextExtractorPort
from pagecite.application.services.relevance_ranker import RelevanceRanker
from pagecite.domain.errors import (
    DocumentNotFoundError,
    DomainError,
    ExtractionError,
    ValidationError,
)
from pagecite.domain.services.segmentation import DEFAULT_WINDOW, segment
from pagecite.domain.types import Result

logger = logging.getLogger(__name__)


class SearchDocument:
    """
    Use case: ranked retrieval inside one document.
    Extract -> segment -> rank, recomputed on every call (no cache), so a
    re-uploaded document is always reflected. Errors travel as Result[T, E].
    """

    def __init__(
        self,
        documents: DocumentStorePort,
        extractor: TextExtractorPort,
        ranker: RelevanceRanker,
        segment_window: int = DEFAULT_WINDOW,
    ) -> None:
        self.documents = documents
        self.extractor = extractor
        self.ranker = ranker
        self.segment_window = segment_window

    def execute(self, req: SearchRequest) -> Result[SearchOutcome, DomainError]:
        # 1) Validate
        if not req.query or not req.query.strip():
            return Result.failure(ValidationError("query must not be empty"))

        # 2) Metadata
        doc = self.documents.get_by_id(req.document_id)
        if doc is None:
            return Result.failure(DocumentNotFoundError(f"PDF not found: {req.document_id}"))

        # 3) Extract
        extracted = self.extractor.extract(doc)
        if not extracted.ok or extracted.value is None:
            logger.warning(
                "text extraction failed",
                extra={"document_id": doc.id, "error": str(extracted.error)},
            )
            return Result.failure(extracted.error or ExtractionError("Extract failed"))
        if not extracted.value.text:
            return Result.failure(ExtractionError("Extract failed: document has no text layer"))

        # 4) Segment; the extractor's page count wins over upload-time metadata
        page_count = extracted.value.page_count or doc.page_count
        chunks = segment(extracted.value.text, page_count, window=self.segment_window)

        # 5) Rank
        results = self.ranker.rank(req.query, chunks, req.top_k)
        return Result.success(SearchOutcome(results=results, total_pages=len(chunks)))
