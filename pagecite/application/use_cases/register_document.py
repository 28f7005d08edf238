# pagecite/application/use_cases/register_document.py
from __future__ import annotations

import logging
import os
import uuid

from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.ports.text_extractor_port import TextExtractorPort
from pagecite.domain.errors import DomainError, ExtractionError, ValidationError
from pagecite.domain.models import DocumentRecord
from pagecite.domain.types import Result

logger = logging.getLogger(__name__)


class RegisterDocument:
    """Record metadata for a file already on disk; the page count comes from extraction."""

    def __init__(self, documents: DocumentStorePort, extractor: TextExtractorPort) -> None:
        self.documents = documents
        self.extractor = extractor

    def execute(
        self,
        path: str,
        document_id: str | None = None,
        display_name: str | None = None,
        conversation_id: str | None = None,
    ) -> Result[DocumentRecord, DomainError]:
        if not path:
            return Result.failure(ValidationError("path must not be empty"))

        draft = DocumentRecord(
            id=document_id or uuid.uuid4().hex,
            display_name=display_name or os.path.basename(path),
            page_count=1,
            source_ref=path,
        )
        extracted = self.extractor.extract(draft)
        if not extracted.ok or extracted.value is None:
            return Result.failure(extracted.error or ExtractionError("Extract failed"))

        record = DocumentRecord(
            id=draft.id,
            display_name=draft.display_name,
            page_count=extracted.value.page_count,
            source_ref=path,
        )
        self.documents.add(record, conversation_id=conversation_id)
        logger.info(
            "document registered",
            extra={"document_id": record.id, "page_count": record.page_count},
        )
        return Result.success(record)
