from __future__ import annotations

from typing import Protocol

from pagecite.domain.errors import ExtractionError
from pagecite.domain.models import DocumentRecord, ExtractedText
from pagecite.domain.types import Result


class TextExtractorPort(Protocol):
    def extract(self, document: DocumentRecord) -> Result[ExtractedText, ExtractionError]: ...
