from __future__ import annotations

import os
from dataclasses import dataclass

from pagecite.application.ports.text_extractor_port import TextExtractorPort
from pagecite.domain.errors import ExtractionError
from pagecite.domain.models import DocumentRecord, ExtractedText
from pagecite.domain.services.segmentation import PAGE_MARKER
from pagecite.domain.types import Result


@dataclass
class PlainTextExtractorAdapter(TextExtractorPort):
    """UTF-8 text files; form feeds in the file mark page breaks."""

    def extract(self, document: DocumentRecord) -> Result[ExtractedText, ExtractionError]:
        if not os.path.exists(document.source_ref):
            return Result.failure(ExtractionError("file not found"))
        try:
            with open(document.source_ref, encoding="utf-8") as f:
                text = f.read()
        except Exception as ex:  # noqa: BLE001
            return Result.failure(ExtractionError(f"TXT load failed: {ex}"))
        return Result.success(ExtractedText(text=text, page_count=text.count(PAGE_MARKER) + 1))


@dataclass
class PDFTextExtractorAdapter(TextExtractorPort):
    """Text layer of a PDF via pypdf (no OCR); pages are joined with form feeds."""

    def extract(self, document: DocumentRecord) -> Result[ExtractedText, ExtractionError]:
        try:
            from pypdf import PdfReader  # lazy import to avoid hard dependency in tests
        except Exception as ex:  # pragma: no cover
            return Result.failure(ExtractionError(f"pypdf is not installed: {ex}"))

        if not os.path.exists(document.source_ref):
            return Result.failure(ExtractionError("PDF file not found"))
        try:
            reader = PdfReader(document.source_ref)
            pages = [p.extract_text() or "" for p in reader.pages]
        except Exception as ex:  # noqa: BLE001
            return Result.failure(ExtractionError(f"Failed to extract text from PDF: {ex}"))
        # scanned PDFs have no text layer at all
        text = PAGE_MARKER.join(pages) if any(p.strip() for p in pages) else ""
        return Result.success(ExtractedText(text=text, page_count=max(1, len(pages))))


@dataclass
class SuffixDispatchExtractor(TextExtractorPort):
    """Picks the PDF or plain-text extractor from the file suffix."""

    pdf: PDFTextExtractorAdapter
    plain: PlainTextExtractorAdapter

    def extract(self, document: DocumentRecord) -> Result[ExtractedText, ExtractionError]:
        if document.source_ref.lower().endswith(".pdf"):
            return self.pdf.extract(document)
        return self.plain.extract(document)
