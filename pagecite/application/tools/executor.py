"""Executes typed tool invocations against the request's collaborators."""

from __future__ import annotations

import logging
from typing import Any

from pagecite.application.dto.chat_dto import RequestContext
from pagecite.application.dto.search_dto import SearchRequest
from pagecite.application.ports.context_store_port import ContextStorePort
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.ports.llm_port import RawToolCall
from pagecite.application.ports.text_extractor_port import TextExtractorPort
from pagecite.application.tools.catalog import (
    GetConversationContext,
    GetDocumentDetails,
    ListDocuments,
    NavigateAndSearch,
    ReadDocumentText,
    SearchDocumentArgs,
    SetCurrentPage,
    ToolInvocation,
    ToolOutcome,
    ToolResult,
    parse_tool_call,
)
from pagecite.application.use_cases.search_document import SearchDocument
from pagecite.domain.errors import (
    DocumentNotFoundError,
    DomainError,
    PageOutOfRangeError,
    ToolExecutionError,
)
from pagecite.domain.models import DocumentRecord
from pagecite.domain.types import Result

logger = logging.getLogger(__name__)


def _failure_payload(err: BaseException | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": str(err) or type(err).__name__}
    if isinstance(err, PageOutOfRangeError):
        payload["maxPages"] = err.max_pages
    return payload


class ToolExecutor:
    """Runs one capability per call and always answers with a ToolResult.

    Any exception raised while executing becomes a failure result, so one
    broken tool never aborts the turn or its sibling calls.
    """

    def __init__(
        self,
        documents: DocumentStorePort,
        contexts: ContextStorePort,
        extractor: TextExtractorPort,
        search: SearchDocument,
    ) -> None:
        self.documents = documents
        self.contexts = contexts
        self.extractor = extractor
        self.search = search

    def execute_raw(self, raw: RawToolCall, ctx: RequestContext) -> ToolResult:
        try:
            parsed = parse_tool_call(raw)
        except Exception as ex:  # noqa: BLE001
            logger.exception("tool call parsing failed", extra={"tool": raw.name})
            err = ToolExecutionError(f"Tool execution failed: {ex}")
            return ToolResult(raw.id, raw.name, ToolOutcome.FAILURE, _failure_payload(err))
        if not parsed.ok or parsed.value is None:
            logger.warning(
                "rejected tool call", extra={"tool": raw.name, "error": str(parsed.error)}
            )
            return ToolResult(raw.id, raw.name, ToolOutcome.FAILURE, _failure_payload(parsed.error))
        return self.execute(parsed.value, ctx)

    def execute(self, call: ToolInvocation, ctx: RequestContext) -> ToolResult:
        try:
            res = self._dispatch(call, ctx)
        except Exception as ex:  # noqa: BLE001
            logger.exception("tool execution failed", extra={"tool": call.name.value})
            err = ToolExecutionError(f"Tool execution failed: {ex}")
            return ToolResult(call.id, call.name.value, ToolOutcome.FAILURE, _failure_payload(err))
        if res.ok and res.value is not None:
            return ToolResult(call.id, call.name.value, ToolOutcome.SUCCESS, res.value)
        return ToolResult(
            call.id, call.name.value, ToolOutcome.FAILURE, _failure_payload(res.error)
        )

    # ---------- capabilities ----------

    def _dispatch(
        self, call: ToolInvocation, ctx: RequestContext
    ) -> Result[dict[str, Any], DomainError]:
        match call.arguments:
            case GetConversationContext():
                return Result.success({"success": True, "context": ctx.to_payload()})
            case ListDocuments():
                return Result.success(
                    {"success": True, "pdfFiles": [d.to_payload() for d in ctx.documents]}
                )
            case GetDocumentDetails(document_id=doc_id):
                doc = self.documents.get_by_id(doc_id)
                if doc is None:
                    return Result.failure(DocumentNotFoundError("PDF not found"))
                return Result.success({"success": True, "pdfFile": doc.to_payload()})
            case SetCurrentPage(document_id=doc_id, page_number=page):
                checked = self._check_page(doc_id, page)
                if not checked.ok:
                    return Result.failure(checked.error)
                self.contexts.write(ctx.conversation_id, doc_id, page)
                return Result.success(
                    {"success": True, "message": f"Updated to page {page}", "pageNumber": page}
                )
            case SearchDocumentArgs(document_id=doc_id, query=query, top_k=top_k):
                found = self.search.execute(SearchRequest(doc_id, query, top_k))
                if not found.ok or found.value is None:
                    return Result.failure(found.error)
                return Result.success(found.value.to_payload())
            case ReadDocumentText(document_id=doc_id):
                return self._read_text(doc_id)
            case NavigateAndSearch(document_id=doc_id, page_number=page, search_query=query):
                return self._navigate(ctx, doc_id, page, query)

    def _check_page(self, doc_id: str, page: int) -> Result[DocumentRecord, DomainError]:
        doc = self.documents.get_by_id(doc_id)
        if doc is None:
            return Result.failure(DocumentNotFoundError("PDF not found"))
        if page < 1 or page > doc.page_count:
            logger.warning(
                "page out of range",
                extra={"document_id": doc_id, "page": page, "max_pages": doc.page_count},
            )
            return Result.failure(PageOutOfRangeError(requested=page, max_pages=doc.page_count))
        return Result.success(doc)

    def _read_text(self, doc_id: str) -> Result[dict[str, Any], DomainError]:
        doc = self.documents.get_by_id(doc_id)
        if doc is None:
            return Result.failure(DocumentNotFoundError("PDF not found"))
        extracted = self.extractor.extract(doc)
        if not extracted.ok or extracted.value is None:
            return Result.failure(extracted.error)
        return Result.success(
            {
                "success": True,
                "content": extracted.value.text or "No text content found",
                "filename": doc.display_name,
                "pageCount": extracted.value.page_count or doc.page_count,
            }
        )

    def _navigate(
        self, ctx: RequestContext, doc_id: str, page: int, query: str | None
    ) -> Result[dict[str, Any], DomainError]:
        checked = self._check_page(doc_id, page)
        if not checked.ok:
            return Result.failure(checked.error)
        self.contexts.write(ctx.conversation_id, doc_id, page)

        search_results: dict[str, Any] | None = None
        if query:
            found = self.search.execute(SearchRequest(doc_id, query, 3))
            search_results = (
                found.value.to_payload()
                if found.ok and found.value is not None
                else _failure_payload(found.error)
            )

        return Result.success(
            {
                "success": True,
                "action": "navigate",
                "pageNumber": page,
                "searchResults": search_results,
                "message": f"Navigate to page {page}",
            }
        )
