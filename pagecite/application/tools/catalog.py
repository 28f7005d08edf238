"""Capability catalog exposed to the model.

Each capability is a frozen dataclass carrying its own typed arguments;
``ToolArguments`` is the closed union of them. The executor dispatches with
``match`` over these classes, so adding a capability means adding a class,
a spec and a case.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pagecite.application.ports.llm_port import RawToolCall, ToolSpec
from pagecite.domain.errors import ValidationError
from pagecite.domain.types import Result


class ToolName(str, Enum):
    GET_CONVERSATION_CONTEXT = "get_conversation_context"
    LIST_DOCUMENTS = "list_documents"
    GET_DOCUMENT_DETAILS = "get_document_details"
    SET_CURRENT_PAGE = "set_current_page"
    SEARCH_DOCUMENT = "search_document"
    READ_DOCUMENT_TEXT = "read_document_text"
    NAVIGATE_AND_SEARCH = "navigate_and_search"


# ---------- Argument records ----------


@dataclass(frozen=True)
class GetConversationContext:
    pass


@dataclass(frozen=True)
class ListDocuments:
    pass


@dataclass(frozen=True)
class GetDocumentDetails:
    document_id: str


@dataclass(frozen=True)
class SetCurrentPage:
    document_id: str
    page_number: int


@dataclass(frozen=True)
class SearchDocumentArgs:
    document_id: str
    query: str
    top_k: int = 3


@dataclass(frozen=True)
class ReadDocumentText:
    document_id: str


@dataclass(frozen=True)
class NavigateAndSearch:
    document_id: str
    page_number: int
    search_query: str | None = None


ToolArguments = (
    GetConversationContext
    | ListDocuments
    | GetDocumentDetails
    | SetCurrentPage
    | SearchDocumentArgs
    | ReadDocumentText
    | NavigateAndSearch
)


@dataclass(frozen=True)
class ToolInvocation:
    id: str
    name: ToolName
    arguments: ToolArguments


class ToolOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ToolResult:
    tool_call_id: str
    name: str
    outcome: ToolOutcome
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome is ToolOutcome.SUCCESS

    def to_payload(self) -> dict[str, Any]:
        return {
            "toolCallId": self.tool_call_id,
            "toolName": self.name,
            "outcome": self.outcome.value,
            "result": self.payload,
        }


# ---------- Specs advertised to the model ----------

_DOC_ID = {"type": "string", "description": "ID of the PDF file"}
_PAGE = {"type": "integer", "description": "Page number to navigate to (1-based)"}


def _object(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name=ToolName.GET_CONVERSATION_CONTEXT.value,
        description="Get the current conversation context including PDF information",
        parameters=_object({}, []),
    ),
    ToolSpec(
        name=ToolName.LIST_DOCUMENTS.value,
        description="Get PDF files associated with this chat",
        parameters=_object({}, []),
    ),
    ToolSpec(
        name=ToolName.GET_DOCUMENT_DETAILS.value,
        description="Get detailed information about a specific PDF file",
        parameters=_object({"document_id": _DOC_ID}, ["document_id"]),
    ),
    ToolSpec(
        name=ToolName.SET_CURRENT_PAGE.value,
        description="Update the current page being viewed in a PDF",
        parameters=_object(
            {"document_id": _DOC_ID, "page_number": _PAGE},
            ["document_id", "page_number"],
        ),
    ),
    ToolSpec(
        name=ToolName.SEARCH_DOCUMENT.value,
        description="Search the PDF and return the top snippets with page numbers",
        parameters=_object(
            {
                "document_id": _DOC_ID,
                "query": {"type": "string", "description": "What to look for"},
                "top_k": {"type": "integer", "description": "Number of snippets (default 3)"},
            },
            ["document_id", "query"],
        ),
    ),
    ToolSpec(
        name=ToolName.READ_DOCUMENT_TEXT.value,
        description="Read the actual text content from a PDF file",
        parameters=_object({"document_id": _DOC_ID}, ["document_id"]),
    ),
    ToolSpec(
        name=ToolName.NAVIGATE_AND_SEARCH.value,
        description=(
            "Navigate the PDF viewer to a page and optionally search the PDF in the same step. "
            "ALWAYS use this tool when answering questions about PDF content."
        ),
        parameters=_object(
            {
                "document_id": _DOC_ID,
                "page_number": _PAGE,
                "search_query": {
                    "type": "string",
                    "description": "Search query to find relevant content",
                },
            },
            ["document_id", "page_number"],
        ),
    ),
)


# ---------- Parsing model output ----------


def _str(args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{key}' must be a non-empty string")
    return value


def _opt_str(args: dict[str, Any], key: str) -> str | None:
    value = args.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string")
    return value


def _int(args: dict[str, Any], key: str, default: int | None = None) -> int:
    value = args.get(key, default)
    # models sometimes send 3.0 or "3"
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f"'{key}' must be an integer") from None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{key}' must be an integer")
    return value


def _arguments(name: ToolName, args: dict[str, Any]) -> ToolArguments:
    match name:
        case ToolName.GET_CONVERSATION_CONTEXT:
            return GetConversationContext()
        case ToolName.LIST_DOCUMENTS:
            return ListDocuments()
        case ToolName.GET_DOCUMENT_DETAILS:
            return GetDocumentDetails(document_id=_str(args, "document_id"))
        case ToolName.SET_CURRENT_PAGE:
            return SetCurrentPage(
                document_id=_str(args, "document_id"),
                page_number=_int(args, "page_number"),
            )
        case ToolName.SEARCH_DOCUMENT:
            return SearchDocumentArgs(
                document_id=_str(args, "document_id"),
                query=_str(args, "query"),
                top_k=_int(args, "top_k", default=3),
            )
        case ToolName.READ_DOCUMENT_TEXT:
            return ReadDocumentText(document_id=_str(args, "document_id"))
        case ToolName.NAVIGATE_AND_SEARCH:
            return NavigateAndSearch(
                document_id=_str(args, "document_id"),
                page_number=_int(args, "page_number"),
                search_query=_opt_str(args, "search_query"),
            )


def parse_tool_call(raw: RawToolCall) -> Result[ToolInvocation, ValidationError]:
    """Validate a model tool call into a typed invocation.

    Unknown tool names, malformed JSON and missing or mistyped fields come
    back as ``ValidationError`` failures.
    """
    try:
        name = ToolName(raw.name)
    except ValueError:
        return Result.failure(ValidationError(f"unknown tool '{raw.name}'"))

    try:
        args = json.loads(raw.arguments or "{}")
    except json.JSONDecodeError as ex:
        return Result.failure(ValidationError(f"arguments are not valid JSON: {ex}"))
    if not isinstance(args, dict):
        return Result.failure(ValidationError("arguments must be a JSON object"))

    try:
        arguments = _arguments(name, args)
    except ValidationError as ex:
        return Result.failure(ex)
    return Result.success(ToolInvocation(id=raw.id, name=name, arguments=arguments))
