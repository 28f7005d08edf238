"""HTTP API for chat, document search and viewer context.

Thin delegation to the use cases; every failure becomes a JSON body.
"""

import logging
from typing import Any

try:
    from fastapi import FastAPI, HTTPException, Query, Request
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel, Field
except ImportError as err:
    raise ImportError("FastAPI not installed. Install with: pip install 'pagecite[http]'") from err

from pagecite.application.dto.chat_dto import ChatRequest
from pagecite.application.dto.search_dto import SearchRequest
from pagecite.application.ports.llm_port import ChatMessage
from pagecite.config.composition import Container, build_container
from pagecite.config.logging_config import configure_logging
from pagecite.domain.errors import DocumentNotFoundError, PageOutOfRangeError, ValidationError
from pagecite.domain.services.citations import APOLOGY_MESSAGE

logger = logging.getLogger(__name__)


# Pydantic models for request/response validation
class MessageModel(BaseModel):
    role: str = Field(pattern="^(user|assistant)$")
    content: str


class ChatRequestModel(BaseModel):
    """Request model for /v1/chat endpoint."""

    conversation_id: str
    messages: list[MessageModel]
    current_document_id: str | None = None
    current_page: int | None = None


class ChatResponseModel(BaseModel):
    """Response model for /v1/chat endpoint."""

    message: str
    tool_calls: list[dict[str, Any]] = []


class RegisterDocumentModel(BaseModel):
    """Request model for /v1/documents endpoint (file already on the server)."""

    path: str
    document_id: str | None = None
    display_name: str | None = None
    conversation_id: str | None = None


class DocumentModel(BaseModel):
    id: str
    display_name: str
    page_count: int


class SearchRequestModel(BaseModel):
    """Request model for /v1/documents/search endpoint."""

    document_id: str
    query: str
    top_k: int | None = None  # defaults to SEARCH_TOP_K


class SnippetModel(BaseModel):
    page: int
    snippet: str


class SearchResponseModel(BaseModel):
    success: bool
    results: list[SnippetModel] = []
    total_pages: int = 0


class AssociateRequestModel(BaseModel):
    document_id: str
    conversation_id: str


class ContextUpdateModel(BaseModel):
    conversation_id: str
    document_id: str
    current_page: int


class ContextResponseModel(BaseModel):
    conversation_id: str
    active_document_id: str | None = None
    current_page: int | None = None
    updated_at: str | None = None


# Global state (initialized on startup)
app = FastAPI(title="pagecite API", version="0.1.0")
container: Container | None = None


def _container() -> Container:
    global container
    if container is None:
        container = build_container()
    return container


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal error"})


@app.on_event("startup")
async def startup_event() -> None:
    """Configure logging and build the container with in-memory stores."""
    configure_logging()
    _container()


@app.post("/v1/chat", response_model=ChatResponseModel)
def chat(req: ChatRequestModel) -> ChatResponseModel:
    """Answer the last user message about the conversation's active document.

    Example:
        POST /v1/chat
        {
            "conversation_id": "c1",
            "messages": [{"role": "user", "content": "What is the warranty period?"}],
            "current_document_id": "manual",
            "current_page": 1
        }
    """
    dto = ChatRequest(
        conversation_id=req.conversation_id,
        messages=[ChatMessage(role=m.role, content=m.content) for m in req.messages],
        current_document_id=req.current_document_id,
        current_page=req.current_page,
    )
    try:
        result = _container().get_answer_use_case().execute(dto)
    except Exception:  # noqa: BLE001
        logger.exception("chat request failed")
        return ChatResponseModel(message=APOLOGY_MESSAGE)

    if not result.ok or result.value is None:
        raise HTTPException(status_code=400, detail=str(result.error))
    reply = result.value
    return ChatResponseModel(
        message=reply.message,
        tool_calls=[
            {"id": c.id, "name": c.name, "arguments": c.arguments} for c in reply.tool_calls
        ],
    )


@app.post("/v1/documents", response_model=DocumentModel)
def register_document(req: RegisterDocumentModel) -> DocumentModel:
    result = _container().get_register_use_case().execute(
        req.path,
        document_id=req.document_id,
        display_name=req.display_name,
        conversation_id=req.conversation_id,
    )
    if not result.ok or result.value is None:
        status = 400 if isinstance(result.error, ValidationError) else 422
        raise HTTPException(status_code=status, detail=str(result.error))
    doc = result.value
    return DocumentModel(id=doc.id, display_name=doc.display_name, page_count=doc.page_count)


@app.get("/v1/documents", response_model=list[DocumentModel])
def list_documents(conversation_id: str = Query(...)) -> list[DocumentModel]:
    docs = _container().documents.list_for_conversation(conversation_id)
    return [
        DocumentModel(id=d.id, display_name=d.display_name, page_count=d.page_count)
        for d in docs
    ]


@app.post("/v1/documents/search", response_model=SearchResponseModel)
def search_document(req: SearchRequestModel) -> SearchResponseModel:
    c = _container()
    top_k = req.top_k or c.settings.search_top_k
    result = c.get_search_use_case().execute(
        SearchRequest(document_id=req.document_id, query=req.query, top_k=top_k)
    )
    if not result.ok or result.value is None:
        if isinstance(result.error, DocumentNotFoundError):
            raise HTTPException(status_code=404, detail="Not found")
        if isinstance(result.error, ValidationError):
            raise HTTPException(status_code=400, detail=str(result.error))
        raise HTTPException(status_code=500, detail="Extract failed")
    outcome = result.value
    return SearchResponseModel(
        success=True,
        results=[SnippetModel(page=r.page, snippet=r.snippet) for r in outcome.results],
        total_pages=outcome.total_pages,
    )


@app.post("/v1/documents/associate")
def associate_document(req: AssociateRequestModel) -> dict[str, Any]:
    if not _container().documents.associate(req.document_id, req.conversation_id):
        raise HTTPException(status_code=404, detail="Not found")
    return {"success": True}


@app.get("/v1/context/{conversation_id}", response_model=ContextResponseModel)
def get_context(conversation_id: str) -> ContextResponseModel:
    return _context_model(_container().contexts.get(conversation_id))


@app.post("/v1/context", response_model=ContextResponseModel)
def update_context(req: ContextUpdateModel) -> ContextResponseModel:
    c = _container()
    doc = c.documents.get_by_id(req.document_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Not found")
    if not 1 <= req.current_page <= doc.page_count:
        err = PageOutOfRangeError(requested=req.current_page, max_pages=doc.page_count)
        raise HTTPException(
            status_code=422,
            detail={"success": False, "error": str(err), "maxPages": err.max_pages},
        )
    return _context_model(c.contexts.write(req.conversation_id, doc.id, req.current_page))


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "pagecite"}


def _context_model(ctx: Any) -> ContextResponseModel:
    return ContextResponseModel(
        conversation_id=ctx.conversation_id,
        active_document_id=ctx.active_document_id,
        current_page=ctx.current_page,
        updated_at=ctx.updated_at.isoformat() if ctx.updated_at else None,
    )
