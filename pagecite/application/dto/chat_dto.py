# pagecite/application/dto/chat_dto.py
from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pagecite.application.ports.llm_port import ChatMessage, RawToolCall
from pagecite.domain.models import DocumentRecord

if TYPE_CHECKING:
    from pagecite.application.tools.catalog import ToolResult


@dataclass(frozen=True)
class ChatRequest:
    """
    DTO for one inbound question.

    - conversation_id: id of the chat the question belongs to
    - messages: full role-tagged history, newest last
    - current_document_id: document open in the viewer, if any
    - current_page: page shown in the viewer, if known
    """

    conversation_id: str
    messages: Sequence[ChatMessage]
    current_document_id: str | None = None
    current_page: int | None = None


@dataclass(frozen=True)
class ChatReply:
    """Produced artifact: the answer text (never empty) and the raw tool calls."""

    message: str
    tool_calls: list[RawToolCall] = field(default_factory=list)


@dataclass(frozen=True)
class ConversationTurn:
    """Role-tagged messages fed to the model for one request. Never mutated."""

    messages: tuple[ChatMessage, ...] = ()

    @classmethod
    def from_messages(cls, messages: Sequence[ChatMessage]) -> ConversationTurn:
        return cls(tuple(m for m in messages if m.content))

    def last_user_query(self) -> str:
        return next((m.content for m in reversed(self.messages) if m.role == "user"), "")

    def with_tool_results(self, results: Sequence[ToolResult]) -> ConversationTurn:
        """New turn with a synthetic assistant message carrying the tool results."""
        body = json.dumps([r.to_payload() for r in results], ensure_ascii=False, default=str)
        return ConversationTurn(self.messages + (ChatMessage(role="assistant", content=body),))


@dataclass(frozen=True)
class RequestContext:
    """Everything the components of one request may read.

    Built once at the start of a request; page changes go to the context
    store, never into this value.
    """

    conversation_id: str
    turn: ConversationTurn
    active_document: DocumentRecord | None = None
    current_page: int | None = None
    documents: tuple[DocumentRecord, ...] = ()

    @property
    def active_document_id(self) -> str | None:
        return self.active_document.id if self.active_document else None

    def to_payload(self) -> dict[str, Any]:
        doc = self.active_document
        return {
            "conversationId": self.conversation_id,
            "messageCount": len(self.turn.messages),
            "pdfContext": (
                {
                    "pdfId": doc.id,
                    "filename": doc.display_name,
                    "currentPage": self.current_page or 1,
                    "totalPages": doc.page_count,
                }
                if doc
                else None
            ),
        }
