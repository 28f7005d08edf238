# pagecite/application/use_cases/answer_question.py
from __future__ import annotations

import logging

from pagecite.application.dto.chat_dto import (
    ChatReply,
    ChatRequest,
    ConversationTurn,
    RequestContext,
)
from pagecite.application.ports.context_store_port import ContextStorePort
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.use_cases.run_agent_turn import ToolOrchestrator
from pagecite.application.use_cases.verify_citations import GuardrailVerifier
from pagecite.domain.errors import ValidationError
from pagecite.domain.services.citations import APOLOGY_MESSAGE
from pagecite.domain.types import Result

logger = logging.getLogger(__name__)


class AnswerQuestion:
    """
    Application use case answering one chat request about the active document.
    Only this terminal step decides what the user sees when everything else
    came back empty; the message of a successful reply is never empty.
    """

    def __init__(
        self,
        documents: DocumentStorePort,
        contexts: ContextStorePort,
        orchestrator: ToolOrchestrator,
        guardrail: GuardrailVerifier,
    ) -> None:
        self.documents = documents
        self.contexts = contexts
        self.orchestrator = orchestrator
        self.guardrail = guardrail

    def execute(self, req: ChatRequest) -> Result[ChatReply, ValidationError]:
        # 1) Validate
        if not req.conversation_id:
            return Result.failure(ValidationError("conversation id is required"))
        turn = ConversationTurn.from_messages(req.messages)
        if not turn.messages:
            return Result.failure(ValidationError("messages must not be empty"))

        # 2) Record what the viewer shows, then build the request context
        ctx = self._build_context(req, turn)
        logger.info(
            "processing chat request",
            extra={
                "conversation_id": ctx.conversation_id,
                "message_count": len(turn.messages),
                "active_document_id": ctx.active_document_id,
                "current_page": ctx.current_page,
            },
        )

        # 3) Agent turn, 4) guardrail
        outcome = self.orchestrator.run(ctx)
        message = self.guardrail.verify(
            outcome.candidate, ctx.active_document_id, turn.last_user_query()
        )

        # 5) Terminal
        if not message or not message.strip():
            message = APOLOGY_MESSAGE
        return Result.success(ChatReply(message=message, tool_calls=outcome.tool_calls))

    def _build_context(self, req: ChatRequest, turn: ConversationTurn) -> RequestContext:
        if req.current_document_id:
            doc = self.documents.get_by_id(req.current_document_id)
            if doc is not None:
                self.documents.associate(doc.id, req.conversation_id)
                page = req.current_page or 1
                if not 1 <= page <= doc.page_count:
                    page = 1
                self.contexts.write(req.conversation_id, doc.id, page)

        stored = self.contexts.get(req.conversation_id)
        active = (
            self.documents.get_by_id(stored.active_document_id)
            if stored.active_document_id
            else None
        )
        return RequestContext(
            conversation_id=req.conversation_id,
            turn=turn,
            active_document=active,
            current_page=stored.current_page if active else None,
            documents=tuple(self.documents.list_for_conversation(req.conversation_id)),
        )
