# pagecite/application/use_cases/verify_citations.py
from __future__ import annotations

import logging

from pagecite.application.dto.search_dto import SearchRequest
from pagecite.application.ports.llm_port import ChatMessage, LLMPort
from pagecite.application.prompts import build_guardrail_prompt
from pagecite.application.use_cases.search_document import SearchDocument
from pagecite.domain.errors import LLMError
from pagecite.domain.services.citations import NOT_FOUND_MESSAGE, citations_within, has_citation

logger = logging.getLogger(__name__)

GUARDRAIL_TOP_K = 3


class GuardrailVerifier:
    """
    Post-hoc citation check with a single corrective regeneration.

    Best effort: when retrieval or regeneration fails the candidate is kept,
    so the guardrail never blocks a response. At most one extra model call.
    """

    def __init__(self, search: SearchDocument, llm: LLMPort) -> None:
        self.search = search
        self.llm = llm

    def verify(
        self, candidate: str, active_document_id: str | None, last_user_query: str
    ) -> str:
        if not active_document_id or has_citation(candidate):
            return candidate

        found = self.search.execute(
            SearchRequest(active_document_id, last_user_query, GUARDRAIL_TOP_K)
        )
        if not found.ok or found.value is None or not found.value.results:
            logger.info(
                "guardrail retrieval found nothing, keeping candidate",
                extra={"document_id": active_document_id, "error": str(found.error)},
            )
            return candidate

        outcome = found.value
        try:
            regen = self.llm.invoke(
                build_guardrail_prompt(outcome.results),
                [ChatMessage(role="user", content=last_user_query)],
                tools=(),
                temperature=0.0,
            )
        except LLMError as ex:
            logger.error("guarded regeneration failed", extra={"error": str(ex)})
            return candidate

        text = regen.text.strip()
        if not text:
            return candidate
        if not citations_within(text, outcome.total_pages):
            logger.warning(
                "regenerated answer cites pages outside the document",
                extra={"document_id": active_document_id, "total_pages": outcome.total_pages},
            )
            return NOT_FOUND_MESSAGE
        logger.info("answer regenerated with citations", extra={"document_id": active_document_id})
        return text
