"""In-memory document and context stores.

Stand-ins for the relational persistence that lives outside this package.
Single-process only; contents vanish with the process.
"""

from __future__ import annotations

from dataclasses import replace

from pagecite.application.ports.clock_port import ClockPort
from pagecite.application.ports.context_store_port import ContextStorePort
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.domain.models import DocumentRecord, PageContext


class InMemoryDocumentStore(DocumentStorePort):
    def __init__(self) -> None:
        self._docs: dict[str, DocumentRecord] = {}
        self._by_conversation: dict[str, list[str]] = {}

    def add(self, record: DocumentRecord, conversation_id: str | None = None) -> DocumentRecord:
        self._docs[record.id] = record
        if conversation_id:
            self.associate(record.id, conversation_id)
        return record

    def get_by_id(self, document_id: str) -> DocumentRecord | None:
        return self._docs.get(document_id)

    def list_for_conversation(self, conversation_id: str) -> list[DocumentRecord]:
        ids = self._by_conversation.get(conversation_id, [])
        return [self._docs[i] for i in reversed(ids) if i in self._docs]

    def associate(self, document_id: str, conversation_id: str) -> bool:
        if document_id not in self._docs:
            return False
        ids = [i for i in self._by_conversation.get(conversation_id, []) if i != document_id]
        ids.append(document_id)
        self._by_conversation[conversation_id] = ids
        return True


class InMemoryContextStore(ContextStorePort):
    """Last writer wins: each write replaces the whole context value."""

    def __init__(self, clock: ClockPort) -> None:
        self.clock = clock
        self._contexts: dict[str, PageContext] = {}

    def get(self, conversation_id: str) -> PageContext:
        return self._contexts.get(conversation_id) or PageContext(conversation_id=conversation_id)

    def write(self, conversation_id: str, document_id: str, current_page: int) -> PageContext:
        ctx = replace(
            self.get(conversation_id),
            active_document_id=document_id,
            current_page=current_page,
            updated_at=self.clock.now(),
        )
        self._contexts[conversation_id] = ctx
        return ctx
