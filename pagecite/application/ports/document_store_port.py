"""Document metadata store port.

Relational persistence of documents lives outside this package; the core only
reads metadata and records which conversation a document belongs to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pagecite.domain.models import DocumentRecord


class DocumentStorePort(ABC):
    @abstractmethod
    def add(self, record: DocumentRecord, conversation_id: str | None = None) -> DocumentRecord:
        """Store metadata, optionally attaching the document to a conversation."""
        ...

    @abstractmethod
    def get_by_id(self, document_id: str) -> DocumentRecord | None:
        """Return the document's metadata, or None when unknown."""
        ...

    @abstractmethod
    def list_for_conversation(self, conversation_id: str) -> list[DocumentRecord]:
        """Documents associated with a conversation, most recently associated first."""
        ...

    @abstractmethod
    def associate(self, document_id: str, conversation_id: str) -> bool:
        """Attach a document to a conversation. False when the document is unknown."""
        ...
