from __future__ import annotations

from abc import ABC, abstractmethod

from pagecite.domain.models import PageContext


class ContextStorePort(ABC):
    """Port for the per-conversation viewing position.

    The current-page pointer is overwritten by every write (last writer wins);
    callers never read-modify-write it.
    """

    @abstractmethod
    def get(self, conversation_id: str) -> PageContext:
        """Return the stored context, or an empty one for unknown conversations."""
        ...

    @abstractmethod
    def write(self, conversation_id: str, document_id: str, current_page: int) -> PageContext:
        """Make ``document_id`` active at ``current_page`` and return the new context."""
        ...
