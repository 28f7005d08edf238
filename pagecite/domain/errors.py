"""Domain errors (typed).

Adapters translate library exceptions into this family; use cases carry them
inside ``Result`` values instead of raising.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


@dataclass(frozen=True)
class EmbeddingUnavailable(DomainError):
    """Embedding provider could not be used for this request.

    A routing signal for the ranker, not a failure to report.
    Reasons: ``no_credential``, ``transport``, ``bad_response``, ``model_load``.
    """

    reason: str
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.reason}: {self.detail}" if self.detail else self.reason


class ExtractionError(DomainError):
    """Document text could not be extracted (missing file, parse failure, empty text)."""


class DocumentNotFoundError(DomainError):
    """No document metadata for the requested id."""


@dataclass(frozen=True)
class PageOutOfRangeError(DomainError):
    """Requested page does not exist in the document."""

    requested: int
    max_pages: int

    def __str__(self) -> str:
        return (
            f"Page {self.requested} does not exist. "
            f"This PDF has only {self.max_pages} pages."
        )


class LLMError(DomainError):
    """LLM backend failed or is misconfigured."""


class ToolExecutionError(DomainError):
    """A capability requested by the model failed to execute."""
