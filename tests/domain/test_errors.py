"""Tests for typed domain errors."""

from pagecite.domain.errors import (
    DocumentNotFoundError,
    DomainError,
    EmbeddingUnavailable,
    ExtractionError,
    LLMError,
    PageOutOfRangeError,
    ToolExecutionError,
    ValidationError,
)


def test_all_errors_share_domain_base():
    for cls in (
        ValidationError,
        ExtractionError,
        DocumentNotFoundError,
        LLMError,
        ToolExecutionError,
    ):
        assert issubclass(cls, DomainError)
    assert isinstance(EmbeddingUnavailable(reason="transport"), DomainError)
    assert isinstance(PageOutOfRangeError(requested=9, max_pages=5), DomainError)


def test_page_out_of_range_message_names_both_numbers():
    err = PageOutOfRangeError(requested=9, max_pages=5)
    assert err.requested == 9
    assert err.max_pages == 5
    assert str(err) == "Page 9 does not exist. This PDF has only 5 pages."


def test_embedding_unavailable_reason_and_detail():
    assert str(EmbeddingUnavailable(reason="no_credential")) == "no_credential"
    err = EmbeddingUnavailable(reason="transport", detail="timeout")
    assert str(err) == "transport: timeout"
    assert err == EmbeddingUnavailable(reason="transport", detail="timeout")
