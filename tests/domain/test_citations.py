from pagecite.domain.services.citations import (
    NOT_FOUND_MESSAGE,
    cited_pages,
    citations_within,
    format_snippet_answer,
    has_citation,
)


class TestHasCitation:
    def test_detects_inline_citation(self) -> None:
        assert has_citation("The warranty lasts 24 months (p. 3).")

    def test_case_and_spacing_are_lenient(self) -> None:
        assert has_citation("see (P.12)")
        assert has_citation("see (p.   4)")

    def test_plain_page_mentions_do_not_count(self) -> None:
        assert not has_citation("See page 3 for details.")
        assert not has_citation("(p. three)")

    def test_empty_answers(self) -> None:
        assert not has_citation("")
        assert not has_citation(None)

    def test_not_found_sentence_has_no_citation(self) -> None:
        assert not has_citation(NOT_FOUND_MESSAGE)


class TestCitedPages:
    def test_all_cited_pages_in_order(self) -> None:
        assert cited_pages("A (p. 2), B (p. 7) and again (p. 2).") == [2, 7, 2]

    def test_within_bounds(self) -> None:
        assert citations_within("A (p. 1) B (p. 5)", total_pages=5)
        assert not citations_within("A (p. 2) B (p. 7)", total_pages=5)
        assert not citations_within("A (p. 0)", total_pages=5)

    def test_no_citations_is_within_bounds(self) -> None:
        assert citations_within("no citations", total_pages=1)


def test_snippet_answer_quotes_at_most_200_chars():
    answer = format_snippet_answer(2, "x" * 300)
    assert answer == "Based on the PDF content: " + "x" * 200 + "... (p. 2)."
    assert has_citation(answer)


def test_snippet_answer_short_snippet():
    assert format_snippet_answer(1, "Short.") == "Based on the PDF content: Short.... (p. 1)."
