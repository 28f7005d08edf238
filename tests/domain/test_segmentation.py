"""Domain tests for page segmentation."""

from pagecite.domain.models import Chunk
from pagecite.domain.services.segmentation import segment


def test_form_feeds_split_strictly_and_win_over_declared_count():
    text = "Intro page.\fSecond page.\fLast page."
    chunks = segment(text, declared_page_count=10)
    assert [c.page for c in chunks] == [1, 2, 3]
    assert [c.text for c in chunks] == ["Intro page.", "Second page.", "Last page."]


def test_empty_page_between_form_feeds_is_kept():
    chunks = segment("a\f\fc", declared_page_count=3)
    assert [c.text for c in chunks] == ["a", "", "c"]


def test_empty_text_gives_single_empty_chunk():
    assert segment("", declared_page_count=5) == [Chunk(page=1, text="")]


def test_estimated_pages_cover_text_exactly():
    sentence = "The device ships with a charger. "
    text = sentence * 150  # ~5000 chars, no form feeds
    chunks = segment(text, declared_page_count=5)

    assert [c.page for c in chunks] == [1, 2, 3, 4, 5]
    assert "".join(c.text for c in chunks) == text


def test_non_positive_page_count_means_one_page():
    chunks = segment("one two three", declared_page_count=0)
    assert chunks == [Chunk(page=1, text="one two three")]

    chunks = segment("one two three", declared_page_count=-4)
    assert len(chunks) == 1


def test_boundary_moves_to_nearest_sentence_end():
    text = "a" * 90 + ". " + "b" * 108  # 200 chars, naive cut at 100
    chunks = segment(text, declared_page_count=2, window=50)
    assert chunks[0].text == "a" * 90 + "."
    assert chunks[1].text == " " + "b" * 108


def test_boundary_falls_back_to_paragraph_break():
    text = "a" * 95 + "\n\n" + "b" * 103
    chunks = segment(text, declared_page_count=2, window=50)
    assert chunks[0].text == "a" * 95 + "\n\n"
    assert chunks[1].text == "b" * 103


def test_boundary_stays_naive_without_terminators():
    text = "x" * 200
    chunks = segment(text, declared_page_count=2, window=50)
    assert [len(c.text) for c in chunks] == [100, 100]


def test_terminator_outside_window_is_ignored():
    text = "a" * 10 + ". " + "b" * 188
    chunks = segment(text, declared_page_count=2, window=20)
    assert len(chunks[0].text) == 100


def test_last_page_absorbs_remainder():
    text = "x" * 103
    chunks = segment(text, declared_page_count=2, window=10)
    assert len(chunks[0].text) == 51
    assert len(chunks[1].text) == 52


def test_more_pages_than_characters_still_covers_text():
    chunks = segment("abc", declared_page_count=5)
    assert len(chunks) == 5
    assert "".join(c.text for c in chunks) == "abc"
