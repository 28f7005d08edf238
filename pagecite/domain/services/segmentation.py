from __future__ import annotations

from pagecite.domain.models import Chunk

PAGE_MARKER = "\f"
SENTENCE_END = ". "
PARAGRAPH_BREAK = "\n\n"
DEFAULT_WINDOW = 200


def _nearest(haystack: str, needle: str, lo: int, hi: int, target: int) -> int | None:
    """Index of the occurrence of ``needle`` inside ``haystack[lo:hi]`` closest to ``target``.

    Ties go to the later occurrence.
    """
    best: int | None = None
    idx = haystack.find(needle, lo, hi)
    while idx != -1:
        if best is None or abs(idx - target) <= abs(best - target):
            best = idx
        idx = haystack.find(needle, idx + 1, hi)
    return best


def _boundary(text: str, start: int, naive: int, window: int) -> int:
    lo = max(start, naive - window)
    hi = min(naive + window, len(text))

    sentence = _nearest(text, SENTENCE_END, lo, hi, naive)
    if sentence is not None:
        # keep the period on this page, the space starts the next one
        return sentence + 1
    paragraph = _nearest(text, PARAGRAPH_BREAK, lo, hi, naive)
    if paragraph is not None:
        return paragraph + len(PARAGRAPH_BREAK)
    return naive


def segment(text: str, declared_page_count: int, window: int = DEFAULT_WINDOW) -> list[Chunk]:
    """Split extracted document text into page-aligned chunks.

    Text containing form feeds is split strictly on them and the segment count
    wins over ``declared_page_count``. Otherwise the text is cut into
    ``declared_page_count`` pieces of roughly equal length, each boundary moved
    to the nearest sentence end (or blank line) within ``window`` characters.
    The last page absorbs whatever remains.

    Chunk texts are not trimmed: joining them reproduces ``text`` exactly.
    """
    if not text:
        return [Chunk(page=1, text="")]

    if PAGE_MARKER in text:
        return [Chunk(page=i, text=part) for i, part in enumerate(text.split(PAGE_MARKER), 1)]

    pages = max(1, declared_page_count)
    target = len(text) // pages

    chunks: list[Chunk] = []
    pos = 0
    for page in range(1, pages + 1):
        if page == pages:
            end = len(text)
        else:
            naive = min(pos + target, len(text))
            end = _boundary(text, pos, naive, window)
        chunks.append(Chunk(page=page, text=text[pos:end]))
        pos = end
    return chunks
