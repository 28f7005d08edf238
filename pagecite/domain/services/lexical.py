# pagecite/domain/services/lexical.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

import re
from collections.abc import Collection

# Latin letters, digits and the CJK unified ideographs block survive tokenization.
_NON_TOKEN = re.compile(r"[^a-z0-9一-龥\s]")


def tokenize(s: str) -> list[str]:
    return _NON_TOKEN.sub(" ", s.lower()).split()


def lexical_score(query_tokens: Collection[str], text: str) -> float:
    """
    Hit-rate of ``text`` against the query vocabulary.

    Counts every chunk token that appears in the query token set and divides
    by the chunk length, so short chunks dense in query terms win. This is not
    a normalized similarity; repeated terms count every time.
    """
    tokens = tokenize(text)
    hits = sum(1 for t in tokens if t in query_tokens)
    return hits / max(1, len(tokens))
