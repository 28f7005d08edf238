"""Relevance ranking of page chunks against a query.

Two strategies composed once: the semantic strategy (embedding cosine) is
tried first and may report itself unavailable; the lexical strategy always
answers. Unavailability is a routing signal and never reaches the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.domain.errors import EmbeddingUnavailable
from pagecite.domain.models import SNIPPET_MAX_CHARS, Chunk, RankedSnippet
from pagecite.domain.services.lexical import lexical_score, tokenize
from pagecite.domain.similarity import cosine
from pagecite.domain.types import Result

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3

# (chunk index, score), best first
Ordering = list[tuple[int, float]]


class RankingStrategy(Protocol):
    def order(self, query: str, chunks: Sequence[Chunk]) -> Result[Ordering, EmbeddingUnavailable]:
        ...


class LexicalStrategy:
    """Token hit-rate scoring; needs no external service and never fails."""

    def order(self, query: str, chunks: Sequence[Chunk]) -> Result[Ordering, EmbeddingUnavailable]:
        query_tokens = set(tokenize(query))
        scored = [(i, lexical_score(query_tokens, c.text)) for i, c in enumerate(chunks)]
        # sorted() is stable: ties keep page order
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return Result.success(scored)


class SemanticStrategy:
    """Cosine similarity of chunk embeddings to the query embedding."""

    def __init__(self, embedding: EmbeddingPort) -> None:
        self.embedding = embedding

    def order(self, query: str, chunks: Sequence[Chunk]) -> Result[Ordering, EmbeddingUnavailable]:
        res = self.embedding.embed([query, *(c.text for c in chunks)])
        if not res.ok:
            assert res.error is not None
            return Result.failure(res.error)

        vectors = res.value or []
        if len(vectors) != len(chunks) + 1:
            return Result.failure(
                EmbeddingUnavailable(
                    reason="bad_response",
                    detail=f"expected {len(chunks) + 1} vectors, got {len(vectors)}",
                )
            )

        q_vec, chunk_vecs = vectors[0], vectors[1:]
        scored = [(i, cosine(q_vec, v)) for i, v in enumerate(chunk_vecs)]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return Result.success(scored)


class FallbackStrategy:
    """Primary strategy with an always-available fallback."""

    def __init__(self, primary: RankingStrategy, fallback: LexicalStrategy) -> None:
        self.primary = primary
        self.fallback = fallback

    def order(self, query: str, chunks: Sequence[Chunk]) -> Result[Ordering, EmbeddingUnavailable]:
        res = self.primary.order(query, chunks)
        if res.ok:
            return res
        logger.info(
            "semantic ranking unavailable, using lexical ranking",
            extra={"reason": str(res.error)},
        )
        return self.fallback.order(query, chunks)


class RelevanceRanker:
    """Ranks chunks and cuts the winners down to citable snippets."""

    def __init__(
        self,
        embedding: EmbeddingPort | None = None,
        snippet_max_chars: int = SNIPPET_MAX_CHARS,
    ) -> None:
        lexical = LexicalStrategy()
        self.strategy: RankingStrategy = (
            FallbackStrategy(SemanticStrategy(embedding), lexical) if embedding else lexical
        )
        self.snippet_max_chars = snippet_max_chars

    def rank(
        self, query: str, chunks: Sequence[Chunk], top_k: int = DEFAULT_TOP_K
    ) -> list[RankedSnippet]:
        """Return at most ``top_k`` snippets, most relevant first.

        ``top_k`` is clamped into ``[1, len(chunks)]``. Strategies see full
        chunk text; truncation to ``snippet_max_chars`` happens afterwards.
        """
        if not chunks:
            return []
        k = min(max(1, top_k), len(chunks))

        res = self.strategy.order(query, chunks)
        ordering = res.value if res.ok and res.value is not None else []

        return [
            RankedSnippet(
                page=chunks[i].page,
                snippet=chunks[i].text.strip()[: self.snippet_max_chars],
                score=score,
            )
            for i, score in ordering[:k]
        ]
