"""OpenAI embeddings adapter.

One batched request per ranking call; input order ``[query, chunk_0, ...]``
is restored from the ``index`` of every returned item.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.domain.errors import EmbeddingUnavailable
from pagecite.domain.types import Result, Vector


@dataclass
class OpenAIEmbeddingAdapter(EmbeddingPort):
    api_key: str = ""
    model: str = "text-embedding-3-small"
    base_url: str | None = None

    def __post_init__(self) -> None:
        self._client: Any | None = None

    def embed(self, texts: Sequence[str]) -> Result[list[Vector], EmbeddingUnavailable]:
        if not self.api_key:
            return Result.failure(EmbeddingUnavailable(reason="no_credential"))
        if not texts:
            return Result.success([])

        try:
            if self._client is None:
                module = import_module("openai")
                self._client = module.OpenAI(api_key=self.api_key, base_url=self.base_url)
            resp: Any = self._client.embeddings.create(model=self.model, input=list(texts))
        except Exception as ex:  # noqa: BLE001
            return Result.failure(EmbeddingUnavailable(reason="transport", detail=str(ex)))

        data = list(getattr(resp, "data", None) or [])
        if len(data) != len(texts):
            return Result.failure(
                EmbeddingUnavailable(
                    reason="bad_response",
                    detail=f"expected {len(texts)} embeddings, got {len(data)}",
                )
            )
        try:
            data.sort(key=lambda item: item.index)
            vectors = [tuple(float(x) for x in item.embedding) for item in data]
        except (AttributeError, TypeError, ValueError) as ex:
            return Result.failure(EmbeddingUnavailable(reason="bad_response", detail=str(ex)))
        return Result.success(vectors)


class NullEmbeddingAdapter(EmbeddingPort):
    """Embedding backend for ``EMBEDDING_BACKEND=none``: always unavailable."""

    def embed(self, texts: Sequence[str]) -> Result[list[Vector], EmbeddingUnavailable]:
        return Result.failure(EmbeddingUnavailable(reason="disabled"))
