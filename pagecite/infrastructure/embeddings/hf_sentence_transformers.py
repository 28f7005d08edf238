from __future__ import annotations

from collections.abc import Sequence
from collections.abc import Sequence as SequenceType
from dataclasses import dataclass
from typing import Any, cast

from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.domain.errors import EmbeddingUnavailable
from pagecite.domain.types import Result, Vector

# Lazy import for testability (allow monkeypatching fake SentenceTransformer)
SentenceTransformer: Any | None
try:  # pragma: no cover - exercised via tests with monkeypatch
    from sentence_transformers import SentenceTransformer as _SentenceTransformer
except Exception:  # noqa: BLE001
    SentenceTransformer = None
else:  # pragma: no cover - exercised in integration
    SentenceTransformer = _SentenceTransformer


@dataclass
class HFEmbeddingAdapter(EmbeddingPort):
    """Local Sentence-Transformers embeddings; no API key needed."""

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"  # switch to "cuda" when available
    local_files_only: bool = False  # support offline deployments
    _model: Any | None = None

    def _ensure_model(self) -> Result[Any, EmbeddingUnavailable]:
        if self._model is not None:
            return Result.success(self._model)
        if SentenceTransformer is None:
            return Result.failure(
                EmbeddingUnavailable(
                    reason="model_load", detail="sentence-transformers not installed"
                )
            )
        try:
            self._model = SentenceTransformer(
                self.model_name,
                device=self.device,
                local_files_only=self.local_files_only,
            )
        except Exception as ex:  # noqa: BLE001
            return Result.failure(
                EmbeddingUnavailable(
                    reason="model_load",
                    detail=f"Failed to load embedding model '{self.model_name}': {ex}",
                )
            )
        return Result.success(self._model)

    def embed(self, texts: Sequence[str]) -> Result[list[Vector], EmbeddingUnavailable]:
        loaded = self._ensure_model()
        if not loaded.ok:
            assert loaded.error is not None
            return Result.failure(loaded.error)
        try:
            raw_vectors = loaded.value.encode(
                list(texts),
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            return Result.failure(EmbeddingUnavailable(reason="transport", detail=str(ex)))
        vectors = cast(SequenceType[SequenceType[float]], raw_vectors)
        try:
            converted = [tuple(float(x) for x in vec) for vec in vectors]
        except (TypeError, ValueError) as ex:
            return Result.failure(EmbeddingUnavailable(reason="bad_response", detail=str(ex)))
        return Result.success(converted)
