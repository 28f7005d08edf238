import math

import pytest

import pagecite.infrastructure.embeddings.hf_sentence_transformers as hf_mod


class _FakeST:
    """Stand-in for sentence_transformers.SentenceTransformer."""

    def __init__(self, *args, **kwargs):  # noqa: ANN001
        self.args = args
        self.kwargs = kwargs

    def encode(
        self,
        inputs,
        normalize_embeddings=True,
        convert_to_numpy=True,
        show_progress_bar=False,
    ):
        def _vec(text):
            vec = [float(len(text)), 1.0, 0.0]
            if normalize_embeddings:
                norm_val = max(math.sqrt(sum(x * x for x in vec)), 1e-8)
                vec = [x / norm_val for x in vec]
            return vec

        return [_vec(t) for t in inputs]


class _BrokenST:
    def __init__(self, *args, **kwargs):  # noqa: ANN001
        raise OSError("model not cached")


def test_embed_returns_normalized_tuples(monkeypatch):
    monkeypatch.setattr(hf_mod, "SentenceTransformer", _FakeST)
    adapter = hf_mod.HFEmbeddingAdapter(device="cpu")

    res = adapter.embed(["Hallo Welt", "zwei"])

    assert res.ok and res.value is not None
    assert len(res.value) == 2
    for vec in res.value:
        assert isinstance(vec, tuple)
        assert 0.999 < math.sqrt(sum(x * x for x in vec)) < 1.001


def test_model_is_loaded_once(monkeypatch):
    loads: list[str] = []

    class _CountingST(_FakeST):
        def __init__(self, name, **kwargs):  # noqa: ANN001
            loads.append(name)
            super().__init__(name, **kwargs)

    monkeypatch.setattr(hf_mod, "SentenceTransformer", _CountingST)
    adapter = hf_mod.HFEmbeddingAdapter(model_name="some/model", local_files_only=True)
    adapter.embed(["a"])
    adapter.embed(["b"])

    assert loads == ["some/model"]
    assert adapter._model.kwargs["local_files_only"] is True


@pytest.mark.parametrize("factory", [None, _BrokenST])
def test_unloadable_model_is_unavailable(monkeypatch, factory):
    monkeypatch.setattr(hf_mod, "SentenceTransformer", factory)
    res = hf_mod.HFEmbeddingAdapter().embed(["a"])
    assert not res.ok
    assert res.error is not None and res.error.reason == "model_load"


def test_non_numeric_vectors_are_bad_response(monkeypatch):
    class _GarbageST(_FakeST):
        def encode(self, inputs, **kwargs):  # noqa: ANN001
            return [["not-a-number"] for _ in inputs]

    monkeypatch.setattr(hf_mod, "SentenceTransformer", _GarbageST)
    res = hf_mod.HFEmbeddingAdapter().embed(["a"])
    assert not res.ok
    assert res.error is not None and res.error.reason == "bad_response"
