"""Contract tests for the OpenAI chat and embedding adapters with a fake client."""

from types import SimpleNamespace

import pytest

from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.application.ports.llm_port import ChatMessage, RawToolCall, ToolSpec
from pagecite.domain.errors import LLMError
from pagecite.infrastructure.embeddings.openai_embedding_adapter import (
    NullEmbeddingAdapter,
    OpenAIEmbeddingAdapter,
)
from pagecite.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter


class _FakeCompletions:
    def __init__(self, response=None, error=None):  # type: ignore[no-untyped-def]
        self.response = response
        self.error = error
        self.kwargs: dict = {}

    def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


class _FakeChatClient:
    def __init__(self, completions: _FakeCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)


class _FakeEmbeddings:
    def __init__(self, data=None, error=None):  # type: ignore[no-untyped-def]
        self.data = data or []
        self.error = error
        self.calls = 0

    def create(self, model, input):  # type: ignore[no-untyped-def]  # noqa: A002
        self.calls += 1
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


def _completion(content, tool_calls=None, finish_reason="stop"):  # type: ignore[no-untyped-def]
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)],
        usage=SimpleNamespace(total_tokens=42),
    )


def _tool_call(id_: str, name: str, arguments: str):  # type: ignore[no-untyped-def]
    return SimpleNamespace(id=id_, function=SimpleNamespace(name=name, arguments=arguments))


SPEC = ToolSpec(name="search_document", description="Search", parameters={"type": "object"})


class TestOpenAIChatAdapter:
    def test_sends_system_first_and_tools_as_functions(self) -> None:
        completions = _FakeCompletions(_completion("Answer (p. 1)."))
        adapter = OpenAIChatAdapter(api_key="sk-test", model="gpt-test", max_tokens=256)
        adapter._client = _FakeChatClient(completions)

        resp = adapter.invoke(
            "SYSTEM", [ChatMessage(role="user", content="hi")], tools=[SPEC], temperature=0.0
        )

        assert resp.text == "Answer (p. 1)."
        assert resp.usage_tokens == 42
        kwargs = completions.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.0
        assert kwargs["messages"] == [
            {"role": "system", "content": "SYSTEM"},
            {"role": "user", "content": "hi"},
        ]
        assert kwargs["tools"] == [
            {
                "type": "function",
                "function": {
                    "name": "search_document",
                    "description": "Search",
                    "parameters": {"type": "object"},
                },
            }
        ]
        assert kwargs["tool_choice"] == "auto"

    def test_plain_generation_sends_no_tools(self) -> None:
        completions = _FakeCompletions(_completion("ok"))
        adapter = OpenAIChatAdapter(api_key="sk-test")
        adapter._client = _FakeChatClient(completions)

        adapter.invoke("SYSTEM", [ChatMessage(role="user", content="hi")])

        assert "tools" not in completions.kwargs
        assert "tool_choice" not in completions.kwargs

    def test_tool_calls_are_mapped(self) -> None:
        completions = _FakeCompletions(
            _completion(
                None,
                tool_calls=[_tool_call("call_1", "search_document", '{"query": "x"}')],
                finish_reason="tool_calls",
            )
        )
        adapter = OpenAIChatAdapter(api_key="sk-test")
        adapter._client = _FakeChatClient(completions)

        resp = adapter.invoke("SYSTEM", [ChatMessage(role="user", content="hi")], tools=[SPEC])

        assert resp.text == ""
        assert resp.finish_reason == "tool_calls"
        assert resp.tool_calls == (
            RawToolCall(id="call_1", name="search_document", arguments='{"query": "x"}'),
        )

    def test_client_errors_become_llm_error(self) -> None:
        adapter = OpenAIChatAdapter(api_key="sk-test")
        adapter._client = _FakeChatClient(_FakeCompletions(error=RuntimeError("503")))

        with pytest.raises(LLMError, match="503"):
            adapter.invoke("SYSTEM", [ChatMessage(role="user", content="hi")])


class TestOpenAIEmbeddingAdapter:
    def test_is_an_embedding_port(self) -> None:
        assert isinstance(OpenAIEmbeddingAdapter(), EmbeddingPort)
        assert isinstance(NullEmbeddingAdapter(), EmbeddingPort)

    def test_missing_key_is_unavailable_without_network(self) -> None:
        adapter = OpenAIEmbeddingAdapter(api_key="")
        res = adapter.embed(["query", "chunk"])
        assert not res.ok
        assert res.error is not None and res.error.reason == "no_credential"

    def test_vectors_restored_to_input_order(self) -> None:
        fake = _FakeEmbeddings(
            data=[
                SimpleNamespace(index=1, embedding=[0.0, 1.0]),
                SimpleNamespace(index=0, embedding=[1.0, 0.0]),
            ]
        )
        adapter = OpenAIEmbeddingAdapter(api_key="sk-test")
        adapter._client = SimpleNamespace(embeddings=fake)

        res = adapter.embed(["query", "chunk"])

        assert res.ok
        assert res.value == [(1.0, 0.0), (0.0, 1.0)]
        assert fake.calls == 1

    def test_count_mismatch_is_bad_response(self) -> None:
        fake = _FakeEmbeddings(data=[SimpleNamespace(index=0, embedding=[1.0])])
        adapter = OpenAIEmbeddingAdapter(api_key="sk-test")
        adapter._client = SimpleNamespace(embeddings=fake)

        res = adapter.embed(["query", "chunk"])
        assert res.error is not None and res.error.reason == "bad_response"

    @pytest.mark.parametrize(
        "item",
        [
            SimpleNamespace(index=0),
            SimpleNamespace(index=0, embedding=None),
            SimpleNamespace(index=0, embedding=["n/a"]),
        ],
    )
    def test_malformed_item_is_bad_response(self, item) -> None:  # noqa: ANN001
        adapter = OpenAIEmbeddingAdapter(api_key="sk-test")
        adapter._client = SimpleNamespace(embeddings=_FakeEmbeddings(data=[item]))

        res = adapter.embed(["query"])
        assert not res.ok
        assert res.error is not None and res.error.reason == "bad_response"

    def test_unsortable_indexes_are_bad_response(self) -> None:
        data = [
            SimpleNamespace(index=None, embedding=[1.0]),
            SimpleNamespace(index=0, embedding=[0.0]),
        ]
        adapter = OpenAIEmbeddingAdapter(api_key="sk-test")
        adapter._client = SimpleNamespace(embeddings=_FakeEmbeddings(data=data))

        res = adapter.embed(["query", "chunk"])
        assert res.error is not None and res.error.reason == "bad_response"

    def test_transport_error(self) -> None:
        adapter = OpenAIEmbeddingAdapter(api_key="sk-test")
        adapter._client = SimpleNamespace(embeddings=_FakeEmbeddings(error=TimeoutError("slow")))

        res = adapter.embed(["query"])
        assert res.error is not None
        assert res.error.reason == "transport"
        assert "slow" in res.error.detail

    def test_null_adapter_is_always_unavailable(self) -> None:
        res = NullEmbeddingAdapter().embed(["query"])
        assert res.error is not None and res.error.reason == "disabled"
