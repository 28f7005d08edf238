"""Tests for parsing model tool calls into typed invocations."""

import json

from pagecite.application.ports.llm_port import RawToolCall
from pagecite.application.tools.catalog import (
    TOOL_SPECS,
    GetConversationContext,
    NavigateAndSearch,
    SearchDocumentArgs,
    SetCurrentPage,
    ToolName,
    parse_tool_call,
)
from pagecite.domain.errors import ValidationError


def call(name: str, args: object) -> RawToolCall:
    return RawToolCall(id="call_1", name=name, arguments=json.dumps(args))


class TestParseToolCall:
    def test_navigate_with_search(self) -> None:
        res = parse_tool_call(
            call(
                "navigate_and_search",
                {"document_id": "d1", "page_number": 3, "search_query": "x"},
            )
        )
        assert res.ok and res.value is not None
        assert res.value.id == "call_1"
        assert res.value.name is ToolName.NAVIGATE_AND_SEARCH
        assert res.value.arguments == NavigateAndSearch("d1", 3, "x")

    def test_numeric_strings_and_whole_floats_are_accepted(self) -> None:
        res = parse_tool_call(call("set_current_page", {"document_id": "d1", "page_number": "4"}))
        assert res.value is not None and res.value.arguments == SetCurrentPage("d1", 4)

        res = parse_tool_call(call("set_current_page", {"document_id": "d1", "page_number": 4.0}))
        assert res.value is not None and res.value.arguments == SetCurrentPage("d1", 4)

    def test_search_top_k_defaults_to_three(self) -> None:
        res = parse_tool_call(call("search_document", {"document_id": "d1", "query": "warranty"}))
        assert res.value is not None
        assert res.value.arguments == SearchDocumentArgs("d1", "warranty", 3)

    def test_blank_search_query_means_no_search(self) -> None:
        res = parse_tool_call(
            call("navigate_and_search", {"document_id": "d1", "page_number": 1, "search_query": ""})
        )
        assert res.value is not None
        assert res.value.arguments == NavigateAndSearch("d1", 1, None)

    def test_empty_arguments_for_argumentless_tool(self) -> None:
        res = parse_tool_call(RawToolCall(id="c", name="get_conversation_context", arguments=""))
        assert res.value is not None
        assert res.value.arguments == GetConversationContext()

    def test_unknown_tool(self) -> None:
        res = parse_tool_call(call("delete_everything", {}))
        assert not res.ok
        assert isinstance(res.error, ValidationError)
        assert "unknown tool" in str(res.error)

    def test_malformed_json(self) -> None:
        res = parse_tool_call(RawToolCall(id="c", name="search_document", arguments="{oops"))
        assert isinstance(res.error, ValidationError)

    def test_non_object_arguments(self) -> None:
        res = parse_tool_call(call("search_document", ["d1", "warranty"]))
        assert isinstance(res.error, ValidationError)

    def test_missing_required_field(self) -> None:
        res = parse_tool_call(call("get_document_details", {}))
        assert isinstance(res.error, ValidationError)
        assert "document_id" in str(res.error)

    def test_bool_is_not_a_page_number(self) -> None:
        res = parse_tool_call(call("set_current_page", {"document_id": "d1", "page_number": True}))
        assert isinstance(res.error, ValidationError)

    def test_non_decimal_digits_are_not_page_numbers(self) -> None:
        for value in ("\u00b2", "\u2460", "3.5", ""):
            res = parse_tool_call(
                call("set_current_page", {"document_id": "d1", "page_number": value})
            )
            assert isinstance(res.error, ValidationError)
            assert "page_number" in str(res.error)


def test_every_tool_name_is_advertised():
    assert {s.name for s in TOOL_SPECS} == {n.value for n in ToolName}
    for spec in TOOL_SPECS:
        assert spec.parameters["type"] == "object"
        assert set(spec.parameters["required"]) <= set(spec.parameters["properties"])
