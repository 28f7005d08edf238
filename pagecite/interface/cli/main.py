"""CLI for asking questions about, or searching, a single local document."""

import argparse
import sys

from pagecite.application.dto.chat_dto import ChatRequest
from pagecite.application.dto.search_dto import SearchRequest
from pagecite.application.ports.llm_port import ChatMessage
from pagecite.config.composition import build_container
from pagecite.config.logging_config import configure_logging

CLI_CONVERSATION_ID = "cli"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pagecite")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Answer a question with page citations")
    ask.add_argument("--file", required=True, help="PDF or plain-text file")
    ask.add_argument("--question", required=True)
    ask.add_argument("--page", type=int, default=None, help="Page the reader is looking at")

    search = sub.add_parser("search", help="Rank pages against a query")
    search.add_argument("--file", required=True, help="PDF or plain-text file")
    search.add_argument("--query", required=True)
    search.add_argument("--k", type=int, default=None, help="Snippets to return (SEARCH_TOP_K)")
    return parser


def _print_error(err: object) -> None:
    print(f"\n[ERROR] {type(err).__name__}: {getattr(err, 'message', str(err))}")


def cmd_ask(container, args: argparse.Namespace) -> int:  # type: ignore[no-untyped-def]
    registered = container.get_register_use_case().execute(
        args.file, conversation_id=CLI_CONVERSATION_ID
    )
    if not registered.ok or registered.value is None:
        _print_error(registered.error)
        return 1

    req = ChatRequest(
        conversation_id=CLI_CONVERSATION_ID,
        messages=[ChatMessage(role="user", content=args.question)],
        current_document_id=registered.value.id,
        current_page=args.page,
    )
    result = container.get_answer_use_case().execute(req)
    if not result.ok or result.value is None:
        _print_error(result.error)
        return 1

    print("\n" + "=" * 80)
    print("ANSWER:")
    print("=" * 80)
    print(result.value.message)
    if result.value.tool_calls:
        print("\n" + "=" * 80)
        print("TOOL CALLS:")
        print("=" * 80)
        for i, call in enumerate(result.value.tool_calls, 1):
            print(f"[{i}] {call.name} {call.arguments}")
    return 0


def cmd_search(container, args: argparse.Namespace) -> int:  # type: ignore[no-untyped-def]
    registered = container.get_register_use_case().execute(args.file)
    if not registered.ok or registered.value is None:
        _print_error(registered.error)
        return 1

    result = container.get_search_use_case().execute(
        SearchRequest(
            document_id=registered.value.id,
            query=args.query,
            top_k=args.k or container.settings.search_top_k,
        )
    )
    if not result.ok or result.value is None:
        _print_error(result.error)
        return 1

    print(f"{registered.value.display_name}: {result.value.total_pages} pages")
    for i, r in enumerate(result.value.results, 1):
        print(f"[{i}] (p. {r.page}) {r.snippet[:120]}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()
    container = build_container()

    if args.command == "ask":
        return cmd_ask(container, args)
    return cmd_search(container, args)


if __name__ == "__main__":
    sys.exit(main())
