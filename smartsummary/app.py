import argparse
import json
import os
from pathlib import Path

from .env import load_env

from . import __version__
from .article import fetch_article_extract
from .config import Settings, SummarizerConfig
from .errors import SmartSummaryError
from .formatting import html_to_text
from .history import clear_history, get_note, load_store, save_note, save_store, upsert_history
from .logger import get_logger
from .resolver import resolve_entity
from .summarizer import summarize_text


def print_record(record) -> None:
    print(f"{record.label} ({record.qid})")
    if record.description:
        print(f"  {record.description}")
    if record.birth_date or record.death_date:
        print(f"  Lived: {record.birth_date or '?'} – {record.death_date or ''}")
    if record.occupations:
        print(f"  Occupation: {', '.join(record.occupations)}")
    if record.wikipedia_url:
        print(f"  Wikipedia: {record.wikipedia_url}")
    if record.image:
        print(f"  Image: {record.image}")
    print()
    print(html_to_text(record.content_html))


def cmd_search(args: argparse.Namespace) -> None:
    term = args.term.strip()
    if not term:
        raise SystemExit("Missing search term.")
    try:
        record = resolve_entity(term, args.lang)
    except SmartSummaryError as e:
        raise SystemExit(str(e))

    store_path = Path(args.store)
    store = load_store(store_path)
    upsert_history(store, term)
    save_store(store_path, store)

    if args.json:
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        return
    print_record(record)
    note = get_note(store, record.qid)
    if note:
        print()
        print(f"Note: {note}")


def cmd_article(args: argparse.Namespace) -> None:
    try:
        extract = fetch_article_extract(args.lang, args.title)
    except SmartSummaryError as e:
        raise SystemExit(str(e))
    print(extract.title)
    print()
    print(html_to_text(extract.content_html))


def cmd_summarize(args: argparse.Namespace) -> None:
    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            raise SystemExit(f"Input file not found: {input_path}")
        text = input_path.read_text(encoding="utf-8")
    else:
        text = args.text or ""
    try:
        summary = summarize_text(text, args.lang, SummarizerConfig.from_env())
    except SmartSummaryError as e:
        raise SystemExit(str(e))
    print(summary)


def cmd_history(args: argparse.Namespace) -> None:
    store_path = Path(args.store)
    store = load_store(store_path)
    if args.clear:
        clear_history(store)
        save_store(store_path, store)
        print("History cleared.")
        return
    history = store.get("history", [])
    if not history:
        print("No search history.")
        return
    for i, term in enumerate(history, 1):
        print(f"{i}. {term}")


def cmd_note(args: argparse.Namespace) -> None:
    store_path = Path(args.store)
    store = load_store(store_path)
    if args.text is None:
        note = get_note(store, args.qid)
        print(note if note else f"No note for {args.qid}.")
        return
    save_note(store, args.qid, args.text)
    save_store(store_path, store)
    print(f"Note saved for {args.qid}.")


def load_settings(need_port: bool = True) -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        if need_port:
            raise SystemExit(str(e))
        # PORT only matters to the server
        return Settings.from_env({k: v for k, v in os.environ.items() if k != "PORT"})


def cmd_serve(args: argparse.Namespace) -> None:
    from .server import create_app

    settings = load_settings(need_port=args.port is None)
    port = args.port or settings.port
    app = create_app(settings)
    get_logger().info(f"API ready on http://localhost:{port}")
    app.run(host=args.host, port=port)


def main():
    # Load .env if present (GROQ_API_KEY, GROQ_MODEL, PORT, etc.)
    load_env()
    settings = load_settings(need_port=False)

    parser = argparse.ArgumentParser(prog="smartsummary", description="Wikidata Smart Summary — merged Wikidata + Wikipedia summaries")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    srch = subparsers.add_parser("search", help="Resolve a term to a merged Wikidata + Wikipedia summary")
    srch.add_argument("term", help="Free-text search term")
    srch.add_argument("--lang", default="en", help="Language code (default: en)")
    srch.add_argument("--json", action="store_true", help="Print the raw summary record as JSON")
    srch.add_argument("--store", default=str(settings.history_path), help="Path to history store")
    srch.set_defaults(func=cmd_search)

    art = subparsers.add_parser("article", help="Print the full Wikipedia article text for a title")
    art.add_argument("lang", help="Language code, e.g. en")
    art.add_argument("title", help="Wikipedia page title")
    art.set_defaults(func=cmd_article)

    summ = subparsers.add_parser("summarize", help="Summarize text with the configured LLM (offline fallback without a key)")
    src = summ.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", help="Path to a text file")
    src.add_argument("--text", help="Text to summarize")
    summ.add_argument("--lang", default="en", help="Summary language (default: en)")
    summ.set_defaults(func=cmd_summarize)

    hist = subparsers.add_parser("history", help="Show recent searches")
    hist.add_argument("--clear", action="store_true", help="Clear search history")
    hist.add_argument("--store", default=str(settings.history_path), help="Path to history store")
    hist.set_defaults(func=cmd_history)

    note = subparsers.add_parser("note", help="Show or save a note for an entity")
    note.add_argument("qid", help="Wikidata id, e.g. Q937")
    note.add_argument("--text", help="Note text to save (omit to show the current note)")
    note.add_argument("--store", default=str(settings.history_path), help="Path to history store")
    note.set_defaults(func=cmd_note)

    srv = subparsers.add_parser("serve", help="Run the JSON HTTP API")
    srv.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    srv.add_argument("--port", type=int, help=f"Port (default: PORT or {settings.port})")
    srv.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    # Console logging would mix with command output; only the server gets it
    get_logger(level=settings.log_level, log_dir=settings.log_dir, enable_console=args.command == "serve")

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
