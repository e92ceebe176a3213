"""
Command line front end for the RAG pipeline.

Usage:
    python main.py ingest docs/                     # file or directory
    python main.py ingest https://example.com/a.txt --loader URL
    python main.py ingest "raw text to index" --text
    python main.py query "What is in the manual?" --sources
    python main.py strategies SPLITTER

The default in-memory store lives only for one process; several actions
can be chained in one run with --then, e.g.
    python main.py ingest docs/ --then "What is in the manual?"
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from core.engine import RagEngine
from core.registry import UnsupportedStrategyKind
from ingestion.pipeline import IngestionOptions, IngestionResult

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Configurable RAG pipeline")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Ingest a source or raw text")
    ingest.add_argument("source", help="Path, URL, resource name or text (with --text)")
    ingest.add_argument("--text", action="store_true", help="Treat SOURCE as raw text")
    ingest.add_argument("--loader", default="FILE_SYSTEM", help="FILE_SYSTEM, URL or RESOURCE")
    ingest.add_argument("--splitter", default=None, help="Splitter kind (default from settings)")
    ingest.add_argument(
        "--document-transformers", nargs="*", default=None,
        help="Document transformer kinds in order; give the flag no kinds (or NONE) to disable"
    )
    ingest.add_argument(
        "--segment-transformers", nargs="*", default=None,
        help="Segment transformer kinds in order; give the flag no kinds (or NONE) to disable"
    )
    ingest.add_argument("--then", action="append", default=[], metavar="QUESTION",
                        help="Ask a question after ingesting (repeatable)")

    query = commands.add_parser("query", help="Ask a question")
    query.add_argument("question")
    query.add_argument("--sources", action="store_true", help="Print the segments used")

    strategies = commands.add_parser("strategies", help="List registered strategies")
    strategies.add_argument("category", help="e.g. SPLITTER, LOADER, QUERY_ROUTER")

    return parser


def _kinds(values: Optional[List[str]]) -> Optional[List[str]]:
    """None keeps the configured pipeline; NONE or no values disables it"""
    if values is None:
        return None
    return [v for v in values if v.strip().upper() != "NONE"]


def _print_result(result: IngestionResult) -> None:
    print(
        f"Documents: {result.documents_kept}/{result.documents_loaded} kept | "
        f"Segments: {result.segments_stored} stored, {result.segments_discarded} discarded | "
        f"Splitter: {result.splitter} | {result.processing_time:.2f}s"
    )


def _ask(engine: RagEngine, question: str, with_sources: bool) -> None:
    if not with_sources:
        print(engine.query(question))
        return
    response = engine.query_with_sources(question)
    print(response.answer)
    for number, source in enumerate(response.sources, start=1):
        print(f"\n[{number}] {source}")


def run(args: argparse.Namespace, engine: RagEngine) -> int:
    if args.command == "ingest":
        options = IngestionOptions(
            loader_kind=args.loader,
            splitter_kind=args.splitter,
            document_transformers=_kinds(args.document_transformers),
            segment_transformers=_kinds(args.segment_transformers),
        )
        if args.text:
            result = engine.ingest_text(args.source, options=options)
        else:
            result = engine.ingest_source(args.source, options=options)
        _print_result(result)
        for question in args.then:
            _ask(engine, question, with_sources=False)
        return 0

    if args.command == "query":
        _ask(engine, args.question, args.sources)
        return 0

    if args.command == "strategies":
        for kind, description in engine.list_strategies(args.category).items():
            print(f"{kind:<20} {description}")
        return 0

    return 2


def main(argv: Optional[List[str]] = None, engine: Optional[RagEngine] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        return run(args, engine or RagEngine.from_settings())
    except UnsupportedStrategyKind as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
