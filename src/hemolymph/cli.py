"""Command line entry point: run one query against a JSON card file.

Usage:
    hemolymph-search 'k:ant c>=2' --cards cards.json
    hemolymph-search 'devours:(cost=1)' --cards cards.json --ids-only

Exit codes: 0 on success, 1 when the card file cannot be loaded, 2 when the
query is rejected.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

import orjson

from hemolymph.adapters.card_store import CardLoadError, CardStore
from hemolymph.config import Settings
from hemolymph.domain.search import ErrorResult
from hemolymph.observability.logging import configure_logging
from hemolymph.service_layer.search_service import CardSearchService


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hemolymph-search", description="Search a card collection.")
    parser.add_argument("query", help="Query text, e.g. 'n:mantis c<=2'")
    parser.add_argument("--cards", type=Path, default=None, help="JSON card file (defaults to CARDS_FILE)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    parser.add_argument("--strict", action="store_true", help="Reject unterminated quotes and sub-queries")
    parser.add_argument("--ids-only", action="store_true", help="Print matching card ids, one per line")
    parser.add_argument("--show-errors", action="store_true", help="Report the parser's error text")
    return parser


def _validate_args(args: argparse.Namespace) -> None:
    if args.limit is not None and args.limit < 0:
        raise ValueError("--limit must be >= 0")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    try:
        _validate_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    settings = Settings()
    overrides: dict[str, object] = {}
    if args.strict:
        overrides["strict_syntax"] = True
    if args.show_errors:
        overrides["mask_error_details"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)
    configure_logging(settings.log_level, settings.log_json)

    cards_file = args.cards or settings.cards_file
    if cards_file is None:
        logger.error("No card file given; pass --cards or set CARDS_FILE")
        return 1

    store = CardStore()
    try:
        store.load_file(cards_file)
    except CardLoadError as exc:
        logger.error("Could not load cards: %s", exc)
        return 1

    result = CardSearchService(store, settings).search(args.query, limit=args.limit)
    if isinstance(result, ErrorResult):
        sys.stdout.write(result.model_dump_json() + "\n")
        return 2

    if args.ids_only:
        for card in result.content:
            sys.stdout.write(card.id + "\n")
    else:
        payload = orjson.dumps(result.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
        sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
