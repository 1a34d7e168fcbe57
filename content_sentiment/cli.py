#!/usr/bin/env python
"""
Command line entry point for sentiment maintenance.

Usage:
    content-sentiment init-db
    content-sentiment update-scores [--type post|comment|all] [--batch-size N]
    content-sentiment purge
    content-sentiment analyze "Some text to score"
"""

import argparse
import logging
import sys
from typing import List, Optional

from content_sentiment.config import settings

logger = logging.getLogger(__name__)


def _init_db(args) -> int:
    from content_sentiment.db import initialize_database

    initialize_database()
    return 0


def _update_scores(args) -> int:
    from content_sentiment.db import initialize_database
    from content_sentiment.nlp.schemas import ContentType
    from content_sentiment.sentiment_sync import update_all_scores

    initialize_database()
    if args.type == "all":
        content_types = (ContentType.POST, ContentType.COMMENT)
    else:
        content_types = (ContentType(args.type),)

    processed = update_all_scores(batch_size=args.batch_size, content_types=content_types)
    for content_type, offset in processed.items():
        print(f"{content_type}: processed {offset} so far")
    print("All scores updated successfully.")
    return 0


def _purge(args) -> int:
    from content_sentiment.sentiment_sync import purge_sentiment_meta

    removed = purge_sentiment_meta()
    print(f"Removed {removed} sentiment metadata entries")
    return 0


def _analyze(args) -> int:
    from content_sentiment.nlp.sentiment import analyze

    result = analyze(args.text)
    print(result.label.text)
    return 0


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content sentiment maintenance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_db = subparsers.add_parser("init-db", help="Create posts, comments and metadata tables")
    init_db.set_defaults(func=_init_db)

    update = subparsers.add_parser("update-scores", help="Recompute sentiment for all content")
    update.add_argument("--type", choices=["post", "comment", "all"], default="all")
    update.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help=f"Items per batch (default: {settings().SENTIMENT_BATCH_SIZE})",
    )
    update.set_defaults(func=_update_scores)

    purge = subparsers.add_parser("purge", help="Delete all stored sentiment metadata")
    purge.set_defaults(func=_purge)

    analyze = subparsers.add_parser("analyze", help="Score a piece of text")
    analyze.add_argument("text")
    analyze.set_defaults(func=_analyze)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=settings().LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
