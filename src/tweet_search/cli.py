"""Command-line entry point for running a tweet search backfill.

Usage:
    tweet-search "python lang:en"
    tweet-search "python" --since-id 1700000000000000000 --result-type recent
    tweet-search "python" --json > tweets.json
"""

from __future__ import annotations

import argparse
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from tweet_search.client import SearchTwitterClient
from tweet_search.errors import TwitterSearchError
from tweet_search.types import MAX_TWEET_ID, SearchTweetsResponse

console = Console()


def tweet_id(value: str) -> int:
    """Parse a tweet id argument (unsigned 64-bit)."""
    try:
        parsed = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid tweet id: {value!r}") from e
    if not 0 <= parsed <= MAX_TWEET_ID:
        raise argparse.ArgumentTypeError(f"tweet id out of range: {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tweet-search",
        description="Fetch every tweet matching a query, newest to oldest.",
    )
    parser.add_argument("query", help="Free-text search query")
    parser.add_argument("--since-id", type=tweet_id, default=0, help="Only return tweets newer than this id")
    parser.add_argument("--lang", default=None, help="Language filter (ISO 639-1)")
    parser.add_argument(
        "--result-type",
        default=None,
        help="recent, popular or mixed (anything else means mixed)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    return parser


def print_summary(result: SearchTweetsResponse) -> None:
    """Print a summary table of a finished search."""
    table = Table(title="Search Result", box=box.ROUNDED)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Tweets", str(len(result.tweets)))
    table.add_row("Pages", str(result.pages))
    table.add_row("Stop reason", str(result.stop_reason))
    if result.tweets:
        table.add_row("Newest id", str(result.tweets[0].id))
        table.add_row("Oldest id", str(min(t.id for t in result.tweets)))
    if result.rate_limit is not None:
        table.add_row("Rate limit", f"{result.rate_limit.remaining}/{result.rate_limit.limit}")
        table.add_row("Resets at", result.rate_limit.reset.isoformat())

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Run a search from the command line."""
    args = build_parser().parse_args(argv)

    try:
        with SearchTwitterClient.from_settings() as client:
            if args.since_id:
                client.set_since_id(args.since_id)
            if args.lang is not None:
                client.set_language(args.lang)
            if args.result_type is not None:
                client.set_result_type(args.result_type)
            result = client.search(args.query)
    except TwitterSearchError as e:
        console.print(f"[red]Error ({e.code}): {e.message}[/red]")
        return 1

    if args.json:
        sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    else:
        print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
