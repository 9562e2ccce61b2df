"""CLI entry point: python -m feedcore PATH [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from feedcore.items import ParsedFeed
from feedcore.parser import FeedParser
from feedcore.settings import ParserSettings, load_settings

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedcore",
        description=(
            "Parse an RSS 1.0/RDF, RSS 2.0 or Atom feed document and print its\n"
            "title, link and entries. Reads a local file or stdin; no network I/O."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", metavar="PATH",
                        help="Feed file to parse, or '-' to read from stdin")
    parser.add_argument("--rel", default=None, metavar="REL",
                        help="Print only feed-level link hrefs with this rel ('' for all)")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Dump the parsed feed as JSON")
    parser.add_argument("--config", default=None, metavar="FILE",
                        help="YAML settings file")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: from settings, WARNING)")
    return parser


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _print_summary(feed: ParsedFeed, console: Console) -> None:
    console.print(Rule(f"[bold cyan]{feed.type.name} feed[/bold cyan]"))
    console.print(f"  [bold]Title :[/bold] {escape(feed.title or '-')}")
    console.print(f"  [bold]Link  :[/bold] [blue]{escape(feed.link or '-')}[/blue]")
    console.print(f"  [bold]Items :[/bold] [green]{len(feed.items)}[/green]")
    console.print(f"  [bold]Links :[/bold] {len(feed.links)}")
    console.print()

    if not feed.items:
        return

    tbl = Table(
        title=f"[bold green]Entries ({len(feed.items)})[/bold green]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("#",         style="dim",    justify="right", width=4, no_wrap=True)
    tbl.add_column("Title",     style="cyan",   max_width=48,             no_wrap=True)
    tbl.add_column("Author",    style="green",  max_width=18,             no_wrap=True)
    tbl.add_column("Published", style="yellow", width=12,                 no_wrap=True)
    tbl.add_column("Link",      style="blue",   max_width=50,             no_wrap=True)

    for i, item in enumerate(feed.items, 1):
        tbl.add_row(
            str(i),
            (getattr(item, "title", "") or "-")[:45],
            (getattr(item, "author", None) or "-")[:18],
            (getattr(item, "published_at", None) or "-")[:10],
            (getattr(item, "link", "") or "-")[:45],
        )
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else ParserSettings()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"ERROR: Could not load settings from {args.config}: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        data = _read_input(args.path)
    except OSError as exc:
        print(f"ERROR: Could not read {args.path}: {exc}", file=sys.stderr)
        return 1

    feed_parser = FeedParser(data, settings=settings)
    if not feed_parser.init():
        print(f"ERROR: {feed_parser.error()}", file=sys.stderr)
        for raw in feed_parser.errors()[1:]:
            logger.info("Additional parse error: %s", raw)
        return 1

    if args.rel is not None:
        for href in feed_parser.links(args.rel):
            print(href)
        return 0

    feed = feed_parser.result()
    if args.json:
        print(feed.model_dump_json(indent=2))
        return 0

    _print_summary(feed, Console())
    return 0


if __name__ == "__main__":
    sys.exit(main())
