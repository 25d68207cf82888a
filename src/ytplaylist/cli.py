"""Command-line interface for fetching YouTube playlists."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from . import api
from .errors import PlaylistError, TransportError, with_retry
from .logging_config import enable_debug

logger = logging.getLogger(__name__)


def parse_headers(values: Optional[List[str]]) -> Dict[str, str]:
    """Parse ``NAME:VALUE`` header arguments.

    Args:
        values: Raw header arguments

    Returns:
        Dictionary of header names to values

    Raises:
        ValueError: If an argument has no colon
    """
    headers = {}
    for value in values or []:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header: {value}")
        headers[name.strip()] = content.strip()
    return headers


def load_cursor(path: str) -> Any:
    """Load a continuation cursor from a JSON file or stdin.

    The file may hold the cursor list itself or a whole result object
    with a ``continuation`` key.

    Args:
        path: File path, or ``-`` for stdin

    Returns:
        The cursor in list form, unvalidated
    """
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    if isinstance(data, dict) and "continuation" in data:
        return data["continuation"]
    return data


def write_output(data: Any, output: Optional[str]) -> None:
    """Write JSON to a file, or to stdout when no file is given."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("Wrote result to %s", output)
    else:
        print(text)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(description="Fetch the items of a YouTube playlist")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Get command
    get_parser = subparsers.add_parser("get", help="Fetch a playlist")
    get_parser.add_argument("reference", help="Playlist ID, channel ID or YouTube URL")
    bound = get_parser.add_mutually_exclusive_group()
    bound.add_argument("--limit", type=int, help="Maximum number of items to collect")
    bound.add_argument("--pages", type=int, help="Maximum number of pages to fetch")
    get_parser.add_argument("--gl", help="Country code sent with requests")
    get_parser.add_argument("--hl", help="Interface language sent with requests")
    get_parser.add_argument(
        "--header", action="append", metavar="NAME:VALUE", help="Extra request header"
    )
    get_parser.add_argument("-o", "--output", help="Write JSON to this file instead of stdout")
    get_parser.add_argument(
        "--retries", type=int, default=0, help="Retry network failures this many times"
    )
    get_parser.add_argument("--progress", action="store_true", help="Show page progress")

    # Continue command
    continue_parser = subparsers.add_parser(
        "continue", help="Fetch the next page from a saved continuation"
    )
    continue_parser.add_argument(
        "cursor", help="JSON file with a continuation or a previous result, '-' for stdin"
    )
    continue_parser.add_argument("-o", "--output", help="Write JSON to this file instead of stdout")
    continue_parser.add_argument(
        "--retries", type=int, default=0, help="Retry network failures this many times"
    )

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Print the canonical playlist ID")
    resolve_parser.add_argument("reference", help="Playlist ID, channel ID or YouTube URL")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Check whether a reference can be resolved"
    )
    validate_parser.add_argument("reference", help="Playlist ID, channel ID or YouTube URL")

    return parser


def run_get(args: argparse.Namespace) -> int:
    """Run the get command."""
    fetch = with_retry(max_retries=args.retries)(api.get_playlist)
    progress = tqdm(desc="Pages", unit="page", file=sys.stderr) if args.progress else None

    def on_page(pages_fetched: int, items_collected: int) -> None:
        progress.update(1)
        progress.set_postfix(items=items_collected)

    try:
        result = fetch(
            args.reference,
            limit=args.limit,
            pages=args.pages,
            gl=args.gl,
            hl=args.hl,
            request_options={"headers": parse_headers(args.header)},
            on_page=on_page if progress else None,
        )
    finally:
        if progress:
            progress.close()

    logger.info("Fetched %d items", len(result.items))
    write_output(result.to_dict(), args.output)
    return 0


def run_continue(args: argparse.Namespace) -> int:
    """Run the continue command."""
    cursor = load_cursor(args.cursor)
    fetch = with_retry(max_retries=args.retries)(api.continue_request)
    result = fetch(cursor)
    logger.info("Fetched %d items", len(result.items))
    write_output(result.to_dict(), args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        int: Exit code
    """
    parser = create_parser()
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = parser.parse_args(args=argv if argv else ["--help"])
    except SystemExit as e:
        return 1 if e.code == 2 else e.code

    if args.debug:
        enable_debug()

    try:
        if args.command == "get":
            return run_get(args)
        elif args.command == "continue":
            return run_continue(args)
        elif args.command == "resolve":
            print(api.get_playlist_id(args.reference))
            return 0
        elif args.command == "validate":
            valid = api.validate_id(args.reference)
            print("valid" if valid else "invalid")
            return 0 if valid else 1
        else:
            parser.print_help()
            return 1

    except (PlaylistError, TransportError) as e:
        logger.error("Command failed: %s", str(e))
        return 1
    except (OSError, ValueError) as e:
        logger.error("Command failed: %s", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
