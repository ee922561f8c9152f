"""Command-line interface for atviews.

Commands:
    atviews decode FILE     Decode a saved XRPC response and summarize it
    atviews version         Show version information

Example:
    $ atviews decode starter_packs.json --endpoint actor-starter-packs
    at://did:plc:.../app.bsky.graph.starterpack/3m6kcxavbn623  Tech folks  (alice.bsky.social)
    ...
    40 item(s), cursor: 3lep6hpx7qq2c
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the atviews CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from ..responses import ENDPOINTS

    parser = argparse.ArgumentParser(
        prog="atviews",
        description="Decode Bluesky / AT Protocol view responses into typed objects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log decoder activity (including unknown variants) to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a saved response body",
    )
    decode_parser.add_argument(
        "file",
        help="Path to a JSON response body, or '-' for stdin",
    )
    decode_parser.add_argument(
        "--endpoint", "-e",
        choices=sorted(ENDPOINTS),
        default="actor-starter-packs",
        help="Response shape (default: actor-starter-packs)",
    )
    decode_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum nesting depth (overrides ATVIEWS_MAX_DEPTH)",
    )
    decode_parser.add_argument(
        "--env-file",
        default=None,
        help="Read ATVIEWS_* settings from this dotenv file instead of the environment",
    )

    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.version or args.command == "version":
        return _cmd_version()

    if args.command == "decode":
        return _cmd_decode(
            file=args.file,
            endpoint=args.endpoint,
            max_depth=args.max_depth,
            env_file=args.env_file,
        )

    parser.print_help()
    return 0


def _cmd_version() -> int:
    """Show version information."""
    from .. import __version__

    print(f"atviews {__version__}")
    return 0


def _cmd_decode(
    file: str,
    endpoint: str,
    max_depth: int | None,
    env_file: str | None,
) -> int:
    """Decode a response file and print one line per item."""
    import dataclasses

    from .._config import DecoderConfig
    from .._exceptions import StructuralError
    from ..responses import ENDPOINTS, Page

    try:
        config = DecoderConfig.from_env(env_file)
        if max_depth is not None:
            config = dataclasses.replace(config, max_depth=max_depth)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        raw = sys.stdin.buffer.read() if file == "-" else Path(file).read_bytes()
    except OSError as e:
        print(f"error: cannot read {file}: {e}", file=sys.stderr)
        return 2

    try:
        result = ENDPOINTS[endpoint](raw, config=config)
    except StructuralError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if isinstance(result, Page):
        for item in result:
            print(_summarize(item))
        print(f"{len(result)} item(s), cursor: {result.cursor or '-'}")
    else:
        print(_summarize(result))
    return 0


def _summarize(item: Any) -> str:
    """One-line description of a decoded view."""
    uri = getattr(item, "uri", "?")

    subject = getattr(item, "subject", None)
    if subject is not None:
        return f"{uri}  {subject}"

    title = getattr(item, "name", None) or getattr(item, "display_name", None) or ""
    creator = getattr(item, "creator", None)
    suffix = f"  ({creator.handle})" if creator is not None else ""
    return f"{uri}  {title}{suffix}"


if __name__ == "__main__":
    sys.exit(main())
