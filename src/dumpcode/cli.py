# src/dumpcode/cli.py
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Module imports
from dumpcode.config import (
    DEFAULT_EXCLUDES,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_FILES,
    DEFAULT_MAX_SIZE_KB,
    normalize_extensions,
    parse_list,
)
from dumpcode.core.aggregator import aggregate
from dumpcode.core.scanner import ProjectScanner
from dumpcode.core.sink import ClipboardSink, StreamSink, build_document
from dumpcode.core.tree import render_tree
from dumpcode.errors import DumpcodeError
from dumpcode.models import FilterConfig

logger = logging.getLogger("dumpcode")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if number < 0:
        raise argparse.ArgumentTypeError(f"'{value}' must be >= 0")
    return number


def _positive_int(value: str) -> int:
    number = _non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError(f"'{value}' must be > 0")
    return number


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="dumpcode",
        description="Dumps a project's tree and file contents in an LLM-friendly format.",
    )
    parser.add_argument("directory", type=str, nargs="?", default=".", help="Directory to scan")
    parser.add_argument("-c", "--clipboard", action="store_true", help="Copy output to clipboard")
    parser.add_argument(
        "-e", "--extensions",
        type=str,
        default=DEFAULT_EXTENSIONS,
        help="Comma-separated file extensions to include, or '*' for all",
    )
    parser.add_argument(
        "-s", "--max-size",
        type=_non_negative_int,
        default=DEFAULT_MAX_SIZE_KB,
        help=f"Max file size in KB (default: {DEFAULT_MAX_SIZE_KB})",
    )
    parser.add_argument(
        "-x", "--exclude",
        type=str,
        default=DEFAULT_EXCLUDES,
        help="Comma-separated directory names to exclude",
    )
    parser.add_argument(
        "--max-files",
        type=_non_negative_int,
        default=DEFAULT_MAX_FILES,
        help=f"Maximum files to include (default: {DEFAULT_MAX_FILES})",
    )
    parser.add_argument("-j", "--jobs", type=_positive_int, default=None, help="Number of reader threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose: bool) -> None:
    # stdout carries the dump itself, so diagnostics go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_config(args: argparse.Namespace) -> FilterConfig:
    return FilterConfig(
        extensions=normalize_extensions(args.extensions),
        exclude_dirs=frozenset(parse_list(args.exclude)),
        max_size_kb=args.max_size,
        max_files=args.max_files,
    )


def generate_dump(root_dir: Path, config: FilterConfig, max_workers: Optional[int] = None) -> str:
    """Walk, render, read and assemble. Raises InvalidRootError before producing anything."""
    result = ProjectScanner(root_dir, config).scan()
    tree_str = render_tree(result.root)
    blocks = aggregate(result.entries, config.max_size_bytes, max_workers=max_workers)
    logger.info("Dumped %d file(s) (%d omitted by --max-files)", len(blocks), result.truncated)
    return build_document(tree_str, blocks)


def main(argv: Optional[List[str]] = None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        logger.debug("cli args: %s", args)

        config = build_config(args)

        # 2. Scan + read
        output = generate_dump(Path(args.directory), config, max_workers=args.jobs)

        # 3. Emit
        if args.clipboard:
            ClipboardSink().emit(output)
            print("Code dump copied to clipboard", file=sys.stderr)
        else:
            StreamSink().emit(output)

    except DumpcodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
