#!/usr/bin/env python3
"""
gutenberg-bible: convert the Project Gutenberg King James text into a structured Bible.
"""

import argparse
import logging
import sys
from pathlib import Path

from bible_parser import ParseEvent, parse_bible_file
from config import config
from models import Bible
from serializer import WRITERS, BibleFormatError, read_binary, read_json, write_outputs
from validator import has_errors, validate_bible, verse_length_stats

# Default documents directory
DOCUMENTS_DIR = Path(__file__).parent / "documents"


def resolve_file_path(file_path: str, default_dir: Path = DOCUMENTS_DIR) -> Path:
    """
    Resolve a file path, checking the documents directory if not found.

    Args:
        file_path: The file path to resolve
        default_dir: Default directory to check (default: documents/)

    Returns:
        Resolved Path object

    Raises:
        FileNotFoundError: If file cannot be found
    """
    path = Path(file_path)

    if path.is_absolute() or path.exists():
        return path

    doc_path = default_dir / file_path
    if doc_path.exists():
        return doc_path

    raise FileNotFoundError(f"File not found: {file_path} (also checked in {default_dir})")


def load_bible(file_path: str) -> Bible:
    """
    Load a previously written Bible from a .bin or .json file.

    Args:
        file_path: Path to the serialized Bible

    Returns:
        The decoded Bible
    """
    path = resolve_file_path(file_path)
    print(f"Loading Bible: {path}")
    if path.suffix == '.json':
        return read_json(str(path))
    return read_binary(str(path))


def print_summary(bible: Bible) -> None:
    """Print the table of contents and the parsed book lists."""
    print(f"Table of Contents - OT ({len(bible.ot_contents)} books):")
    for i, name in enumerate(bible.ot_contents, start=1):
        print(f"  {i}. {name}")

    print(f"\nTable of Contents - NT ({len(bible.nt_contents)} books):")
    for i, name in enumerate(bible.nt_contents, start=1):
        print(f"  {i}. {name}")

    print(f"\nParsed {len(bible.ot)} OT books:")
    for i, book in enumerate(bible.ot, start=1):
        print(f"  {i}. {book.name}")

    print(f"\nParsed {len(bible.nt)} NT books:")
    for i, book in enumerate(bible.nt, start=1):
        print(f"  {i}. {book.name}")


def print_stats(bible: Bible) -> None:
    stats = verse_length_stats(bible)
    print(f"\nVerse statistics:")
    print(f"  Verses: {stats['count']}")
    if stats['count']:
        print(f"  Mean length: {stats['mean']:.1f} characters")
        print(f"  Median length: {stats['median']:.1f} characters")
        print(f"  Shortest: {stats['shortest']['reference']} ({stats['shortest']['length']})")
        print(f"  Longest: {stats['longest']['reference']} ({stats['longest']['length']})")


def trace_event(event: ParseEvent) -> None:
    print(f"  {event}", file=sys.stderr)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Convert the Project Gutenberg King James Bible into structured data.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Parse and write bible.json and bible.bin:
    gutenberg-bible pg10.txt

  Write every format and check the result:
    gutenberg-bible pg10.txt --format json keyed csv bin --validate

  Check a previously written binary:
    gutenberg-bible --load bible.bin --validate --stats
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help=f"Gutenberg text file to parse (default: from .env, currently {config.bible_text_file})"
    )

    parser.add_argument(
        "--load",
        metavar="FILE",
        type=str,
        help="Load a previously written .bin or .json Bible instead of parsing"
    )

    parser.add_argument(
        "--output-dir",
        "-o",
        type=str,
        default=None,
        help=f"Directory for output files (default: from .env, currently {config.output_dir})"
    )

    parser.add_argument(
        "--format",
        nargs="+",
        choices=list(WRITERS),
        default=None,
        help=f"Output formats (default: from .env, currently {','.join(config.output_formats)})"
    )

    parser.add_argument(
        "--stem",
        type=str,
        default="bible",
        help="Output file name stem (default: bible)"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check book, chapter and verse structure against the canonical KJV layout"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when validation reports errors (implies --validate)"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print verse length statistics"
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Print every parse event to stderr"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    trace = args.trace if args.trace is not None else config.trace_events
    show_progress = config.show_progress and not args.no_progress

    try:
        if args.load:
            bible = load_bible(args.load)
        else:
            file_path = resolve_file_path(args.file or config.bible_text_file)
            print(f"=" * 60)
            print(f"Parsing: {file_path}")
            print(f"=" * 60)
            bible = parse_bible_file(
                str(file_path),
                on_event=trace_event if trace else None,
                show_progress=show_progress
            )
    except (FileNotFoundError, BibleFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(bible)

    if not args.load:
        formats = args.format or config.output_formats
        output_dir = args.output_dir or config.output_dir
        try:
            written = write_outputs(bible, output_dir, args.stem, formats)
        except (OSError, ValueError) as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1

        print(f"\n✓ Successfully parsed the Bible!")
        for fmt, path in written:
            print(f"  {fmt}: {path}")

    if args.stats:
        print_stats(bible)

    if args.validate or args.strict:
        issues = validate_bible(bible)
        print(f"\nValidation: {len(issues)} issue(s)")
        for issue in issues:
            print(f"  {issue}")
        if args.strict and has_errors(issues):
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
