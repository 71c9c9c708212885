"""Command-line interface for feedwriter."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from feedwriter import __version__
from feedwriter.exceptions import ErrorKind, FeedWriterError
from feedwriter.generator.rss_renderer import RSSRenderer
from feedwriter.generator.validation import find_problems
from feedwriter.model.document import FeedDocument
from feedwriter.reader.rss_reader import read_feed
from feedwriter.utils.config import load_settings
from feedwriter.utils.logger import setup_logger

logger = logging.getLogger("feedwriter")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='feedwriter',
        description='Render feed documents as RSS 2.0'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # render FILE
    render_parser = subparsers.add_parser('render', help='Render a JSON feed document as RSS')
    render_parser.add_argument('document', help='Path to the JSON feed document')
    render_parser.add_argument('-o', '--output', help='Write the feed here instead of stdout')
    render_parser.add_argument('--encoding', help='Override the document encoding')
    render_parser.add_argument('--compact', action='store_true', help='Do not indent the XML')

    # validate FILE
    validate_parser = subparsers.add_parser('validate', help='Check a JSON feed document')
    validate_parser.add_argument('document', help='Path to the JSON feed document')

    # inspect FEED
    inspect_parser = subparsers.add_parser('inspect', help='Read an RSS file back as JSON')
    inspect_parser.add_argument('feed', help='Path to the RSS file')

    return parser


def load_document(path: str) -> FeedDocument:
    """Read a JSON feed document from disk.

    Raises:
        FeedWriterError: INVALID_ARGUMENT if the file cannot be read or parsed.
    """
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Cannot read '{path}': {e}", cause=e)
    except json.JSONDecodeError as e:
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Invalid JSON in '{path}': {e}", cause=e)
    return FeedDocument.from_dict(data)


def handle_render(path: str, output: Optional[str] = None, encoding: Optional[str] = None,
                  pretty: bool = True) -> int:
    """Handle render command.

    Args:
        path: JSON feed document.
        output: Output file; stdout when None.
        encoding: Encoding to use instead of the document's.
        pretty: Indent the XML.

    Returns:
        Exit code.
    """
    try:
        document = load_document(path)
        if encoding:
            document.encoding = encoding
        rendered = RSSRenderer(document, pretty=pretty).render()
    except FeedWriterError as e:
        logger.error(f"Cannot render '{path}': {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if not output:
        sys.stdout.write(rendered.to_xml_string())
        return 0

    try:
        rendered.save(output)
    except OSError as e:
        logger.error(f"Cannot write '{output}': {e}")
        print(f"Error: Cannot write '{output}': {e}", file=sys.stderr)
        return 1

    print(f"Wrote {len(rendered.xml)} bytes to {output}")
    return 0


def handle_validate(path: str) -> int:
    """Handle validate command."""
    try:
        document = load_document(path)
    except FeedWriterError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    problems = find_problems(document)
    if not problems:
        print(f"{path}: OK")
        return 0

    print(f"{path}: {len(problems)} problem(s)")
    for problem in problems:
        print(f"  - {problem}")
    return 1


def handle_inspect(path: str) -> int:
    """Handle inspect command."""
    try:
        feed = read_feed(Path(path).read_bytes())
    except OSError as e:
        print(f"Error: Cannot read '{path}': {e}", file=sys.stderr)
        return 1
    except FeedWriterError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(feed.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    settings = load_settings()
    setup_logger(log_file=settings.log_file, level=settings.log_level)

    if parsed.command == 'render':
        return handle_render(
            parsed.document,
            output=parsed.output,
            encoding=parsed.encoding,
            pretty=settings.pretty and not parsed.compact
        )

    if parsed.command == 'validate':
        return handle_validate(parsed.document)

    if parsed.command == 'inspect':
        return handle_inspect(parsed.feed)

    return 0


if __name__ == '__main__':
    sys.exit(main())
