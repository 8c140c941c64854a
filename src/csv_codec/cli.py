"""
Command-line interface for CSV Codec.

Provides argument parsing and CLI entry point.
"""

import argparse
import sys
from typing import List, Optional

from .config import CLIDefaults


class CustomHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter for prettier help output."""

    def __init__(self, prog, indent_increment=2, max_help_position=40, width=100):
        super().__init__(prog, indent_increment, max_help_position, width)

    def _format_action_invocation(self, action):
        if not action.option_strings:
            return super()._format_action_invocation(action)
        return ', '.join(action.option_strings)


DESCRIPTION = """
  Convert between CSV text and JSON rows.

┌─────────────────────────────────────────────────────────────────────────────┐
│  COMMANDS                                                                   │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│  decode   CSV file -> JSON array (objects, or arrays with --no-header)      │
│  encode   JSON array of objects -> CSV file                                 │
│  detect   Print the delimiter auto-detection would pick                     │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘
"""

EPILOG = """
┌─────────────────────────────────────────────────────────────────────────────┐
│  EXAMPLES                                                                   │
└─────────────────────────────────────────────────────────────────────────────┘

  Decode a semicolon file, tolerating ragged rows:
  ─────────────────────────────────────────────────
    %(prog)s decode export.csv --relaxed -o rows.json

  Encode with renamed headers for Excel:
  ──────────────────────────────────────
    %(prog)s encode rows.json --columns "name=Nome,value=Valor" --bom --crlf

┌─────────────────────────────────────────────────────────────────────────────┐
│  NOTES                                                                      │
└─────────────────────────────────────────────────────────────────────────────┘

  • Use - as INPUT to read from stdin
  • Gzipped inputs (*.gz) are automatically decompressed
  • Defaults can be overridden in a local .csv-codec.json file
"""


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'input',
        metavar='INPUT',
        help='Input file path, or - for stdin'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        default='-',
        metavar='FILE',
        help='Output file path (default: stdout)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose/debug output.'
    )


def create_parser(defaults: Optional[CLIDefaults] = None) -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Args:
        defaults: Option defaults (read from the local config file when omitted)

    Returns:
        Configured ArgumentParser instance
    """
    if defaults is None:
        defaults = CLIDefaults.from_local_config()

    parser = argparse.ArgumentParser(
        prog='csv-codec',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=CustomHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    # decode
    decode_parser = subparsers.add_parser(
        'decode',
        help='Decode CSV text into JSON rows',
        formatter_class=CustomHelpFormatter,
    )
    _add_common_arguments(decode_parser)
    decode_group = decode_parser.add_argument_group(
        '📥 Decode Options',
        'How the CSV input is read'
    )
    decode_group.add_argument(
        '--delimiter', '-d',
        type=str,
        default=defaults.delimiter,
        metavar='CHAR',
        help=f'Field delimiter, or "auto" to detect it.\n'
             f'(default: {defaults.delimiter!r})'
    )
    decode_group.add_argument(
        '--no-header',
        dest='header',
        action='store_false',
        help='Treat the first line as data; output arrays instead of objects.'
    )
    decode_group.add_argument(
        '--keep-empty-lines',
        dest='skip_empty_lines',
        action='store_false',
        default=defaults.skip_empty_lines,
        help='Decode empty lines instead of skipping them.'
    )
    decode_group.add_argument(
        '--no-trim',
        dest='trim',
        action='store_false',
        default=defaults.trim,
        help='Keep surrounding whitespace in headers and values.'
    )
    decode_group.add_argument(
        '--relaxed',
        action='store_true',
        default=defaults.relaxed,
        help='Tolerate unclosed quotes and ragged rows instead of failing.'
    )
    decode_group.add_argument(
        '--snake-case-headers',
        action='store_true',
        help='Lower-case header names and replace whitespace runs with "_".'
    )
    decode_group.add_argument(
        '--indent',
        type=int,
        default=2,
        metavar='NUM',
        help='JSON indentation (default: 2)'
    )

    # encode
    encode_parser = subparsers.add_parser(
        'encode',
        help='Encode a JSON array of objects as CSV',
        formatter_class=CustomHelpFormatter,
    )
    _add_common_arguments(encode_parser)
    encode_group = encode_parser.add_argument_group(
        '📤 Encode Options',
        'How the CSV output is written'
    )
    encode_group.add_argument(
        '--delimiter', '-d',
        type=str,
        default=defaults.encode_delimiter,
        metavar='CHAR',
        help=f'Field delimiter (default: {defaults.encode_delimiter!r})'
    )
    encode_group.add_argument(
        '--columns', '-c',
        type=str,
        default=None,
        metavar='SPEC',
        help='Columns to write, in order.\n'
             'Either "a,b,c" or "key=Header,key2=Header 2".\n'
             '(default: keys of the first row)'
    )
    encode_group.add_argument(
        '--no-header',
        dest='header',
        action='store_false',
        help='Omit the header line.'
    )
    encode_group.add_argument(
        '--crlf',
        dest='newline',
        action='store_const',
        const='\r\n',
        default=defaults.newline,
        help='Terminate lines with CRLF.'
    )
    encode_group.add_argument(
        '--bom',
        action='store_true',
        default=defaults.bom,
        help='Prefix the output with a byte-order mark.'
    )

    # detect
    detect_parser = subparsers.add_parser(
        'detect',
        help='Print the detected delimiter',
        formatter_class=CustomHelpFormatter,
    )
    detect_parser.add_argument(
        'input',
        metavar='INPUT',
        help='Input file path, or - for stdin'
    )
    detect_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose/debug output.'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    from .main import run_main

    parser = create_parser()
    args = parser.parse_args(argv)
    return run_main(args)


if __name__ == "__main__":
    sys.exit(main())
