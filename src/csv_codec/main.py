"""
Main execution logic for CSV Codec.

This module contains the run functions behind each CLI command:
- decode: CSV file -> JSON
- encode: JSON file -> CSV
- detect: print the detected delimiter
"""

import gzip
import json
import logging
import re
import sys
from typing import Dict, List, Union

from .config import DETECTION_SAMPLE_SIZE, DecodeConfig, EncodeConfig
from .decoder import CSVDecoder
from .delimiter import detect_delimiter
from .encoder import CSVEncoder
from .errors import CSVCodecError
from .tokenizer import split_lines
from .utils import normalize_newlines, strip_bom


_WHITESPACE_RE = re.compile(r'\s+')


def read_text(path: str) -> str:
    """
    Read a whole input as text.

    Args:
        path: File path, or "-" for stdin. Paths ending in .gz are
            decompressed.

    Returns:
        File contents (UTF-8, BOM left in place for the decoder)
    """
    if path == '-':
        return sys.stdin.read()
    if path.endswith('.gz'):
        with gzip.open(path, 'rt', encoding='utf-8', newline='') as f:
            return f.read()
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_text(path: str, text: str) -> None:
    """Write text to a file, or to stdout when path is "-"."""
    if path == '-':
        sys.stdout.write(text)
        if not text.endswith('\n'):
            sys.stdout.write('\n')
        return
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def snake_case_header(name: str, index: int) -> str:
    """Header transform used by --snake-case-headers."""
    return _WHITESPACE_RE.sub('_', name.lower())


def parse_columns_option(option: str) -> Union[List[str], Dict[str, str]]:
    """
    Parse the --columns option.

    "a,b" becomes ["a", "b"]; "a=A,b=B" becomes {"a": "A", "b": "B"}.
    Mixing both forms maps bare keys to themselves.
    """
    parts = [p.strip() for p in option.split(',') if p.strip()]
    if not any('=' in p for p in parts):
        return parts

    mapping: Dict[str, str] = {}
    for part in parts:
        key, _, name = part.partition('=')
        mapping[key.strip()] = name.strip() if name.strip() else key.strip()
    return mapping


def run_decode(args) -> None:
    config = DecodeConfig(
        header=args.header,
        delimiter=args.delimiter,
        skip_empty_lines=args.skip_empty_lines,
        trim=args.trim,
        relaxed=args.relaxed,
    )
    transform = snake_case_header if args.snake_case_headers else None
    decoder = CSVDecoder.from_config(config, transform_header=transform)

    text = read_text(args.input)
    if config.header:
        result = decoder.decode_records(text)
    else:
        result = decoder.decode_rows(text)

    logging.info(f"Decoded {len(result)} row(s) from {args.input}")
    write_text(args.output, json.dumps(result, indent=args.indent, ensure_ascii=False))


def run_encode(args) -> None:
    columns = parse_columns_option(args.columns) if args.columns else None
    config = EncodeConfig(
        header=args.header,
        delimiter=args.delimiter,
        columns=columns,
        newline=args.newline,
        bom=args.bom,
    )

    rows = json.loads(read_text(args.input))
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValueError(f"{args.input}: expected a JSON array of objects")

    text = CSVEncoder.from_config(config).encode(rows)
    logging.info(f"Encoded {len(rows)} row(s) from {args.input}")
    write_text(args.output, text)


def run_detect(args) -> None:
    lines = split_lines(normalize_newlines(strip_bom(read_text(args.input))))
    lines = [line for line in lines if line]
    delimiter = detect_delimiter(lines[:DETECTION_SAMPLE_SIZE])
    write_text('-', repr(delimiter))


COMMANDS = {
    'decode': run_decode,
    'encode': run_encode,
    'detect': run_detect,
}


def run_main(args) -> int:
    """
    Main entry point that dispatches to the requested command.

    Args:
        args: Parsed command line arguments

    Returns:
        Process exit status
    """
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s %(levelname)s: %(message)s'
    )

    try:
        COMMANDS[args.command](args)
    except CSVCodecError as e:
        logging.error(f"{args.input}: {e}")
        return 1
    except (OSError, ValueError) as e:
        logging.error(f"Error processing {args.input}: {e}")
        return 1
    return 0
