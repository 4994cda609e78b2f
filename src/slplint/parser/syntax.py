"""JSON syntax checking and source reading."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from slplint.exceptions import PipelineSyntaxError

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


class PairsDict(dict):
    """JSON object that remembers its raw key/value pairs.

    The dict view collapses duplicate keys like any JSON parser does;
    ``pairs`` keeps every occurrence in source order.
    """

    def __init__(self, pairs: list[tuple[str, Any]]):
        super().__init__(pairs)
        self.pairs = pairs


def parse_json(text: str, keep_pairs: bool = False) -> Any:
    """Parse a document with the general-purpose JSON parser.

    Args:
        text: Document text
        keep_pairs: Return objects as PairsDict so duplicate keys survive

    Raises:
        PipelineSyntaxError: If the text is not well-formed JSON
    """
    try:
        if keep_pairs:
            return json.loads(text, object_pairs_hook=PairsDict)
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PipelineSyntaxError(f"JSON syntax error: {e}", line=e.lineno, column=e.colno)
    except RecursionError:
        raise PipelineSyntaxError("JSON syntax error: document nesting is too deep")


def read_source(path: str | Path) -> tuple[str, str]:
    """Read a pipeline document fully as UTF-8.

    Args:
        path: File path, or "-" for standard input

    Returns:
        Tuple of (text, source label)

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        PipelineSyntaxError: If the bytes are not valid UTF-8
    """
    if str(path) == STDIN_PATH:
        data = sys.stdin.buffer.read()
        label = "<stdin>"
    else:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File '{path}' not found.")
        with open(path, "rb") as f:
            data = f.read()
        label = str(path)

    logger.debug(f"Read {len(data)} bytes from {label}")

    try:
        return data.decode("utf-8-sig"), label
    except UnicodeDecodeError as e:
        raise PipelineSyntaxError(f"JSON syntax error: {label} is not valid UTF-8 ({e.reason})")
