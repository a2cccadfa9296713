"""
Sectionless ``key = value`` parser for PrusaSlicer/SuperSlicer INI text.

Sections are not recognized here; config bundles are split into blocks by
``bundle.py`` first and each block is parsed on its own.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .models import ParsedFields

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_BLANK_RE = re.compile(r"^\s*$")
_COMMENT_RE = re.compile(r"^\s*[#;]")
_KEY_VALUE_RE = re.compile(r"^\s*([^=]+?)\s*=\s*(.*?)\s*$")

# Source literals with special meaning
NIL_LITERAL = "nil"
QUOTED_EMPTY_LITERAL = '""'


class InputReadError(Exception):
    """Raised when an input or referenced file cannot be read."""


def parse_ini(text: str) -> ParsedFields:
    """
    Parse ``key = value`` lines into a flat mapping.

    Blank lines and lines whose first non-whitespace character is ``#`` or
    ``;`` are skipped, as are lines without ``=``.  ``nil`` becomes ``None``
    and ``""`` becomes an empty string.  The last occurrence of a key wins.
    """
    fields: ParsedFields = {}
    for line in _LINE_SPLIT_RE.split(text):
        if _BLANK_RE.match(line) or _COMMENT_RE.match(line):
            continue
        match = _KEY_VALUE_RE.match(line)
        if not match:
            continue
        key = match.group(1).strip()
        value: str | None = match.group(2).strip()
        if value == NIL_LITERAL:
            value = None
        elif value == QUOTED_EMPTY_LITERAL:
            value = ""
        fields[key] = value
    return fields


def read_text(path: Path) -> str:
    """Read a source file, wrapping OS errors in ``InputReadError``."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputReadError(f"Cannot read {path}: {e}") from e


def load_field_set(path: Path) -> dict[str, Any]:
    """Load a physical printer field set from a ``.json`` or INI file."""
    text = read_text(path)
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InputReadError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise InputReadError(f"Expected a JSON object in {path}")
        return data
    fields = parse_ini(text)
    logger.debug("Loaded %d fields from %s", len(fields), path)
    return fields
