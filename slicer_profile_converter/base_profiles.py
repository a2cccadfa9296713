"""
OrcaSlicer base profile inheritance for converted filament profiles.

OrcaSlicer ships generic system filaments (``fdm_filament_pla.json`` ...)
that user filaments inherit from.  ``generate_orca_profile`` turns a
converted profile into such a user profile: it points ``inherits`` at the
base for the plastic type and keeps only the settings that differ from it.

Base profiles come either from a local directory (an OrcaSlicer install's
``system/OrcaFilamentLibrary/filament/base`` folder) or from the OrcaSlicer
GitHub repository.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Plastic type -> OrcaSlicer base profile file name
BASE_PROFILE_MAP: dict[str, str] = {
    "PLA": "fdm_filament_pla.json",
    "PETG": "fdm_filament_petg.json",
    "ABS": "fdm_filament_abs.json",
    "NYLON": "fdm_filament_nylon.json",
}

REQUIRED_FIELDS = ["type", "name", "inherits", "filament_diameter", "filament_density"]

DEFAULT_FIELD_VALUES: dict[str, str] = {
    "type": "filament",
    "filament_diameter": "1.75",
    "filament_density": "1.24",
}

# Plastic types offered for selection, in display order
PLASTIC_TYPES = ["PLA", "PETG", "ABS", "NYLON", "TPU", "PC", "ASA", "HIPS", "PVA", "PP"]

# Filename hints checked in order when the INI text has no usable filament_type
_FILENAME_HINTS: list[tuple[str, str]] = [
    ("petg", "PETG"),
    ("abs", "ABS"),
    ("nylon", "NYLON"),
    ("tpu", "TPU"),
    ("pc", "PC"),
    ("asa", "ASA"),
    ("hips", "HIPS"),
    ("pva", "PVA"),
    ("pp", "PP"),
]

_FILAMENT_TYPE_RE = re.compile(r"^\s*filament_type\s*=\s*(\w+)", re.IGNORECASE | re.MULTILINE)

ORCA_GITHUB_REPO = "SoftFever/OrcaSlicer"
ORCA_BASE_PROFILE_PATH = "resources/profiles/OrcaFilamentLibrary/filament/base"

# Keys generate_orca_profile sets itself
_RESERVED_KEYS = ("type", "name", "inherits")


class BaseProfileError(Exception):
    """Raised when a base profile cannot be resolved."""


class UnknownPlasticTypeError(BaseProfileError):
    """Raised for a plastic type without a base profile."""

    def __init__(self, plastic_type: str):
        self.plastic_type = plastic_type
        super().__init__(f"Unknown plastic type: {plastic_type}")


class BaseProfileNotFoundError(BaseProfileError):
    """Raised when the base profile file does not exist or cannot be read."""


def base_profile_filename(plastic_type: str) -> str:
    """Return the base profile file name for a plastic type (case-insensitive)."""
    filename = BASE_PROFILE_MAP.get(plastic_type.upper())
    if filename is None:
        raise UnknownPlasticTypeError(plastic_type)
    return filename


def load_base_profile(plastic_type: str, base_dir: Path) -> dict[str, Any]:
    """Load the base profile for ``plastic_type`` from a local directory."""
    path = Path(base_dir) / base_profile_filename(plastic_type)
    if not path.exists():
        raise BaseProfileNotFoundError(f"Base profile not found: {path}")
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BaseProfileNotFoundError(f"Cannot read base profile {path}: {e}") from e


def fetch_base_profile(
    plastic_type: str,
    ref: str = "main",
    max_retries: int = 3,
) -> dict[str, Any]:
    """Download the base profile for ``plastic_type`` from the OrcaSlicer repository."""
    filename = base_profile_filename(plastic_type)
    url = (
        f"https://raw.githubusercontent.com/{ORCA_GITHUB_REPO}/{ref}/"
        f"{ORCA_BASE_PROFILE_PATH}/{filename}"
    )
    last_error: Exception | None = None
    for attempt in range(1, max_retries + 1):
        try:
            resp = requests.get(url, timeout=30)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise BaseProfileNotFoundError(f"Base profile not found: {url}") from e
            last_error = e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            last_error = e
        except ValueError as e:
            raise BaseProfileNotFoundError(f"Invalid JSON in base profile {url}: {e}") from e

        if attempt < max_retries:
            logger.warning("Base profile download attempt %d/%d failed: %s", attempt, max_retries, last_error)

    raise BaseProfileNotFoundError(f"Cannot download base profile {url}: {last_error}")


def generate_orca_profile(
    source: dict[str, Any],
    plastic_type: str,
    profile_name: str,
    base: dict[str, Any],
) -> dict[str, Any]:
    """
    Build a user filament profile inheriting from ``base``.

    Source values are copied when the base lacks the key (or holds an empty
    value) or holds a different value.  Required fields missing from both
    the result and the base get a default.
    """
    filename = base_profile_filename(plastic_type)
    result: dict[str, Any] = {
        "type": "filament",
        "name": profile_name,
        "inherits": filename.removesuffix(".json"),
    }

    for key, value in source.items():
        if key in _RESERVED_KEYS:
            continue
        if not base.get(key) or value != base[key]:
            result[key] = value

    for field in REQUIRED_FIELDS:
        if field not in result and field not in base:
            result[field] = DEFAULT_FIELD_VALUES.get(field, "")

    return result


def detect_plastic_type(text: str | None, filename: str = "") -> str:
    """
    Guess the plastic type of a filament profile.

    Uses ``filament_type`` from the INI text when it names a known plastic,
    then hints in the file name, and falls back to ``PLA``.
    """
    if text:
        match = _FILAMENT_TYPE_RE.search(text)
        if match and match.group(1).upper() in PLASTIC_TYPES:
            return match.group(1).upper()
    lowered = filename.lower()
    for hint, plastic_type in _FILENAME_HINTS:
        if hint in lowered:
            return plastic_type
    return "PLA"
