from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ProfileType(str, Enum):
    PRINT = "print"
    FILAMENT = "filament"
    PRINTER = "printer"
    UNKNOWN = "unknown"


class CollisionPolicy(str, Enum):
    SKIP = "skip"
    OVERWRITE = "overwrite"
    MERGE = "merge"


# Raw values are strings, or None for the source literal ``nil``.
ParsedFields = dict[str, str | None]


class BundleBlock(BaseModel):
    """One ``[type: name]`` section cut out of a config bundle."""

    profile_type: str
    profile_name: str
    content: str


class ConversionOptions(BaseModel):
    """Per-conversion parameters passed to the field transformer."""

    nozzle_size: str | None = None
    profile_type: str | None = None  # bundle section type, e.g. "filament"
    profile_name: str | None = None  # bundle section name
    plastic_type: str | None = None  # "PLA", "PETG", ...


class BatchOptions(BaseModel):
    """Configuration shared by every conversion in one batch."""

    nozzle_size: str = "0.4"
    on_existing: CollisionPolicy = CollisionPolicy.SKIP
    physical_printer: dict[str, Any] | None = None
    physical_printer_error: str | None = None  # set when the physical printer file could not be read
    base_profile_dir: Path | None = None


class InputFile(BaseModel):
    """A source file's text with optional per-file overrides."""

    name: str
    text: str
    nozzle_size: str | None = None
    plastic_type: str | None = None


class ConversionResult(BaseModel):
    """A converted profile as stored under its output name."""

    name: str
    profile_type: ProfileType
    converted: dict[str, Any] = Field(default_factory=dict)


class FileError(BaseModel):
    """An input that failed to convert."""

    name: str
    error: str


class BatchReport(BaseModel):
    """Result of converting a batch of inputs."""

    results: list[ConversionResult] = Field(default_factory=list)
    errors: list[FileError] = Field(default_factory=list)
    outputs: dict[str, dict[str, Any]] = Field(default_factory=dict)
