"""
slicer_profile_converter - PrusaSlicer/SuperSlicer to OrcaSlicer profile converter

Parses INI profiles and config bundles, detects what kind of profile each
one is, translates field names and values to OrcaSlicer's vocabulary, and
resolves output name collisions within a batch.
"""

from .models import (
    ProfileType,
    CollisionPolicy,
    BundleBlock,
    ConversionOptions,
    BatchOptions,
    InputFile,
    ConversionResult,
    FileError,
    BatchReport,
)
from .ini import parse_ini, load_field_set, InputReadError
from .bundle import split_config_bundle, is_config_bundle
from .classify import detect_profile_type
from .transform import FieldTransformer, RULES, Rule
from .units import percent_to_fraction, percent_to_millimeter, millimeter_to_percent
from .collisions import resolve_collision, OutputStore
from .decisions import (
    Ambiguity,
    AmbiguityKind,
    AmbiguityCache,
    accept_proposed,
    discard_conditions,
    InteractiveDecisionProvider,
)
from .base_profiles import (
    generate_orca_profile,
    load_base_profile,
    fetch_base_profile,
    detect_plastic_type,
    BaseProfileError,
    UnknownPlasticTypeError,
    BaseProfileNotFoundError,
)
from .pipeline import (
    ConversionPipeline,
    merge_physical_printer_fields,
    read_inputs,
    export_outputs,
)

__all__ = [
    # Enums
    "ProfileType",
    "CollisionPolicy",
    "AmbiguityKind",
    # Models
    "BundleBlock",
    "ConversionOptions",
    "BatchOptions",
    "InputFile",
    "ConversionResult",
    "FileError",
    "BatchReport",
    "Ambiguity",
    # Parsing & Classification
    "parse_ini",
    "load_field_set",
    "split_config_bundle",
    "is_config_bundle",
    "detect_profile_type",
    # Transformation
    "FieldTransformer",
    "RULES",
    "Rule",
    "percent_to_fraction",
    "percent_to_millimeter",
    "millimeter_to_percent",
    # Decisions & Collisions
    "AmbiguityCache",
    "accept_proposed",
    "discard_conditions",
    "InteractiveDecisionProvider",
    "resolve_collision",
    "OutputStore",
    # Base Profiles
    "generate_orca_profile",
    "load_base_profile",
    "fetch_base_profile",
    "detect_plastic_type",
    # Pipeline
    "ConversionPipeline",
    "merge_physical_printer_fields",
    "read_inputs",
    "export_outputs",
    # Exceptions
    "InputReadError",
    "BaseProfileError",
    "UnknownPlasticTypeError",
    "BaseProfileNotFoundError",
]
