"""
Pipeline orchestrator: read → split → parse → classify → transform → store.

High-level interface that converts a batch of PrusaSlicer/SuperSlicer
profiles and config bundles into OrcaSlicer profiles.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable

from .base_profiles import detect_plastic_type, generate_orca_profile, load_base_profile
from .bundle import split_config_bundle
from .classify import detect_profile_type
from .collisions import OutputStore
from .decisions import AmbiguityCache, DecisionProvider, accept_proposed
from .ini import InputReadError, parse_ini, read_text
from .models import (
    BatchOptions,
    BatchReport,
    ConversionOptions,
    ConversionResult,
    FileError,
    InputFile,
    ProfileType,
)
from .progress import NullProgressReporter, ProgressReporter
from .transform import FieldTransformer, sanitize_profile_name

logger = logging.getLogger(__name__)

NETWORK_PREFIX = "network_"

_INI_SUFFIX_RE = re.compile(r"\.ini$", re.IGNORECASE)


def merge_physical_printer_fields(profile: dict[str, Any], fields: dict[str, Any] | None) -> dict[str, Any]:
    """Copy every ``network_``-prefixed key of ``fields`` into ``profile`` (in place)."""
    if not fields:
        return profile
    merged = 0
    for key, value in fields.items():
        if key.startswith(NETWORK_PREFIX):
            profile[key] = value
            merged += 1
    logger.debug("Merged %d physical printer fields", merged)
    return profile


def output_name(file_name: str, profile_type: str | None = None, profile_name: str | None = None) -> str:
    """Composite Output Store key: ``file`` or ``file [type: name]`` for bundle blocks."""
    if profile_type is None:
        return file_name
    return f"{file_name} [{profile_type}: {profile_name}]"


class ConversionPipeline:
    """
    Converts a batch of inputs with one shared ambiguity cache and output store.

    Both are created at the start of ``run`` and dropped at its end, so
    decisions and collisions never leak from one batch into the next.

    Usage:
        pipeline = ConversionPipeline(BatchOptions(nozzle_size="0.6"))
        report = pipeline.run([InputFile(name="pla.ini", text=text)])
        export_outputs(report.outputs, Path("out"))
    """

    def __init__(
        self,
        options: BatchOptions | None = None,
        decisions: DecisionProvider | None = None,
        reporter: ProgressReporter | None = None,
        os_name: str | None = None,
    ):
        self.options = options or BatchOptions()
        self.decisions: DecisionProvider = decisions or accept_proposed
        self.reporter: ProgressReporter = reporter or NullProgressReporter()
        self.os_name = os_name

    def run(self, inputs: Iterable[InputFile]) -> BatchReport:
        """Convert every input in order, recording failures per profile."""
        cache = AmbiguityCache(self.decisions)
        store = OutputStore(self.options.on_existing)
        transformer = FieldTransformer(cache, os_name=self.os_name)
        report = BatchReport()

        items = list(inputs)
        for i, item in enumerate(items, 1):
            self.reporter.step(f"Converting {item.name}", i, len(items))
            self._convert_input(item, transformer, store, report)

        report.outputs = store.to_dict()
        self.reporter.update_status(
            f"Converted {len(report.results)} profile(s), {len(report.errors)} error(s)"
        )
        return report

    def _convert_input(
        self,
        item: InputFile,
        transformer: FieldTransformer,
        store: OutputStore,
        report: BatchReport,
    ) -> None:
        """Convert one input; each bundle block fails on its own."""
        blocks = split_config_bundle(item.text)
        if blocks:
            logger.debug("%s: config bundle with %d blocks", item.name, len(blocks))
            for block in blocks:
                self._try_convert_text(
                    item, block.content, transformer, store, report,
                    block_type=block.profile_type, block_name=block.profile_name,
                )
        else:
            logger.debug("%s: single profile", item.name)
            self._try_convert_text(item, item.text, transformer, store, report)

    def _try_convert_text(
        self,
        item: InputFile,
        text: str,
        transformer: FieldTransformer,
        store: OutputStore,
        report: BatchReport,
        block_type: str | None = None,
        block_name: str | None = None,
    ) -> None:
        try:
            self._convert_text(item, text, transformer, store, report, block_type, block_name)
        except Exception as e:
            name = output_name(item.name, block_type, block_name)
            logger.warning("Failed to convert %s: %s", name, e)
            report.errors.append(FileError(name=name, error=str(e)))

    def _convert_text(
        self,
        item: InputFile,
        text: str,
        transformer: FieldTransformer,
        store: OutputStore,
        report: BatchReport,
        block_type: str | None = None,
        block_name: str | None = None,
    ) -> None:
        fields = parse_ini(text)
        profile_type = detect_profile_type(fields)
        if profile_type == ProfileType.UNKNOWN:
            logger.info("%s: could not detect profile type", item.name)

        options = ConversionOptions(
            nozzle_size=item.nozzle_size or self.options.nozzle_size,
            profile_type=block_type,
            profile_name=block_name,
            plastic_type=item.plastic_type,
        )
        converted = transformer.transform(fields, profile_type, options)
        logger.debug(
            "%s: %d keys parsed, type=%s, %d keys converted",
            item.name, len(fields), profile_type.value, len(converted),
        )

        if profile_type == ProfileType.PRINTER and self.options.physical_printer_error:
            raise InputReadError(self.options.physical_printer_error)
        if profile_type == ProfileType.PRINTER and self.options.physical_printer:
            merge_physical_printer_fields(converted, self.options.physical_printer)

        if profile_type == ProfileType.FILAMENT and self.options.base_profile_dir is not None:
            plastic_type = item.plastic_type or detect_plastic_type(text, item.name)
            base = load_base_profile(plastic_type, self.options.base_profile_dir)
            name = block_name or Path(item.name).stem
            converted = generate_orca_profile(converted, plastic_type, name, base)

        name = output_name(item.name, block_type, block_name)
        stored = store.put(name, converted)
        report.results.append(ConversionResult(name=name, profile_type=profile_type, converted=stored))


def read_inputs(
    paths: Iterable[Path],
    nozzle_size: str | None = None,
    plastic_type: str | None = None,
) -> tuple[list[InputFile], list[FileError]]:
    """
    Read source files independently of each other.

    Files that cannot be read are returned as ``FileError``s instead of
    aborting the batch.
    """
    inputs: list[InputFile] = []
    errors: list[FileError] = []
    for path in paths:
        path = Path(path)
        try:
            text = read_text(path)
        except InputReadError as e:
            logger.warning("%s", e)
            errors.append(FileError(name=path.name, error=str(e)))
            continue
        inputs.append(InputFile(name=path.name, text=text, nozzle_size=nozzle_size, plastic_type=plastic_type))
    return inputs, errors


def export_filename(name: str) -> str:
    """File name for an output: ``.ini`` swapped for ``.json``, unsafe characters removed."""
    stem = _INI_SUFFIX_RE.sub("", name)
    # Windows has the strictest rules; use them so exports are portable
    return sanitize_profile_name(stem, "Windows").strip() + ".json"


def export_outputs(outputs: dict[str, dict[str, Any]], output_dir: Path) -> list[Path]:
    """Write one JSON file per output name into ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, profile in outputs.items():
        path = output_dir / export_filename(name)
        path.write_text(
            json.dumps(profile, indent=4, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug("Wrote %s", path)
        written.append(path)
    return written
