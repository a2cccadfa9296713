"""
slicer_profile_converter CLI - Convert PrusaSlicer/SuperSlicer profiles to OrcaSlicer.

Usage:
    slicer-profile-converter <command> [options]
    python -m slicer_profile_converter <command> [options]
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from slicer_profile_converter import BatchOptions, CollisionPolicy, ConversionPipeline

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="slicer-profile-converter",
        description="Convert PrusaSlicer/SuperSlicer INI profiles to OrcaSlicer JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slicer-profile-converter convert PLA.ini MK3S.ini --nozzle 0.4 -o out
  slicer-profile-converter convert PrusaSlicer_config_bundle.ini --on-existing merge
  slicer-profile-converter convert printer.ini --physical-printer my_printer.ini
  slicer-profile-converter split PrusaSlicer_config_bundle.ini
  slicer-profile-converter inherit out/PETG.json --plastic-type PETG --fetch

Environment variables:
  SLICER_CONVERT_NOZZLE        Default nozzle diameter (instead of "0.4")
  SLICER_CONVERT_ON_EXISTING   Default collision policy (instead of "skip")
  ORCA_BASE_PROFILES_DIR       Directory holding OrcaSlicer base filament profiles
        """,
    )

    parser.add_argument(
        "--verbose", "-V", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Suppress non-error output (logging only)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        metavar="<command>",
    )

    # --- convert ---
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert INI profiles and config bundles to OrcaSlicer JSON",
    )
    convert_parser.add_argument(
        "inputs", nargs="+", type=Path,
        help="INI profile or config bundle files",
    )
    convert_parser.add_argument(
        "--nozzle",
        help="Nozzle diameter used for percentage conversions (default: $SLICER_CONVERT_NOZZLE or 0.4)",
    )
    convert_parser.add_argument(
        "--on-existing",
        choices=[p.value for p in CollisionPolicy],
        help="What to do when two profiles resolve to the same output name "
             "(default: $SLICER_CONVERT_ON_EXISTING or skip)",
    )
    convert_parser.add_argument(
        "--physical-printer", type=Path,
        help="Physical printer INI/JSON whose network_* fields are merged into printer profiles",
    )
    convert_parser.add_argument(
        "--plastic-type",
        help="Plastic type of the filament profiles (PLA, PETG, ABS, NYLON, ...)",
    )
    convert_parser.add_argument(
        "--base-profiles", type=Path,
        help="Directory of OrcaSlicer base filament profiles; filament outputs inherit "
             "from them (default: $ORCA_BASE_PROFILES_DIR)",
    )
    decisions_group = convert_parser.add_mutually_exclusive_group()
    decisions_group.add_argument(
        "--interactive", action="store_true",
        help="Ask before applying the support style and compatibility conditions",
    )
    decisions_group.add_argument(
        "--discard-conditions", action="store_true",
        help="Drop compatible_*_condition values instead of keeping them",
    )
    convert_parser.add_argument(
        "--output", "-o", type=Path, default=Path("output"),
        help="Output directory (default: output)",
    )
    convert_parser.add_argument(
        "--json", action="store_true",
        help="Print a machine-readable report",
    )
    convert_parser.set_defaults(func=run_convert)

    # --- split ---
    split_parser = subparsers.add_parser(
        "split",
        help="List the profiles contained in a config bundle",
    )
    split_parser.add_argument("bundle", type=Path, help="Config bundle INI file")
    split_parser.add_argument(
        "--json", action="store_true",
        help="Output as JSON",
    )
    split_parser.set_defaults(func=run_split)

    # --- inherit ---
    inherit_parser = subparsers.add_parser(
        "inherit",
        help="Rewrite a converted filament profile to inherit from an OrcaSlicer base profile",
    )
    inherit_parser.add_argument("profile", type=Path, help="Converted filament JSON file")
    inherit_parser.add_argument(
        "--plastic-type",
        help="Plastic type selecting the base profile (default: detected)",
    )
    inherit_parser.add_argument(
        "--name",
        help="Profile name (default: file name without extension)",
    )
    inherit_parser.add_argument(
        "--base-profiles", type=Path,
        help="Directory of OrcaSlicer base filament profiles (default: $ORCA_BASE_PROFILES_DIR)",
    )
    inherit_parser.add_argument(
        "--fetch", action="store_true",
        help="Download the base profile from the OrcaSlicer repository",
    )
    inherit_parser.add_argument(
        "--ref", default="main",
        help="OrcaSlicer git ref used with --fetch (default: main)",
    )
    inherit_parser.add_argument(
        "--output", "-o", type=Path,
        help="Output file (default: print to stdout)",
    )
    inherit_parser.set_defaults(func=run_inherit)

    return parser


def _default_nozzle() -> str:
    """Return the default nozzle diameter from env or fallback."""
    return os.environ.get("SLICER_CONVERT_NOZZLE", "0.4")


def _default_on_existing() -> str:
    """Return the default collision policy from env or fallback."""
    return os.environ.get("SLICER_CONVERT_ON_EXISTING", CollisionPolicy.SKIP.value)


def _default_base_profiles() -> Path | None:
    """Return the base profile directory from env, if set."""
    value = os.environ.get("ORCA_BASE_PROFILES_DIR")
    return Path(value) if value else None


def _make_reporter(use_json: bool):
    """Create the appropriate progress reporter."""
    from slicer_profile_converter.progress import RichProgressReporter, NullProgressReporter
    return NullProgressReporter() if use_json else RichProgressReporter()


def _make_decisions(args: argparse.Namespace):
    """Pick the decision provider for ambiguous fields."""
    from slicer_profile_converter.decisions import (
        InteractiveDecisionProvider,
        accept_proposed,
        discard_conditions,
    )
    from slicer_profile_converter.tables import SUPPORT_STYLES

    if args.interactive:
        return InteractiveDecisionProvider(SUPPORT_STYLES)
    if args.discard_conditions:
        return discard_conditions
    return accept_proposed


def run_convert(args: argparse.Namespace) -> int:
    """Execute the convert command: convert a batch and export the results."""
    from slicer_profile_converter.ini import InputReadError, load_field_set
    from slicer_profile_converter.models import FileError
    from slicer_profile_converter.pipeline import export_outputs, read_inputs

    use_json = getattr(args, "json", False)
    reporter = _make_reporter(use_json)

    physical_printer = None
    physical_printer_error = None
    read_errors: list[FileError] = []
    if args.physical_printer:
        try:
            physical_printer = load_field_set(args.physical_printer)
        except InputReadError as e:
            # Only printer profiles need it; they fail, the rest still convert
            logger.warning("%s", e)
            physical_printer_error = str(e)
            read_errors.append(FileError(name=args.physical_printer.name, error=str(e)))

    options = BatchOptions(
        nozzle_size=args.nozzle or _default_nozzle(),
        on_existing=CollisionPolicy(args.on_existing or _default_on_existing()),
        physical_printer=physical_printer,
        physical_printer_error=physical_printer_error,
        base_profile_dir=args.base_profiles or _default_base_profiles(),
    )

    inputs, input_errors = read_inputs(args.inputs, plastic_type=args.plastic_type)
    pipeline = ConversionPipeline(options, decisions=_make_decisions(args), reporter=reporter)
    report = pipeline.run(inputs)
    errors = read_errors + input_errors + report.errors

    written = export_outputs(report.outputs, args.output) if report.outputs else []

    if use_json:
        print(json.dumps({
            "results": [{
                "name": r.name,
                "profile_type": r.profile_type.value,
                "keys": len(r.converted),
            } for r in report.results],
            "written": [str(p) for p in written],
            "errors": [{"name": e.name, "error": e.error} for e in errors],
        }, indent=2))
    else:
        print(f"\nConverted {len(report.results)} profile(s):")
        for r in report.results:
            print(f"  {r.name} [{r.profile_type.value}]: {len(r.converted)} keys")
        if written:
            print(f"\nWrote {len(written)} file(s) to {args.output}")
        if errors:
            print(f"\n  Errors ({len(errors)}):")
            for e in errors:
                print(f"    {e.name}: {e.error}")

    if errors and not report.results:
        return 1  # All failed
    if errors:
        return 2  # Partial success
    return 0


def run_split(args: argparse.Namespace) -> int:
    """Execute the split command: list bundle blocks and their detected types."""
    from slicer_profile_converter.bundle import split_config_bundle
    from slicer_profile_converter.classify import detect_profile_type
    from slicer_profile_converter.ini import parse_ini, read_text

    blocks = split_config_bundle(read_text(args.bundle))
    if not blocks:
        logger.error("%s is not a config bundle", args.bundle)
        return 1

    rows = []
    for block in blocks:
        fields = parse_ini(block.content)
        rows.append({
            "profile_type": block.profile_type,
            "profile_name": block.profile_name,
            "detected_type": detect_profile_type(fields).value,
            "keys": len(fields),
        })

    if args.json:
        print(json.dumps(rows, indent=2))
    else:
        print(f"{len(rows)} profile(s) in {args.bundle.name}:")
        for row in rows:
            print(
                f"  [{row['profile_type']}: {row['profile_name']}] "
                f"detected={row['detected_type']} keys={row['keys']}"
            )
    return 0


def run_inherit(args: argparse.Namespace) -> int:
    """Execute the inherit command: merge a converted filament with its base profile."""
    from slicer_profile_converter.base_profiles import (
        detect_plastic_type,
        fetch_base_profile,
        generate_orca_profile,
        load_base_profile,
    )
    from slicer_profile_converter.tables import PLASTIC_TYPE_KEY

    with args.profile.open(encoding="utf-8") as f:
        source = json.load(f)

    plastic_type = (
        args.plastic_type
        or source.get(PLASTIC_TYPE_KEY)
        or detect_plastic_type(None, args.profile.name)
    )

    if args.fetch:
        base = fetch_base_profile(plastic_type, ref=args.ref)
    else:
        base_dir = args.base_profiles or _default_base_profiles()
        if base_dir is None:
            logger.error("No base profile directory: use --base-profiles, ORCA_BASE_PROFILES_DIR or --fetch")
            return 1
        base = load_base_profile(plastic_type, base_dir)

    profile = generate_orca_profile(source, plastic_type, args.name or args.profile.stem, base)
    output = json.dumps(profile, indent=4, ensure_ascii=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output, encoding="utf-8")
    else:
        print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if getattr(args, "verbose", False):
        log_level = logging.DEBUG
    elif getattr(args, "quiet", False):
        log_level = logging.ERROR
    else:
        log_level = logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if hasattr(args, "func"):
        try:
            return args.func(args)
        except KeyboardInterrupt:
            logger.error("Interrupted")
            return 1
        except Exception as e:
            logger.error("%s", e)
            if getattr(args, "verbose", False):
                logger.debug("Traceback:", exc_info=True)
            return 1
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
