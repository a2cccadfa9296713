"""Tests for batch conversion."""

import json

from conftest import BUNDLE_INI, FILAMENT_INI, PRINT_INI, PRINTER_INI

from slicer_profile_converter.models import BatchOptions, CollisionPolicy, InputFile, ProfileType
from slicer_profile_converter.pipeline import (
    ConversionPipeline,
    export_filename,
    export_outputs,
    merge_physical_printer_fields,
    output_name,
    read_inputs,
)


def _run(inputs, **options):
    return ConversionPipeline(BatchOptions(**options), os_name="Linux").run(inputs)


class TestConversionPipeline:
    def test_single_profile(self):
        report = _run([InputFile(name="pla.ini", text=FILAMENT_INI)])
        assert report.errors == []
        assert len(report.results) == 1
        result = report.results[0]
        assert result.name == "pla.ini"
        assert result.profile_type == ProfileType.FILAMENT
        assert report.outputs["pla.ini"]["nozzle_temperature"] == "215"
        assert report.outputs["pla.ini"]["nozzle_size"] == "0.4"

    def test_bundle(self):
        report = _run([InputFile(name="bundle.ini", text=BUNDLE_INI)])
        assert [r.name for r in report.results] == [
            "bundle.ini [filament: Generic PLA]",
            "bundle.ini [printer: MK3S]",
            "bundle.ini [print: 0.20mm QUALITY]",
        ]
        assert [r.profile_type for r in report.results] == [
            ProfileType.FILAMENT, ProfileType.PRINTER, ProfileType.PRINT,
        ]
        printer = report.outputs["bundle.ini [printer: MK3S]"]
        assert printer["profile_type"] == "printer"
        assert printer["profile_name"] == "MK3S"
        assert printer["gcode_flavor"] == "marlin2"

    def test_per_file_overrides(self):
        report = _run([InputFile(name="p.ini", text=PRINTER_INI, nozzle_size="0.6", plastic_type="PETG")])
        assert report.outputs["p.ini"]["nozzle_size"] == "0.6"
        assert report.outputs["p.ini"]["_selectedPlasticType"] == "PETG"

    def test_unknown_profile(self):
        report = _run([InputFile(name="x.ini", text="foo = bar\n")])
        assert report.results[0].profile_type == ProfileType.UNKNOWN
        assert report.outputs["x.ini"] == {}

    def test_physical_printer_merge(self):
        physical = {"network_host": "192.168.1.2", "print_host": "octopi.local"}
        report = _run(
            [InputFile(name="p.ini", text=PRINTER_INI), InputFile(name="f.ini", text=FILAMENT_INI)],
            physical_printer=physical,
        )
        assert report.outputs["p.ini"]["network_host"] == "192.168.1.2"
        assert "print_host" not in report.outputs["p.ini"]
        assert "network_host" not in report.outputs["f.ini"]

    def test_collision_skip(self):
        report = _run([
            InputFile(name="a.ini", text="layer_height = 0.2\nperimeters = 2\n"),
            InputFile(name="a.ini", text="layer_height = 0.3\n"),
        ])
        assert report.outputs["a.ini"]["layer_height"] == "0.2"

    def test_collision_overwrite(self):
        report = _run([
            InputFile(name="a.ini", text="layer_height = 0.2\nperimeters = 2\n"),
            InputFile(name="a.ini", text="layer_height = 0.3\n"),
        ], on_existing=CollisionPolicy.OVERWRITE)
        assert report.outputs["a.ini"] == {"layer_height": "0.3", "nozzle_size": "0.4"}

    def test_collision_merge(self):
        report = _run([
            InputFile(name="a.ini", text="layer_height = 0.2\nperimeters = 2\n"),
            InputFile(name="a.ini", text="layer_height = 0.3\n"),
        ], on_existing=CollisionPolicy.MERGE)
        assert report.outputs["a.ini"]["layer_height"] == "0.3"
        assert report.outputs["a.ini"]["wall_loops"] == "2"
        assert report.results[1].converted == report.outputs["a.ini"]

    def test_decisions_are_scoped_to_one_run(self):
        calls = []

        def provider(ambiguity):
            calls.append(ambiguity.kind)
            return False

        pipeline = ConversionPipeline(decisions=provider)
        inputs = [InputFile(name="a.ini", text=FILAMENT_INI), InputFile(name="b.ini", text=FILAMENT_INI)]
        first = pipeline.run(inputs)
        second = pipeline.run(inputs)

        assert len(calls) == 2
        assert first.outputs["b.ini"]["compatible_printers_condition"] == ""
        assert second.outputs["a.ini"]["compatible_printers_condition"] == ""

    def test_support_style_decision_shared_across_files(self):
        report = _run([
            InputFile(name="a.ini", text=PRINT_INI),
            InputFile(name="b.ini", text=PRINT_INI.replace("organic", "grid")),
        ])
        assert report.outputs["b.ini"]["support_style"] == {"support_type": "tree", "support_style": "organic"}

    def test_failure_is_per_input(self, tmp_path):
        report = _run([
            InputFile(name="pla.ini", text=FILAMENT_INI),
            InputFile(name="p.ini", text=PRINTER_INI),
        ], base_profile_dir=tmp_path)
        assert [e.name for e in report.errors] == ["pla.ini"]
        assert "fdm_filament_pla.json" in report.errors[0].error
        assert list(report.outputs) == ["p.ini"]

    def test_failure_is_per_bundle_block(self, tmp_path):
        bundle = "[filament: Flex]\nfilament_type = TPU\n[printer: MK3]\nnozzle_diameter = 0.4\n"
        report = _run([InputFile(name="bundle.ini", text=bundle)], base_profile_dir=tmp_path)
        assert [e.name for e in report.errors] == ["bundle.ini [filament: Flex]"]
        assert "Unknown plastic type: TPU" in report.errors[0].error
        assert list(report.outputs) == ["bundle.ini [printer: MK3]"]
        assert [r.name for r in report.results] == ["bundle.ini [printer: MK3]"]

    def test_physical_printer_error_fails_printers_only(self):
        report = _run(
            [InputFile(name="p.ini", text=PRINTER_INI), InputFile(name="f.ini", text=FILAMENT_INI)],
            physical_printer_error="Cannot read nope.ini",
        )
        assert [e.name for e in report.errors] == ["p.ini"]
        assert report.errors[0].error == "Cannot read nope.ini"
        assert list(report.outputs) == ["f.ini"]

    def test_base_profile_inheritance(self, tmp_path):
        (tmp_path / "fdm_filament_pla.json").write_text(json.dumps({
            "nozzle_temperature": "210",
            "filament_diameter": "1.75",
            "filament_density": "1.24",
        }))
        report = _run([InputFile(name="pla.ini", text=FILAMENT_INI)], base_profile_dir=tmp_path)
        profile = report.outputs["pla.ini"]
        assert profile["type"] == "filament"
        assert profile["name"] == "pla"
        assert profile["inherits"] == "fdm_filament_pla"
        assert profile["nozzle_temperature"] == "215"
        assert "filament_diameter" not in profile

    def test_bundle_block_name_used_for_inheritance(self, tmp_path):
        (tmp_path / "fdm_filament_pla.json").write_text("{}")
        report = _run([InputFile(name="bundle.ini", text=BUNDLE_INI)], base_profile_dir=tmp_path)
        assert report.outputs["bundle.ini [filament: Generic PLA]"]["name"] == "Generic PLA"


def test_merge_physical_printer_fields():
    profile = {"gcode_flavor": "marlin2"}
    merge_physical_printer_fields(profile, {"network_host": "h", "network_port": "80", "host": "x"})
    assert profile == {"gcode_flavor": "marlin2", "network_host": "h", "network_port": "80"}
    assert merge_physical_printer_fields({"a": 1}, None) == {"a": 1}


def test_output_name():
    assert output_name("a.ini") == "a.ini"
    assert output_name("a.ini", "filament", "PLA") == "a.ini [filament: PLA]"


def test_read_inputs(tmp_path):
    good = tmp_path / "good.ini"
    good.write_text(FILAMENT_INI)
    inputs, errors = read_inputs([good, tmp_path / "missing.ini"], nozzle_size="0.6")
    assert [i.name for i in inputs] == ["good.ini"]
    assert inputs[0].nozzle_size == "0.6"
    assert [e.name for e in errors] == ["missing.ini"]


def test_export_filename():
    assert export_filename("PLA.ini") == "PLA.json"
    assert export_filename("b.ini [filament: X]") == "b.ini [filament X].json"


def test_export_outputs(tmp_path):
    written = export_outputs({"PLA.ini": {"filament_type": "PLA"}}, tmp_path / "out")
    assert written == [tmp_path / "out" / "PLA.json"]
    assert json.loads(written[0].read_text()) == {"filament_type": "PLA"}
