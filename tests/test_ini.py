"""Tests for INI parsing and field set loading."""

import json

import pytest

from slicer_profile_converter.ini import InputReadError, load_field_set, parse_ini, read_text


class TestParseIni:
    def test_key_values(self):
        fields = parse_ini("layer_height = 0.2\nperimeters=3\n")
        assert fields == {"layer_height": "0.2", "perimeters": "3"}

    def test_skips_comments_blank_and_malformed_lines(self):
        text = "# comment\n; other comment\n\n   \nno equals here\n[vendor]\nkey = value\n"
        assert parse_ini(text) == {"key": "value"}

    def test_trims_keys_and_values(self):
        assert parse_ini("   spaced key   =   spaced value   ") == {"spaced key": "spaced value"}

    def test_crlf_line_endings(self):
        assert parse_ini("a = 1\r\nb = 2\r\n") == {"a": "1", "b": "2"}

    def test_nil_becomes_none(self):
        assert parse_ini("filament_notes = nil") == {"filament_notes": None}

    def test_quoted_empty_becomes_empty_string(self):
        assert parse_ini('filament_settings_id = ""') == {"filament_settings_id": ""}

    def test_value_keeps_equals_and_semicolons(self):
        fields = parse_ini("start_gcode = M104 S[temp] ; heat\ncondition = a == b")
        assert fields["start_gcode"] == "M104 S[temp] ; heat"
        assert fields["condition"] == "a == b"

    def test_last_occurrence_wins(self):
        assert parse_ini("a = 1\na = 2") == {"a": "2"}

    def test_empty_text(self):
        assert parse_ini("") == {}


class TestLoadFieldSet:
    def test_ini_file(self, tmp_path):
        path = tmp_path / "printer.ini"
        path.write_text("network_host = 192.168.1.10\nprint_host = octopi.local\n")
        assert load_field_set(path) == {
            "network_host": "192.168.1.10",
            "print_host": "octopi.local",
        }

    def test_json_file(self, tmp_path):
        path = tmp_path / "printer.json"
        path.write_text(json.dumps({"network_host": "10.0.0.2"}))
        assert load_field_set(path) == {"network_host": "10.0.0.2"}

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / "printer.json"
        path.write_text("[1, 2]")
        with pytest.raises(InputReadError):
            load_field_set(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "printer.json"
        path.write_text("{not json")
        with pytest.raises(InputReadError):
            load_field_set(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputReadError):
            load_field_set(tmp_path / "missing.ini")

    def test_read_text_missing_file(self, tmp_path):
        with pytest.raises(InputReadError, match="missing.ini"):
            read_text(tmp_path / "missing.ini")
