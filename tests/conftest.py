"""Pytest configuration and shared fixtures."""

import pytest

from slicer_profile_converter.decisions import AmbiguityCache, accept_proposed
from slicer_profile_converter.transform import FieldTransformer

FILAMENT_INI = """\
# generated by PrusaSlicer 2.6.0
filament_type = PLA
temperature = 215
first_layer_temperature = 220
bed_temperature = 60
filament_max_volumetric_speed = 0
compatible_printers_condition = printer_notes=~/.*PRINTER_VENDOR_PRUSA3D.*/
"""

PRINTER_INI = """\
nozzle_diameter = 0.4
gcode_flavor = marlin2
retract_length = 0.8
start_gcode = "G28 ; home\\nG1 Z5"
bed_shape = 0x0,250x0,250x210,0x210
"""

PRINT_INI = """\
layer_height = 0.2
perimeters = 3
fill_density = 15%
fill_pattern = gyroid
seam_position = rear
support_material_style = organic
"""

BUNDLE_INI = """\
[filament: Generic PLA]
filament_type = PLA
temperature = 210

[printer: MK3S]
nozzle_diameter = 0.4
gcode_flavor = marlin2

[print: 0.20mm QUALITY]
layer_height = 0.2
perimeters = 2

[presets]
print = 0.20mm QUALITY
"""


@pytest.fixture
def cache():
    return AmbiguityCache(accept_proposed)


@pytest.fixture
def transformer(cache):
    return FieldTransformer(cache, os_name="Linux")
