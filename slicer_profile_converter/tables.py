"""
Field mapping and value lookup tables for PrusaSlicer/SuperSlicer -> OrcaSlicer.

``PARAMETER_MAP`` maps each source field to one OrcaSlicer field, or to a
list of fields when the same value is written under several keys (the bed
temperature fans out to every plate type).  Its declaration order
(print, filament, printer) is the classifier's tie-break order.

All other tables feed the rules in ``transform.py``.
"""

import re

from .models import ProfileType

PARAMETER_MAP: dict[ProfileType, dict[str, str | list[str]]] = {
    ProfileType.PRINT: {
        "arc_fitting": "enable_arc_fitting",
        "bottom_solid_layers": "bottom_shell_layers",
        "bottom_solid_min_thickness": "bottom_shell_thickness",
        "bridge_acceleration": "bridge_acceleration",
        "bridge_angle": "bridge_angle",
        "bridge_overlap_min": "bridge_density",
        "dont_support_bridges": "bridge_no_support",
        "bridge_speed_internal": "internal_bridge_speed",
        "brim_ears": "brim_ears",
        "brim_ears_detection_length": "brim_ears_detection_length",
        "brim_ears_max_angle": "brim_ears_max_angle",
        "brim_separation": "brim_object_gap",
        "brim_width": "brim_width",
        "brim_speed": "skirt_speed",
        "compatible_printers_condition": "compatible_printers_condition",
        "compatible_printers": "compatible_printers",
        "default_acceleration": "default_acceleration",
        "overhangs": "detect_overhang_wall",
        "thin_walls": "detect_thin_wall",
        "draft_shield": "draft_shield",
        "first_layer_size_compensation": "elefant_foot_compensation",
        "elefant_foot_compensation": "elefant_foot_compensation",
        "enable_dynamic_overhang_speeds": "enable_overhang_speed",
        "extra_perimeters_on_overhangs": "extra_perimeters_on_overhangs",
        "extra_perimeters_odd_layers": "alternate_extra_wall",
        "wipe_tower": "enable_prime_tower",
        "wipe_speed": "wipe_speed",
        "ensure_vertical_shell_thickness": "ensure_vertical_shell_thickness",
        "gap_fill_min_length": "filter_out_gap_fill",
        "gcode_comments": "gcode_comments",
        "gcode_label_objects": "gcode_label_objects",
        "machine_limits_usage": "emit_machine_limits_to_gcode",
        "infill_anchor_max": "infill_anchor_max",
        "infill_anchor": "infill_anchor",
        "fill_angle": "infill_direction",
        "infill_overlap": "infill_wall_overlap",
        "infill_first": "is_infill_first",
        "inherits": "inherits",
        "extrusion_width": "line_width",
        "extrusion_multiplier": "print_flow_ratio",
        "first_layer_acceleration": "initial_layer_acceleration",
        "first_layer_extrusion_width": "initial_layer_line_width",
        "first_layer_height": "initial_layer_print_height",
        "interface_shells": "interface_shells",
        "perimeter_extrusion_width": "inner_wall_line_width",
        "seam_gap": "seam_gap",
        "solid_infill_acceleration": "internal_solid_infill_acceleration",
        "solid_infill_extrusion_width": "internal_solid_infill_line_width",
        "ironing_flowrate": "ironing_flow",
        "ironing_spacing": "ironing_spacing",
        "ironing_speed": "ironing_speed",
        "layer_height": "layer_height",
        "init_z_rotate": "preferred_orientation",
        "spiral_vase": "spiral_mode",
        "solid_infill_extruder": "solid_infill_filament",
        "support_material_extruder": "support_filament",
        "infill_extruder": "sparse_infill_filament",
        "perimeter_extruder": "wall_filament",
        "first_layer_extruder": "first_layer_filament",
        "support_material_interface_extruder": "support_interface_filament",
        "avoid_crossing_perimeters_max_detour": "max_travel_detour_distance",
        "min_bead_width": "min_bead_width",
        "min_feature_size": "min_feature_size",
        "solid_infill_below_area": "minimum_sparse_infill_area",
        "only_one_perimeter_first_layer": "only_one_wall_first_layer",
        "only_one_perimeter_top": "only_one_wall_top",
        "ooze_prevention": "ooze_prevention",
        "extra_perimeters_overhangs": "extra_perimeters_on_overhangs",
        "overhangs_reverse": "overhang_reverse",
        "overhangs_reverse_threshold": "overhang_reverse_threshold",
        "perimeter_acceleration": "inner_wall_acceleration",
        "external_perimeter_acceleration": "outer_wall_acceleration",
        "external_perimeter_extrusion_width": "outer_wall_line_width",
        "post_process": "post_process",
        "wipe_tower_brim_width": "prime_tower_brim_width",
        "wipe_tower_width": "prime_tower_width",
        "raft_contact_distance": "raft_contact_distance",
        "raft_expansion": "raft_expansion",
        "raft_first_layer_density": "raft_first_layer_density",
        "raft_first_layer_expansion": "raft_first_layer_expansion",
        "raft_layers": "raft_layers",
        "avoid_crossing_perimeters": "reduce_crossing_wall",
        "only_retract_when_crossing_perimeters": "reduce_infill_retraction",
        "resolution": "resolution",
        "seam_position": "seam_position",
        "skirt_distance": "skirt_distance",
        "skirt_height": "skirt_height",
        "skirts": "skirt_loops",
        "slice_closing_radius": "slice_closing_radius",
        "slicing_mode": "slicing_mode",
        "small_perimeter_min_length": "small_perimeter_threshold",
        "infill_acceleration": "sparse_infill_acceleration",
        "fill_density": "sparse_infill_density",
        "infill_extrusion_width": "sparse_infill_line_width",
        "staggered_inner_seams": "staggered_inner_seams",
        "standby_temperature_delta": "standby_temperature_delta",
        "hole_to_polyhole": "hole_to_polyhole",
        "hole_to_polyhole_threshold": "hole_to_polyhole_threshold",
        "hole_to_polyhole_twisted": "hole_to_polyhole_twisted",
        "support_material": "enable_support",
        "support_material_angle": "support_angle",
        "support_material_enforce_layers": "enforce_support_layers",
        "support_material_spacing": "support_base_pattern_spacing",
        "support_material_contact_distance": "support_top_z_distance",
        "first_layer_size_compensation_layers": "elefant_foot_compensation_layers",
        "support_material_bottom_contact_distance": "support_bottom_z_distance",
        "support_material_bottom_interface_layers": "support_interface_bottom_layers",
        "support_material_interface_contact_loops": "support_interface_loop_pattern",
        "support_material_interface_spacing": "support_interface_spacing",
        "support_material_interface_layers": "support_interface_top_layers",
        "support_material_extrusion_width": "support_line_width",
        "support_material_buildplate_only": "support_on_build_plate_only",
        "support_material_threshold": "support_threshold_angle",
        "thick_bridges": "thick_bridges",
        "top_solid_layers": "top_shell_layers",
        "top_solid_min_thickness": "top_shell_thickness",
        "top_solid_infill_acceleration": "top_surface_acceleration",
        "top_infill_extrusion_width": "top_surface_line_width",
        "min_width_top_surface": "min_width_top_surface",
        "travel_acceleration": "travel_acceleration",
        "travel_speed_z": "travel_speed_z",
        "travel_speed": "travel_speed",
        "support_tree_angle": "tree_support_branch_angle",
        "support_tree_angle_slow": "tree_support_angle_slow",
        "support_tree_branch_diameter": "tree_support_branch_diameter",
        "support_tree_branch_diameter_angle": "tree_support_branch_diameter_angle",
        "support_tree_branch_diameter_double_wall": "tree_support_branch_diameter_double_wall",
        "support_tree_tip_diameter": "tree_support_tip_diameter",
        "support_tree_top_rate": "tree_support_top_rate",
        "wall_distribution_count": "wall_distribution_count",
        "perimeter_generator": "wall_generator",
        "perimeters": "wall_loops",
        "wall_transition_angle": "wall_transition_angle",
        "wall_transition_filter_deviation": "wall_transition_filter_deviation",
        "wall_transition_length": "wall_transition_length",
        "wipe_tower_no_sparse_layers": "wipe_tower_no_sparse_layers",
        "xy_size_compensation": "xy_contour_compensation",
        "z_offset": "z_offset",
        "xy_inner_size_compensation": "xy_hole_compensation",
        "support_material_layer_height": "independent_support_layer_height",
        "fill_pattern": "sparse_infill_pattern",
        "solid_fill_pattern": "internal_solid_infill_pattern",
        "output_filename_format": "filename_format",
        "support_material_pattern": "support_base_pattern",
        "support_material_interface_pattern": "support_interface_pattern",
        "top_fill_pattern": "top_surface_pattern",
        "support_material_xy_spacing": "support_object_xy_distance",
        "fuzzy_skin_point_dist": "fuzzy_skin_point_distance",
        "fuzzy_skin_thickness": "fuzzy_skin_thickness",
        "fuzzy_skin": "fuzzy_skin",
        "bottom_fill_pattern": "bottom_surface_pattern",
        "bridge_flow_ratio": "bridge_flow",
        "fill_top_flow_ratio": "top_solid_infill_flow_ratio",
        "first_layer_flow_ratio": "bottom_solid_infill_flow_ratio",
        "infill_every_layers": "infill_combination",
        "complete_objects": "print_sequence",
        "brim_type": "brim_type",
        "notes": "notes",
        "support_material_style": "support_style",
        "ironing": "ironing",
        "ironing_type": "ironing_type",
        "ironing_angle": "ironing_angle",
        "external_perimeters_first": "external_perimeters_first",
        "remaining_times": "disable_m73",
        "perimeter_speed": "inner_wall_speed",
        "external_perimeter_speed": "outer_wall_speed",
        "small_perimeter_speed": "small_perimeter_speed",
        "solid_infill_speed": "internal_solid_infill_speed",
        "infill_speed": "sparse_infill_speed",
        "top_solid_infill_speed": "top_surface_speed",
        "gap_fill_speed": "gap_infill_speed",
        "support_material_speed": "support_speed",
        "support_material_interface_speed": "support_interface_speed",
        "bridge_speed": "bridge_speed",
        "first_layer_speed": "initial_layer_speed",
        "first_layer_infill_speed": "initial_layer_infill_speed",
    },
    ProfileType.FILAMENT: {
        "bed_temperature": [
            "hot_plate_temp", "cool_plate_temp",
            "eng_plate_temp", "textured_plate_temp"
        ],
        "bridge_fan_speed": "overhang_fan_speed",
        "chamber_temperature": "chamber_temperature",
        "disable_fan_first_layers": "close_fan_the_first_x_layers",
        "end_filament_gcode": "filament_end_gcode",
        "external_perimeter_fan_speed": "overhang_fan_threshold",
        "extrusion_multiplier": "filament_flow_ratio",
        "fan_always_on": "reduce_fan_stop_start_freq",
        "fan_below_layer_time": "fan_cooling_layer_time",
        "fan_speedup_time": "fan_speedup_time",
        "fan_speedup_overhangs": "fan_speedup_overhangs",
        "fan_kickstart": "fan_kickstart",
        "filament_colour": "default_filament_colour",
        "filament_cost": "filament_cost",
        "filament_density": "filament_density",
        "filament_deretract_speed": "filament_deretraction_speed",
        "filament_diameter": "filament_diameter",
        "filament_max_volumetric_speed": "filament_max_volumetric_speed",
        "filament_notes": "filament_notes",
        "filament_retract_before_travel": "filament_retraction_minimum_travel",
        "filament_retract_before_wipe": "filament_retract_before_wipe",
        "filament_retract_layer_change": "filament_retract_when_changing_layer",
        "filament_retract_length": "filament_retraction_length",
        "filament_retract_lift": "filament_z_hop",
        "filament_retract_lift_above": "filament_retract_lift_above",
        "filament_retract_lift_below": "filament_retract_lift_below",
        "filament_retract_restart_extra": "filament_retract_restart_extra",
        "filament_retract_speed": "filament_retraction_speed",
        "filament_shrink": "filament_shrink",
        "filament_soluble": "filament_soluble",
        "filament_type": "filament_type",
        "filament_wipe": "filament_wipe",
        "first_layer_bed_temperature": [
            "hot_plate_temp_initial_layer",
            "cool_plate_temp_initial_layer",
            "eng_plate_temp_initial_layer",
            "textured_plate_temp_initial_layer"
        ],
        "first_layer_temperature": "nozzle_temperature_initial_layer",
        "full_fan_speed_layer": "full_fan_speed_layer",
        "inherits": "inherits",
        "max_fan_speed": "fan_max_speed",
        "min_fan_speed": "fan_min_speed",
        "min_print_speed": "slow_down_min_speed",
        "slowdown_below_layer_time": "slow_down_layer_time",
        "start_filament_gcode": "filament_start_gcode",
        "support_material_interface_fan_speed": "support_material_interface_fan_speed",
        "temperature": "nozzle_temperature",
        "compatible_printers_condition": "compatible_printers_condition",
        "compatible_printers": "compatible_printers",
        "compatible_prints_condition": "compatible_prints_condition",
        "compatible_prints": "compatible_prints",
        "filament_vendor": "filament_vendor",
        "filament_minimal_purge_on_wipe_tower": "filament_minimal_purge_on_wipe_tower",
    },
    ProfileType.PRINTER: {
        "bed_custom_model": "bed_custom_model",
        "bed_custom_texture": "bed_custom_texture",
        "before_layer_gcode": "before_layer_change_gcode",
        "toolchange_gcode": "change_filament_gcode",
        "default_filament_profile": "default_filament_profile",
        "default_print_profile": "default_print_profile",
        "deretract_speed": "deretraction_speed",
        "gcode_flavor": "gcode_flavor",
        "host_type": "host_type",
        "inherits": "inherits",
        "layer_gcode": "layer_change_gcode",
        "feature_gcode": "change_extrusion_role_gcode",
        "end_gcode": "machine_end_gcode",
        "machine_max_acceleration_e": "machine_max_acceleration_e",
        "machine_max_acceleration_extruding": "machine_max_acceleration_extruding",
        "machine_max_acceleration_retracting": "machine_max_acceleration_retracting",
        "machine_max_acceleration_travel": "machine_max_acceleration_travel",
        "machine_max_acceleration_x": "machine_max_acceleration_x",
        "machine_max_acceleration_y": "machine_max_acceleration_y",
        "machine_max_acceleration_z": "machine_max_acceleration_z",
        "machine_max_feedrate_e": "machine_max_speed_e",
        "machine_max_feedrate_x": "machine_max_speed_x",
        "machine_max_feedrate_y": "machine_max_speed_y",
        "machine_max_feedrate_z": "machine_max_speed_z",
        "machine_max_jerk_e": "machine_max_jerk_e",
        "machine_max_jerk_x": "machine_max_jerk_x",
        "machine_max_jerk_y": "machine_max_jerk_y",
        "machine_max_jerk_z": "machine_max_jerk_z",
        "machine_min_extruding_rate": "machine_min_extruding_rate",
        "machine_min_travel_rate": "machine_min_travel_rate",
        "pause_print_gcode": "machine_pause_gcode",
        "start_gcode": "machine_start_gcode",
        "max_layer_height": "max_layer_height",
        "min_layer_height": "min_layer_height",
        "nozzle_diameter": "nozzle_diameter",
        "print_host": "print_host",
        "printer_notes": "printer_notes",
        "bed_shape": "printable_area",
        "max_print_height": "printable_height",
        "printer_technology": "printer_technology",
        "printer_variant": "printer_variant",
        "retract_before_wipe": "retract_before_wipe",
        "retract_length_toolchange": "retract_length_toolchange",
        "retract_restart_extra_toolchange": "retract_restart_extra_toolchange",
        "retract_restart_extra": "retract_restart_extra",
        "retract_layer_change": "retract_when_changing_layer",
        "retract_length": "retraction_length",
        "retract_lift": "z_hop",
        "retract_lift_top": "retract_lift_enforce",
        "retract_before_travel": "retraction_minimum_travel",
        "retract_speed": "retraction_speed",
        "silent_mode": "silent_mode",
        "single_extruder_multi_material": "single_extruder_multi_material",
        "thumbnails": "thumbnails",
        "thumbnails_format": "thumbnails_format",
        "template_custom_gcode": "template_custom_gcode",
        "use_firmware_retraction": "use_firmware_retraction",
        "use_relative_e_distances": "use_relative_e_distances",
        "wipe": "wipe",
    },
}

# Metadata keys the transformer writes on top of the mapped fields
NOZZLE_SIZE_KEY = "nozzle_size"
PROFILE_TYPE_KEY = "profile_type"
PROFILE_NAME_KEY = "profile_name"
PLASTIC_TYPE_KEY = "_selectedPlasticType"

# --- Unit conversion field sets ---

# Percentages written as a fraction (150% -> 1.5)
PERCENT_TO_FRACTION_FIELDS = {
    "bridge_flow_ratio",
    "fill_top_flow_ratio",
    "first_layer_flow_ratio",
}

# Percentages of the nozzle diameter resolved to millimeters
PERCENT_TO_MM_FIELDS = {
    "max_layer_height",
    "min_layer_height",
    "fuzzy_skin_point_dist",
    "fuzzy_skin_thickness",
    "small_perimeter_min_length",
}

# Millimeters expressed as a percentage of the nozzle diameter
MM_TO_PERCENT_FIELD = "wall_transition_length"

# Any positive number becomes "1", everything else "0"
BOOLEAN_FIELDS = {
    "infill_every_layers",
    "support_material_layer_height",
}

# Speeds that may be a percentage of another (raw) speed field
SPEED_REFERENCES: dict[str, str] = {
    "external_perimeter_speed": "perimeter_speed",
    "small_perimeter_speed": "perimeter_speed",
    "first_layer_speed": "perimeter_speed",
    "solid_infill_speed": "infill_speed",
    "top_solid_infill_speed": "solid_infill_speed",
    "first_layer_infill_speed": "infill_speed",
    "support_material_interface_speed": "support_material_speed",
}

# --- Enum lookup tables ---

FILAMENT_TYPES = {
    "PLA": "PLA",
    "PET": "PETG",
    "PETG": "PETG",
    "ABS": "ABS",
    "ASA": "ASA",
    "FLEX": "TPU",
    "TPU": "TPU",
    "NYLON": "PA",
    "PA": "PA",
    "PC": "PC",
    "PVA": "PVA",
    "HIPS": "HIPS",
    "PP": "PP",
    "PEI": "PEI",
    "PEEK": "PEEK",
    "PEKK": "PEKK",
    "POM": "POM",
    "PVDF": "PVDF",
    "PSU": "PSU",
    "PCTG": "PCTG",
    "EDGE": "PETG",
    "NGEN": "PETG",
    "SCAFF": "PVA",
}

# Default max volumetric speed (mm3/s) per source filament type
DEFAULT_MVS = {
    "PLA": "15",
    "PET": "10",
    "PETG": "10",
    "ABS": "12",
    "ASA": "12",
    "FLEX": "3.2",
    "NYLON": "12",
    "PVA": "12",
    "PC": "12",
    "PSU": "8",
    "HIPS": "8",
    "EDGE": "8",
    "NGEN": "8",
    "PP": "8",
    "PEI": "8",
    "PEEK": "8",
    "PEKK": "8",
    "POM": "8",
    "PVDF": "8",
    "SCAFF": "8",
}

SEAM_POSITIONS = {
    "cost": "nearest",
    "random": "random",
    "allrandom": "random",
    "aligned": "aligned",
    "contiguous": "aligned",
    "rear": "back",
    "nearest": "nearest",
}

INFILL_TYPES = {
    "3dhoneycomb": "3dhoneycomb",
    "adaptivecubic": "adaptivecubic",
    "alignedrectilinear": "alignedrectilinear",
    "archimedeanchords": "archimedeanchords",
    "concentric": "concentric",
    "concentricgapfill": "concentric",
    "cubic": "cubic",
    "grid": "grid",
    "gyroid": "gyroid",
    "honeycomb": "honeycomb",
    "lightning": "lightning",
    "line": "line",
    "monotonic": "monotonic",
    "monotonicgapfill": "monotonic",
    "monotoniclines": "monotonicline",
    "octagramspiral": "octagramspiral",
    "rectilinear": "zig-zag",
    "rectilineargapfill": "zig-zag",
    "rectiwithperimeter": "zig-zag",
    "sawtooth": "zig-zag",
    "scatteredrectilinear": "zig-zag",
    "smooth": "monotonic",
    "smoothtriple": "triangles",
    "stars": "tri-hexagon",
    "supportcubic": "supportcubic",
    "triangles": "triangles",
}

INFILL_PATTERN_FIELDS = {
    "fill_pattern",
    "top_fill_pattern",
    "bottom_fill_pattern",
    "solid_fill_pattern",
}

GCODE_FLAVORS = {
    "klipper": "klipper",
    "mach3": "reprapfirmware",
    "machinekit": "reprapfirmware",
    "makerware": "reprapfirmware",
    "marlin": "marlin",
    "marlin2": "marlin2",
    "no-extrusion": "reprapfirmware",
    "repetier": "reprapfirmware",
    "reprap": "reprapfirmware",
    "reprapfirmware": "reprapfirmware",
    "sailfish": "reprapfirmware",
    "smoothie": "reprapfirmware",
    "teacup": "reprapfirmware",
    "sprinter": "reprapfirmware",
}

HOST_TYPES = {
    "repetier": "repetier",
    "prusalink": "prusalink",
    "prusaconnect": "prusaconnect",
    "octoprint": "octoprint",
    "moonraker": "octoprint",
    "mks": "mks",
    "klipper": "octoprint",
    "flashair": "flashair",
    "duet": "duet",
    "astrobox": "astrobox",
}

THUMBNAIL_FORMAT = {
    "PNG": "PNG",
    "JPG": "JPG",
    "QOI": "QOI",
    "BIQU": "BTT_TFT",
}

DRAFT_SHIELD = {
    "disabled": "0",
    "enabled": "1",
    "limited": "1",
}

MACHINE_LIMITS_USAGE = {
    "emit_to_gcode": "1",
    "time_estimate_only": "0",
    "ignore": "0",
}

# complete_objects -> print_sequence
PRINT_SEQUENCE = {
    "0": "by layer",
    "1": "by object",
}

# remaining_times -> disable_m73 (inverted)
DISABLE_M73 = {
    "0": "1",
    "1": "0",
}

# Source field -> lookup table; a value missing from its table drops the field
ENUM_TABLES: dict[str, dict[str, str]] = {
    "filament_type": FILAMENT_TYPES,
    "seam_position": SEAM_POSITIONS,
    **{field: INFILL_TYPES for field in sorted(INFILL_PATTERN_FIELDS)},
    "gcode_flavor": GCODE_FLAVORS,
    "host_type": HOST_TYPES,
    "thumbnails_format": THUMBNAIL_FORMAT,
    "draft_shield": DRAFT_SHIELD,
    "machine_limits_usage": MACHINE_LIMITS_USAGE,
    "complete_objects": PRINT_SEQUENCE,
    "remaining_times": DISABLE_M73,
}

# Valid support patterns; anything else falls back to the given default
SUPPORT_PATTERNS = {"rectilinear", "rectilinear-grid", "honeycomb", "lightning", "default", "hollow"}
INTERFACE_PATTERNS = {"auto", "rectilinear", "concentric", "rectilinear_interlaced", "grid"}

PATTERN_DEFAULTS: dict[str, tuple[set[str], str]] = {
    "support_material_pattern": (SUPPORT_PATTERNS, "default"),
    "support_material_interface_pattern": (INTERFACE_PATTERNS, "auto"),
}

# support_material_style -> (support_type, support_style)
SUPPORT_STYLES: dict[str, tuple[str, str]] = {
    "grid": ("normal", "grid"),
    "snug": ("normal", "snug"),
    "tree": ("tree", "default"),
    "organic": ("tree", "organic"),
}

COMPATIBILITY_CONDITION_FIELDS = {
    "compatible_printers_condition",
    "compatible_prints_condition",
}

# retract_lift_top -> retract_lift_enforce
ZHOP_ENFORCEMENT = {
    "All surfaces": "All Surfaces",
    "Not on top": "Bottom Only",
    "Only on top": "Top Only",
}

# --- Multi-value fields ---

SINGLE = "single"
MULTI = "multi"

# Comma or semicolon separated values; "single" keeps only the first one
MULTIVALUE_PARAMS = {
    "max_layer_height": SINGLE,
    "min_layer_height": SINGLE,
    "deretract_speed": SINGLE,
    "machine_max_acceleration_e": MULTI,
    "machine_max_acceleration_extruding": MULTI,
    "machine_max_acceleration_retracting": MULTI,
    "machine_max_acceleration_travel": MULTI,
    "machine_max_acceleration_x": MULTI,
    "machine_max_acceleration_y": MULTI,
    "machine_max_acceleration_z": MULTI,
    "machine_max_feedrate_e": MULTI,
    "machine_max_feedrate_x": MULTI,
    "machine_max_feedrate_y": MULTI,
    "machine_max_feedrate_z": MULTI,
    "machine_max_jerk_e": MULTI,
    "machine_max_jerk_x": MULTI,
    "machine_max_jerk_y": MULTI,
    "machine_max_jerk_z": MULTI,
    "machine_min_extruding_rate": MULTI,
    "machine_min_travel_rate": MULTI,
    "nozzle_diameter": SINGLE,
    "bed_shape": MULTI,
    "retract_before_wipe": SINGLE,
    "retract_length_toolchange": SINGLE,
    "retract_restart_extra_toolchange": SINGLE,
    "retract_restart_extra": SINGLE,
    "retract_layer_change": SINGLE,
    "retract_length": SINGLE,
    "retract_lift": SINGLE,
    "retract_before_travel": SINGLE,
    "retract_speed": SINGLE,
    "thumbnails": MULTI,
    "extruder_offset": SINGLE,
    "retract_lift_above": SINGLE,
    "retract_lift_below": SINGLE,
    "wipe": SINGLE,
}

# Split like a multi-value field, but a single remaining value stays a string
DEFAULT_FILAMENT_PROFILE_FIELD = "default_filament_profile"

# --- G-code and notes ---

GCODE_FIELDS = {
    "start_filament_gcode",
    "end_filament_gcode",
    "filament_notes",
    "post_process",
    "before_layer_gcode",
    "toolchange_gcode",
    "layer_gcode",
    "feature_gcode",
    "end_gcode",
    "pause_print_gcode",
    "start_gcode",
    "template_custom_gcode",
    "notes",
    "printer_notes",
}

GCODE_FALLBACK_RE = re.compile(r"gcode|notes", re.IGNORECASE)

# --- Misc ---

QUOTED_EMPTY_FIELD = "filament_settings_id"
VOLUMETRIC_SPEED_FIELD = "filament_max_volumetric_speed"
OUTPUT_FILENAME_FIELD = "output_filename_format"
SUPPORT_STYLE_FIELD = "support_material_style"
ZHOP_FIELD = "retract_lift_top"
PROFILE_NAME_FIELD = "profile_name"

# Characters not allowed in file names, keyed by platform.system()
ILLEGAL_CHARS: dict[str, re.Pattern[str]] = {
    "Windows": re.compile(r'[<>:"/\\|?*\x00-\x1F]'),
    "Darwin": re.compile(r"[:/\x00]"),
    "Linux": re.compile(r"[/\x00]"),
}
