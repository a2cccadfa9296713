"""
Field transformation: PrusaSlicer/SuperSlicer values -> OrcaSlicer values.

Every mapped source field runs through ``RULES``, an ordered list of
``Rule(name, matches, apply)``.  The first rule whose predicate matches
produces the value and the remaining rules are skipped.  A rule returns
``None`` to drop the field, and a ``None`` result is re-checked after the
chain because several rules legitimately produce "no value".

Rule order matters: the generic g-code fallback (any key containing
"gcode" or "notes") must never shadow the enum remap for ``gcode_flavor``,
and the null rule must run before anything tries to parse the value.
"""

from __future__ import annotations

import logging
import platform
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from .decisions import Ambiguity, AmbiguityCache, AmbiguityKind
from .models import ConversionOptions, ParsedFields, ProfileType
from .tables import (
    BOOLEAN_FIELDS,
    COMPATIBILITY_CONDITION_FIELDS,
    DEFAULT_FILAMENT_PROFILE_FIELD,
    DEFAULT_MVS,
    ENUM_TABLES,
    GCODE_FALLBACK_RE,
    GCODE_FIELDS,
    ILLEGAL_CHARS,
    MM_TO_PERCENT_FIELD,
    MULTI,
    MULTIVALUE_PARAMS,
    NOZZLE_SIZE_KEY,
    OUTPUT_FILENAME_FIELD,
    PARAMETER_MAP,
    PATTERN_DEFAULTS,
    PERCENT_TO_FRACTION_FIELDS,
    PERCENT_TO_MM_FIELDS,
    PLASTIC_TYPE_KEY,
    PROFILE_NAME_FIELD,
    PROFILE_NAME_KEY,
    PROFILE_TYPE_KEY,
    QUOTED_EMPTY_FIELD,
    SPEED_REFERENCES,
    SUPPORT_STYLE_FIELD,
    SUPPORT_STYLES,
    VOLUMETRIC_SPEED_FIELD,
    ZHOP_ENFORCEMENT,
    ZHOP_FIELD,
)
from .units import is_percent, millimeter_to_percent, percent_to_fraction, percent_to_millimeter

logger = logging.getLogger(__name__)

_MULTIVALUE_SPLIT_RE = re.compile(r"[,;]")
_SURROUNDING_QUOTES_RE = re.compile(r'"(.*)"', re.DOTALL)


@dataclass
class RuleContext:
    """Everything a rule may read besides the value itself."""

    key: str
    fields: ParsedFields  # the raw source mapping, never the converted output
    options: ConversionOptions = field(default_factory=ConversionOptions)
    cache: AmbiguityCache = field(default_factory=AmbiguityCache)
    os_name: str = field(default_factory=platform.system)


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[str, Any], bool]
    apply: Callable[[Any, RuleContext], Any]


# --- Value helpers ---


def split_multivalue(value: str) -> list[str]:
    """Split on ``,`` or ``;``, trimming tokens and dropping empty ones."""
    return [token.strip() for token in _MULTIVALUE_SPLIT_RE.split(value) if token.strip()]


def unescape_gcode(value: str) -> str:
    """Strip one layer of surrounding double quotes and unescape ``\\n``, ``\\t``, ``\\"``."""
    match = _SURROUNDING_QUOTES_RE.fullmatch(value)
    if match:
        value = match.group(1)
    return value.replace("\\n", "\n").replace("\\t", "\t").replace('\\"', '"')


def _is_positive_number(value: Any) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def _first_token(key: str, value: str) -> str | None:
    """Reduce a multi-extruder list to its first entry for single-valued fields."""
    if key in MULTIVALUE_PARAMS and _MULTIVALUE_SPLIT_RE.search(value):
        tokens = split_multivalue(value)
        return tokens[0] if tokens else None
    return value


def resolve_speed(key: str, fields: ParsedFields, _seen: frozenset[str] = frozenset()) -> str | None:
    """Resolve a speed that may be a percentage of another raw speed field."""
    value = fields.get(key)
    if not is_percent(value):
        return value
    reference = SPEED_REFERENCES.get(key)
    if reference is None or reference in _seen:
        return None
    base = resolve_speed(reference, fields, _seen | {key})
    return percent_to_millimeter(base, value)


# --- Rule transforms ---


def _drop(value: Any, ctx: RuleContext) -> Any:
    return None


def _empty_string(value: Any, ctx: RuleContext) -> Any:
    return ""


def _to_fraction(value: Any, ctx: RuleContext) -> Any:
    return percent_to_fraction(value)


def _percent_to_mm(value: Any, ctx: RuleContext) -> Any:
    value = _first_token(ctx.key, value)
    return percent_to_millimeter(ctx.options.nozzle_size, value)


def _speed(value: Any, ctx: RuleContext) -> Any:
    if not is_percent(value):
        return value
    return resolve_speed(ctx.key, {**ctx.fields, ctx.key: value})


def _mm_to_percent(value: Any, ctx: RuleContext) -> Any:
    return millimeter_to_percent(ctx.options.nozzle_size, value)


def _to_boolean(value: Any, ctx: RuleContext) -> Any:
    return "1" if _is_positive_number(value) else "0"


def _enum(value: Any, ctx: RuleContext) -> Any:
    return ENUM_TABLES[ctx.key].get(value)


def _pattern_with_default(value: Any, ctx: RuleContext) -> Any:
    valid, default = PATTERN_DEFAULTS[ctx.key]
    return value if value in valid else default


def _volumetric_speed(value: Any, ctx: RuleContext) -> Any:
    if value != "" and _is_positive_number(value):
        return value
    default = DEFAULT_MVS.get(ctx.fields.get("filament_type") or "")
    return default if default is not None else value


def _filename_format(value: Any, ctx: RuleContext) -> Any:
    return value.replace("[", "{").replace("]", "}")


def _multivalue(value: Any, ctx: RuleContext) -> Any:
    tokens = split_multivalue(value)
    if MULTIVALUE_PARAMS[ctx.key] == MULTI:
        return tokens
    return tokens[0] if tokens else None


def _default_filament_profile(value: Any, ctx: RuleContext) -> Any:
    tokens = split_multivalue(value)
    if not tokens:
        return None
    return tokens[0] if len(tokens) == 1 else tokens


def _gcode(value: Any, ctx: RuleContext) -> Any:
    return unescape_gcode(value) if isinstance(value, str) else value


def _support_style(value: Any, ctx: RuleContext) -> Any:
    proposal = SUPPORT_STYLES.get(value)
    decision = ctx.cache.resolve(Ambiguity(
        kind=AmbiguityKind.SUPPORT_STYLE, key=ctx.key, value=value, proposal=proposal,
    ))
    if not decision:
        return None
    support_type, support_style = decision
    return {"support_type": support_type, "support_style": support_style}


def _compatibility_condition(value: Any, ctx: RuleContext) -> Any:
    keep = ctx.cache.resolve(Ambiguity(
        kind=AmbiguityKind.COMPATIBILITY_CONDITION, key=ctx.key, value=value,
    ))
    return value if keep else ""


def _zhop(value: Any, ctx: RuleContext) -> Any:
    return ZHOP_ENFORCEMENT.get(value)


def sanitize_profile_name(value: str, os_name: str | None = None) -> str:
    """Remove characters the host OS does not allow in file names."""
    pattern = ILLEGAL_CHARS.get(os_name or platform.system(), ILLEGAL_CHARS["Linux"])
    return pattern.sub("", value)


def _profile_name(value: Any, ctx: RuleContext) -> Any:
    # No parameter table maps profile_name; reached only through convert_value
    return sanitize_profile_name(value, ctx.os_name)


def _passthrough(value: Any, ctx: RuleContext) -> Any:
    return value


RULES: list[Rule] = [
    Rule("null", lambda k, v: v is None, _drop),
    Rule("quoted_empty", lambda k, v: k == QUOTED_EMPTY_FIELD and v == '""', _empty_string),
    Rule("percent_to_fraction", lambda k, v: k in PERCENT_TO_FRACTION_FIELDS, _to_fraction),
    Rule("percent_to_mm", lambda k, v: k in PERCENT_TO_MM_FIELDS, _percent_to_mm),
    Rule("relative_speed", lambda k, v: k in SPEED_REFERENCES, _speed),
    Rule("mm_to_percent", lambda k, v: k == MM_TO_PERCENT_FIELD, _mm_to_percent),
    Rule("boolean", lambda k, v: k in BOOLEAN_FIELDS, _to_boolean),
    Rule("enum", lambda k, v: k in ENUM_TABLES, _enum),
    Rule("pattern_default", lambda k, v: k in PATTERN_DEFAULTS, _pattern_with_default),
    Rule("volumetric_speed", lambda k, v: k == VOLUMETRIC_SPEED_FIELD, _volumetric_speed),
    Rule("filename_format", lambda k, v: k == OUTPUT_FILENAME_FIELD, _filename_format),
    Rule("multivalue", lambda k, v: k in MULTIVALUE_PARAMS, _multivalue),
    Rule("default_filament_profile", lambda k, v: k == DEFAULT_FILAMENT_PROFILE_FIELD, _default_filament_profile),
    Rule("gcode", lambda k, v: k in GCODE_FIELDS, _gcode),
    Rule("gcode_fallback", lambda k, v: GCODE_FALLBACK_RE.search(k) is not None, _gcode),
    Rule("support_style", lambda k, v: k == SUPPORT_STYLE_FIELD, _support_style),
    Rule("compatibility_condition", lambda k, v: k in COMPATIBILITY_CONDITION_FIELDS, _compatibility_condition),
    Rule("zhop_enforcement", lambda k, v: k == ZHOP_FIELD, _zhop),
    Rule("profile_name", lambda k, v: k == PROFILE_NAME_FIELD, _profile_name),
    Rule("passthrough", lambda k, v: True, _passthrough),
]


def find_rule(key: str, value: Any, rules: list[Rule] = RULES) -> Rule:
    """Return the first rule matching this key and value."""
    for rule in rules:
        if rule.matches(key, value):
            return rule
    raise LookupError(f"No rule matches {key!r}")


def convert_value(value: Any, ctx: RuleContext, rules: list[Rule] = RULES) -> Any:
    """Run one source value through the rule chain.  ``None`` means drop."""
    rule = find_rule(ctx.key, value, rules)
    return rule.apply(value, ctx)


class FieldTransformer:
    """
    Maps parsed source fields to an OrcaSlicer profile.

    The ambiguity cache is supplied by the caller and shared by every
    ``transform`` call of one batch.

    Usage:
        transformer = FieldTransformer(AmbiguityCache(accept_proposed))
        profile = transformer.transform(fields, ProfileType.FILAMENT,
                                        ConversionOptions(nozzle_size="0.4"))
    """

    def __init__(
        self,
        cache: AmbiguityCache | None = None,
        os_name: str | None = None,
        rules: list[Rule] | None = None,
    ) -> None:
        self.cache = cache if cache is not None else AmbiguityCache()
        self.os_name = os_name or platform.system()
        self.rules = rules if rules is not None else RULES

    def transform(
        self,
        fields: ParsedFields,
        profile_type: ProfileType,
        options: ConversionOptions | None = None,
    ) -> dict[str, Any]:
        options = options or ConversionOptions()
        table = PARAMETER_MAP.get(profile_type)
        if not table:
            return {}

        out: dict[str, Any] = {}
        for key, raw in fields.items():
            targets = table.get(key)
            if targets is None:
                continue
            ctx = RuleContext(key=key, fields=fields, options=options, cache=self.cache, os_name=self.os_name)
            value = convert_value(raw, ctx, self.rules)
            if value is None:
                continue
            for target in [targets] if isinstance(targets, str) else targets:
                out[target] = list(value) if isinstance(value, list) else value

        if options.nozzle_size:
            out[NOZZLE_SIZE_KEY] = options.nozzle_size
        if options.profile_type:
            out[PROFILE_TYPE_KEY] = options.profile_type
        if options.profile_name:
            out[PROFILE_NAME_KEY] = options.profile_name
        if options.plastic_type:
            out[PLASTIC_TYPE_KEY] = options.plastic_type

        logger.debug("Converted %d of %d %s fields", len(out), len(fields), profile_type.value)
        return out
