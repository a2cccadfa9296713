"""
Unit conversion helpers for percentage-valued settings.

PrusaSlicer and SuperSlicer accept many lengths and ratios either as an
absolute value or as a percentage of some other value (usually the nozzle
diameter).  OrcaSlicer wants one fixed unit per field, so percentages are
resolved here.  Every converter returns ``None`` when the result cannot be
computed; callers drop the field in that case.
"""


def is_percent(value: str | None) -> bool:
    """Return True if the value is a string ending in ``%``."""
    return isinstance(value, str) and value.strip().endswith("%")


def strip_percent(value: str | None) -> str | None:
    """Remove a trailing ``%`` from a percentage value, leave others untouched."""
    if not is_percent(value):
        return value
    return value.strip()[:-1].strip()


def format_number(number: float) -> str:
    """Render a float the way the source dialect writes numbers.

    Integral values lose their fractional part (``2.0`` -> ``"2"``), all
    others use the shortest round-tripping representation.
    """
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def percent_to_fraction(value: str | None) -> str | None:
    """Convert ``"150%"`` to ``"1.5"``, clamping anything above 2.

    Values without a ``%`` suffix pass through unchanged.
    """
    if not is_percent(value):
        return value
    number = _to_float(strip_percent(value))
    if number is None:
        return None
    fraction = number / 100
    if fraction > 2:
        return "2"
    return format_number(fraction)


def percent_to_millimeter(mm_comparator: str | None, percent_value: str | None) -> str | None:
    """Resolve a percentage of ``mm_comparator`` (usually the nozzle diameter).

    Absolute values pass through unchanged.  A missing operand, a comparator
    that is itself a percentage, or a non-numeric operand yields ``None``.
    """
    if percent_value is None or not str(percent_value).strip():
        return None
    if not is_percent(percent_value):
        return percent_value
    if mm_comparator is None or is_percent(mm_comparator):
        return None
    comparator = _to_float(mm_comparator)
    percent = _to_float(strip_percent(percent_value))
    if comparator is None or percent is None:
        return None
    return format_number(comparator * percent / 100)


def millimeter_to_percent(mm_comparator: str | None, mm_value: str | None) -> str | None:
    """Express ``mm_value`` as a percentage of ``mm_comparator``.

    Formatted with two decimals and a trailing ``%``.  Values already given
    as a percentage pass through unchanged.
    """
    if is_percent(mm_value):
        return mm_value
    if mm_comparator is None or is_percent(mm_comparator):
        return None
    comparator = _to_float(mm_comparator)
    millimeters = _to_float(mm_value)
    if comparator is None or millimeters is None or comparator == 0:
        return None
    return f"{millimeters / comparator * 100:.2f}%"
