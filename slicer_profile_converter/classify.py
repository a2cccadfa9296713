"""Profile type detection by field-name overlap with the mapping tables."""

import logging
from typing import Iterable, Mapping

from .models import ProfileType
from .tables import PARAMETER_MAP

logger = logging.getLogger(__name__)


def score_profile_types(
    field_names: Iterable[str],
    parameter_map: Mapping[ProfileType, Mapping[str, object]] = PARAMETER_MAP,
) -> dict[ProfileType, int]:
    """Count, per profile type, how many field names appear in its mapping table."""
    names = list(field_names)
    return {
        profile_type: sum(1 for name in names if name in table)
        for profile_type, table in parameter_map.items()
    }


def detect_profile_type(
    fields: Mapping[str, object],
    parameter_map: Mapping[ProfileType, Mapping[str, object]] = PARAMETER_MAP,
) -> ProfileType:
    """
    Return the profile type whose mapping table shares the most field names.

    Ties go to the type declared first in ``parameter_map``.  Returns
    ``ProfileType.UNKNOWN`` when no type matches any field.
    """
    scores = score_profile_types(fields, parameter_map)
    best = ProfileType.UNKNOWN
    best_score = 0
    for profile_type, score in scores.items():
        if score > best_score:
            best, best_score = profile_type, score
    logger.debug("Profile type scores: %s -> %s", {t.value: s for t, s in scores.items()}, best.value)
    return best
