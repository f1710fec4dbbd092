"""Role tier policies for cast entries.

The provider only gives a billing order and a coded gender per actor.
Mapping those to role tiers is a heuristic, so it sits behind the
``RoleTierPolicy`` protocol and the normalizer takes any implementation.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from moviehub.schemas import CastRole

# TMDB gender codes
GENDER_FEMALE = 1
GENDER_MALE = 2


def _is_code(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class RoleTierPolicy(Protocol):
    """Assigns a role tier to a cast entry from its rank in billing order."""

    def assign(self, rank: int, entry: Mapping[str, Any]) -> CastRole:
        """Return the tier for the entry at 0-based ``rank``."""
        ...


class GenderCodedRoleTierPolicy:
    """Lead tiers from the provider gender code.

    The first ``lead_slots`` entries become Hero (male code) or Heroine
    (female code). Entries up to ``supporting_until`` are Supporting and
    the rest Other. An entry without both a gender code and a billing
    order is always Supporting.
    """

    def __init__(self, lead_slots: int = 2, supporting_until: int = 10) -> None:
        self.lead_slots = lead_slots
        self.supporting_until = supporting_until

    def assign(self, rank: int, entry: Mapping[str, Any]) -> CastRole:
        gender = entry.get("gender")
        if not _is_code(gender) or not _is_code(entry.get("order")):
            return CastRole.SUPPORTING
        if rank < self.lead_slots:
            if gender == GENDER_MALE:
                return CastRole.HERO
            if gender == GENDER_FEMALE:
                return CastRole.HEROINE
            return CastRole.SUPPORTING
        if rank <= self.supporting_until:
            return CastRole.SUPPORTING
        return CastRole.OTHER


class BillingOrderRoleTierPolicy:
    """Lead tiers from billing order alone, ignoring gender."""

    def __init__(self, lead_slots: int = 2, supporting_until: int = 10) -> None:
        self.lead_slots = lead_slots
        self.supporting_until = supporting_until

    def assign(self, rank: int, entry: Mapping[str, Any]) -> CastRole:
        if rank < self.lead_slots:
            return CastRole.LEAD
        if rank <= self.supporting_until:
            return CastRole.SUPPORTING
        return CastRole.OTHER
