"""
Category profiles for convenience scoring.

Each place category carries three hand-tuned parameters:
- importance_weight: how much the category matters (scales the final score)
- ideal_count: how many places it takes to fully satisfy demand
- max_distance_km: radius beyond which a place no longer counts

Hospitals are weighted highest but need few locations; restaurants matter
less but are expected in abundance.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class CategoryProfile:
    """Scoring parameters for one place category."""

    importance_weight: float
    ideal_count: int
    max_distance_km: float

    def __post_init__(self):
        if self.importance_weight <= 0:
            raise ValueError(f"importance_weight must be positive, got {self.importance_weight}")
        if self.ideal_count <= 0:
            raise ValueError(f"ideal_count must be positive, got {self.ideal_count}")
        if self.max_distance_km <= 0:
            raise ValueError(f"max_distance_km must be positive, got {self.max_distance_km}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


DEFAULT_PROFILE = CategoryProfile(importance_weight=5, ideal_count=5, max_distance_km=3)

PLACE_PROFILES: Mapping[str, CategoryProfile] = MappingProxyType({
    "hospital": CategoryProfile(importance_weight=10, ideal_count=3, max_distance_km=5),
    "pharmacy": CategoryProfile(importance_weight=8, ideal_count=4, max_distance_km=2),
    "restaurant": CategoryProfile(importance_weight=6, ideal_count=10, max_distance_km=3),
    "store": CategoryProfile(importance_weight=7, ideal_count=5, max_distance_km=2),
    "atm": CategoryProfile(importance_weight=5, ideal_count=4, max_distance_km=1),
    "school": CategoryProfile(importance_weight=8, ideal_count=3, max_distance_km=3),
})


def get_profile(category: str) -> CategoryProfile:
    """Return the profile for a category, falling back to DEFAULT_PROFILE."""
    return PLACE_PROFILES.get(category, DEFAULT_PROFILE)


def is_known_category(category: str) -> bool:
    """Check whether a category has its own profile."""
    return category in PLACE_PROFILES
