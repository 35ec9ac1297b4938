"""
Convenience Scoring Algorithm.

Turns a set of nearby places plus a category profile into a 0-10
convenience score and a human-readable interpretation.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..models import ConvenienceResult
from .distance import CoordinateLike, calculate_distance, parse_coordinate
from .exceptions import InvalidPlaceTypesError, MissingLocationError
from .profiles import PLACE_PROFILES, DEFAULT_PROFILE, CategoryProfile

logger = logging.getLogger(__name__)

# Component weights (sum to 1.0)
DISTANCE_WEIGHT = 0.4
DENSITY_WEIGHT = 0.4
VARIETY_WEIGHT = 0.2

# Number of distinct place types that earns full variety credit
VARIETY_CEILING = 5

SCORE_MIN = 0.0
SCORE_MAX = 10.0

# Interpretation bands, evaluated top-down
SCORE_BANDS: Tuple[Tuple[float, str], ...] = (
    (9, "Excellent convenience - Exceptional access to amenities"),
    (7, "Very Good - Great access to most amenities"),
    (5, "Good - Reasonable access to basic amenities"),
    (3, "Fair - Limited access to some amenities"),
)
POOR_LABEL = "Poor - Minimal access to amenities"


def interpret_score(score: float) -> str:
    """
    Map a convenience score to a qualitative band.

    9+: Excellent
    7-9: Very Good
    5-7: Good
    3-5: Fair
    below 3: Poor
    """
    for threshold, label in SCORE_BANDS:
        if score >= threshold:
            return label
    return POOR_LABEL


def _round_half_up(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


class ConvenienceScorer:
    """
    Computes area convenience scores from nearby places.

    Scoring Algorithm:
    - Distance (40%): mean per-place proximity credit. Full credit inside a
      third of the category radius, linear decay to zero at the radius.
    - Density (40%): place count relative to the category's ideal count,
      capped at 1.
    - Variety (20%): distinct place types across results, capped at 5.
    - The weighted sum is multiplied by the category importance weight,
      rounded to one decimal and clamped to 0-10.
    """

    def __init__(
        self,
        profiles: Mapping = PLACE_PROFILES,
        distance: Callable[[CoordinateLike, CoordinateLike], float] = calculate_distance,
        default_profile: CategoryProfile = DEFAULT_PROFILE,
    ):
        self.profiles = profiles
        self.distance = distance
        self.default_profile = default_profile

    def profile_for(self, category: str) -> CategoryProfile:
        """Resolve the active profile; unknown categories get the default."""
        return self.profiles.get(category, self.default_profile)

    @staticmethod
    def distance_score(distance_km: float, max_distance_km: float) -> float:
        """Proximity credit in [0, 1] for a single place."""
        if distance_km <= max_distance_km / 3:
            return 1.0
        if distance_km <= max_distance_km:
            return 1 - (distance_km - max_distance_km / 3) / (max_distance_km * 2 / 3)
        return 0.0

    @staticmethod
    def density_score(count: int, ideal_count: int) -> float:
        """Count credit in [0, 1], saturating at the ideal count."""
        return min(count / ideal_count, 1.0)

    @staticmethod
    def place_types(place: Mapping, index: int = 0) -> List[str]:
        """
        Type tags of a place record.

        Missing or null ``types`` is no tags and a bare string is a single tag.
        Anything else must be a list of strings.
        """
        types = place.get("types")
        if not types:
            return []
        if isinstance(types, str):
            return [types]
        if not isinstance(types, (list, tuple)) or not all(isinstance(t, str) for t in types):
            raise InvalidPlaceTypesError(index, types)
        return list(types)

    @staticmethod
    def variety_score(places: Iterable[Mapping]) -> float:
        """Credit in [0, 1] for distinct place types across all places."""
        subtypes = set()
        for index, place in enumerate(places):
            subtypes.update(ConvenienceScorer.place_types(place, index))
        return min(len(subtypes) / VARIETY_CEILING, 1.0)

    def place_location(self, place: Mapping, index: int = 0) -> Any:
        """Extract ``geometry.location`` from a place record."""
        geometry = place.get("geometry") if isinstance(place, Mapping) else None
        location = geometry.get("location") if isinstance(geometry, Mapping) else None
        if location is None:
            place_id = place.get("place_id") if isinstance(place, Mapping) else None
            raise MissingLocationError(index, place_id)
        return location

    def place_distances(
        self,
        places: Sequence[Mapping],
        origin: CoordinateLike,
    ) -> list:
        """Distance in kilometers from origin to each place, in input order."""
        origin_point = parse_coordinate(origin)
        return [
            self.distance(origin_point, self.place_location(place, index))
            for index, place in enumerate(places)
        ]

    def calculate_score(
        self,
        places: Sequence[Mapping],
        category: str,
        origin: CoordinateLike,
    ) -> float:
        """
        Calculate the convenience score.

        Args:
            places: Place records with ``geometry.location`` and optional ``types``
            category: Place category used to pick the profile
            origin: Search center

        Returns:
            Score between 0 and 10, rounded to one decimal.

        Raises:
            InvalidCoordinateError: If origin or a place location is malformed
            MissingLocationError: If a place has no location
            InvalidPlaceTypesError: If a place has non-string type tags
        """
        profile = self.profile_for(category)

        distances = self.place_distances(places, origin)
        distance_scores = [
            self.distance_score(d, profile.max_distance_km) for d in distances
        ]
        avg_distance_score = sum(distance_scores) / max(len(distance_scores), 1)

        density_score = self.density_score(len(places), profile.ideal_count)
        variety_score = self.variety_score(places)

        logger.debug(
            f"[{category}] distance={avg_distance_score:.3f} "
            f"density={density_score:.3f} variety={variety_score:.3f} "
            f"weight={profile.importance_weight}"
        )

        raw_score = (
            avg_distance_score * DISTANCE_WEIGHT
            + density_score * DENSITY_WEIGHT
            + variety_score * VARIETY_WEIGHT
        ) * profile.importance_weight

        rounded_score = _round_half_up(raw_score)
        final_score = min(max(rounded_score, SCORE_MIN), SCORE_MAX)
        if final_score != rounded_score:
            logger.warning(f"Clamped convenience score {rounded_score} to {final_score}")

        logger.info(f"Calculated convenience score for {category}: {final_score}")
        return final_score

    def analyze(
        self,
        places: Sequence[Mapping],
        category: str,
        origin: CoordinateLike,
    ) -> ConvenienceResult:
        """Score places and attach the interpretation."""
        score = self.calculate_score(places, category, origin)
        return ConvenienceResult(score=score, interpretation=interpret_score(score))


# Singleton instance
_scorer_instance: Optional[ConvenienceScorer] = None


def get_scorer() -> ConvenienceScorer:
    """Get the singleton scorer instance."""
    global _scorer_instance
    if _scorer_instance is None:
        _scorer_instance = ConvenienceScorer()
    return _scorer_instance
