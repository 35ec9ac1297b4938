"""
Business Logic Services Module.

Core services for the Nearby Convenience API:
- calculate_distance: Haversine distance between coordinates
- CategoryProfile registry: Per-category weight, ideal count and radius
- ConvenienceScorer: Calculates convenience scores (0-10) from nearby places
- interpret_score: Maps a score to a human-readable band

These services are pure functions over already-fetched place data and are
used by routes.
"""

from .exceptions import ScoringError, InvalidCoordinateError, InvalidPlaceTypesError, MissingLocationError
from .distance import Coordinate, parse_coordinate, calculate_distance
from .profiles import CategoryProfile, DEFAULT_PROFILE, PLACE_PROFILES, get_profile
from .scoring import ConvenienceScorer, get_scorer, interpret_score

__all__ = [
    "ScoringError",
    "InvalidCoordinateError",
    "InvalidPlaceTypesError",
    "MissingLocationError",
    "Coordinate",
    "parse_coordinate",
    "calculate_distance",
    "CategoryProfile",
    "DEFAULT_PROFILE",
    "PLACE_PROFILES",
    "get_profile",
    "ConvenienceScorer",
    "get_scorer",
    "interpret_score",
]
