"""Errors raised by the convenience scoring core."""

from typing import Any, Optional


class ScoringError(Exception):
    """Base class for scoring core failures."""


class InvalidCoordinateError(ScoringError, ValueError):
    """A coordinate could not be parsed into two finite, in-range numbers."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid coordinate {value!r}: {reason}")


class MissingLocationError(ScoringError):
    """A place has no geometry.location to measure distance to."""

    def __init__(self, index: int, place_id: Optional[str] = None):
        self.index = index
        self.place_id = place_id
        label = f"place at index {index}"
        if place_id:
            label += f" ({place_id})"
        super().__init__(f"Missing geometry.location for {label}")


class InvalidPlaceTypesError(ScoringError, ValueError):
    """A place's ``types`` is not a string or a list of strings."""

    def __init__(self, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(f"Invalid types for place at index {index}: {value!r}")
