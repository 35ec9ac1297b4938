import os

# Must be set before app.config settings are first cached
os.environ["GOOGLE_MAPS_API_KEY"] = "test-key"
os.environ["LOG_REQUESTS_TO_FILE"] = "false"

import pytest


def make_place(lat, lng, types=None, **extra):
    """Build a Google Places style result."""
    place = {"geometry": {"location": {"lat": lat, "lng": lng}}}
    if types is not None:
        place["types"] = types
    place.update(extra)
    return place


@pytest.fixture
def origin():
    return {"lat": 40.7128, "lng": -74.0060}
