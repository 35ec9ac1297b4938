"""
External Data Clients Module.

Provides the async client for Google Maps Platform web services:
- GooglePlacesClient: Nearby Search (places around a point) and Geocoding

Provider failures surface as PlacesAPIError; the API key is never logged.
"""

from .places_client import GooglePlacesClient, GeocodeResult, PlacesAPIError, get_places_client

__all__ = ["GooglePlacesClient", "GeocodeResult", "PlacesAPIError", "get_places_client"]
