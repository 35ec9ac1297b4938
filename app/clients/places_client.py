"""
Google Maps Platform Client.

Fetches nearby places (Places API Nearby Search) and geocodes addresses
(Geocoding API). Results are returned as raw provider dicts so the scoring
core can read ``geometry.location`` and ``types`` directly.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import get_settings
from ..services.distance import CoordinateLike, parse_coordinate

logger = logging.getLogger(__name__)

# Provider statuses that carry a usable (possibly empty) result list
OK_STATUSES = frozenset(("OK", "ZERO_RESULTS"))


class PlacesAPIError(Exception):
    """Google Maps request failed or returned an error status."""

    def __init__(self, message: str, status: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.status = status
        self.status_code = status_code
        super().__init__(message)


@dataclass
class GeocodeResult:
    """
    Best match for a geocoded address.

    Attributes:
        location: ``{"lat": ..., "lng": ...}`` of the match
        formatted_address: Provider-formatted address string
    """
    location: Dict[str, float]
    formatted_address: str


class GooglePlacesClient:
    """Async client for Google Places Nearby Search and Geocoding."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = get_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self._settings.google_maps_api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._settings.places_base_url,
                timeout=self._settings.places_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Call a Maps web service endpoint and validate its status.

        Raises:
            PlacesAPIError: On missing API key, transport errors, HTTP errors
                or a provider status other than OK/ZERO_RESULTS
        """
        if not self.is_configured:
            raise PlacesAPIError("Google Maps API key is not configured")

        client = await self._get_client()
        query = {k: v for k, v in params.items() if v is not None}
        query["key"] = self._settings.google_maps_api_key

        try:
            response = await client.get(path, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Google Maps HTTP error on {path}: {e.response.status_code}")
            raise PlacesAPIError(
                f"HTTP error: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Google Maps request error on {path}: {e.__class__.__name__}")
            raise PlacesAPIError(f"Request failed: {e.__class__.__name__}") from e
        except ValueError as e:
            logger.error(f"Google Maps returned invalid JSON on {path}")
            raise PlacesAPIError("Invalid JSON from Google Maps") from e

        status = data.get("status")
        if status not in OK_STATUSES:
            message = data.get("error_message") or f"Google Maps returned status {status}"
            logger.error(f"Google Maps error on {path}: {status} - {message}")
            raise PlacesAPIError(message, status=status)

        return data

    async def nearby_search(
        self,
        location: CoordinateLike,
        radius: int,
        place_type: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search for places around a location.

        Args:
            location: Search center
            radius: Search radius in meters
            place_type: Google place type (e.g., 'hospital', 'transit_station')
            keyword: Free-text keyword; '|' separates alternatives

        Returns:
            Raw place results (empty on ZERO_RESULTS)
        """
        center = parse_coordinate(location)

        logger.info(
            f"Nearby search at {center} radius={radius}m "
            f"type={place_type or '-'} keyword={keyword or '-'}"
        )

        data = await self._get_json(
            "/place/nearbysearch/json",
            {
                "location": str(center),
                "radius": radius,
                "type": place_type,
                "keyword": keyword,
            },
        )

        results = data.get("results") or []
        logger.info(f"Nearby search returned {len(results)} places")
        return results

    async def geocode(self, address: str) -> Optional[GeocodeResult]:
        """
        Geocode a free-form address.

        Returns:
            GeocodeResult for the best match, or None if nothing matched
        """
        logger.info(f"Geocoding address: {address}")

        data = await self._get_json("/geocode/json", {"address": address})

        results = data.get("results") or []
        if not results:
            logger.warning(f"No geocoding results for: {address}")
            return None

        best = results[0]
        location = best.get("geometry", {}).get("location")
        if not location:
            logger.warning(f"Geocoding result without location for: {address}")
            return None

        result = GeocodeResult(
            location=parse_coordinate(location).to_dict(),
            formatted_address=best.get("formatted_address", ""),
        )
        logger.info(f"Geocoded to {result.location['lat']},{result.location['lng']}")
        return result

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Singleton instance
_places_client_instance: Optional[GooglePlacesClient] = None


def get_places_client() -> GooglePlacesClient:
    """Get the singleton places client instance."""
    global _places_client_instance
    if _places_client_instance is None:
        _places_client_instance = GooglePlacesClient()
    return _places_client_instance
