"""Pydantic models for the Nearby Convenience API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ConvenienceResult(BaseModel):
    """Convenience score with its qualitative interpretation."""

    score: float = Field(ge=0, le=10)
    interpretation: str


class ScoreRequest(BaseModel):
    """Input schema for scoring already-fetched places."""

    places: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Place records, each with geometry.location and optional types",
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Place category used to pick the scoring profile",
        examples=["hospital", "pharmacy", "restaurant"],
    )
    origin: Union[str, Dict[str, Any]] = Field(
        ...,
        description="Search center as 'lat,lng' or {\"lat\": ..., \"lng\": ...}",
        examples=["40.7128,-74.0060", {"lat": 40.7128, "lng": -74.0060}],
    )


class CategoryProfileResponse(BaseModel):
    """Scoring parameters for a category."""

    category: str
    importance_weight: float
    ideal_count: int
    max_distance_km: float
    is_default: bool = Field(default=False, description="True if the fallback profile applies")


class PlaceSummary(BaseModel):
    """A nearby place with its distance from the search center."""

    place_id: Optional[str] = None
    name: Optional[str] = None
    vicinity: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    price_level: Optional[int] = None
    types: List[str] = Field(default_factory=list)
    location: LatLng
    distance_km: float = Field(ge=0)

    @classmethod
    def from_place(
        cls,
        place: Dict[str, Any],
        location: Dict[str, float],
        distance_km: float,
        types: Optional[List[str]] = None,
    ) -> "PlaceSummary":
        """Build a summary from a raw Google Places result."""
        return cls(
            place_id=place.get("place_id"),
            name=place.get("name"),
            vicinity=place.get("vicinity"),
            rating=place.get("rating"),
            user_ratings_total=place.get("user_ratings_total"),
            price_level=place.get("price_level"),
            types=types if types is not None else place.get("types") or [],
            location=LatLng(**location),
            distance_km=distance_km,
        )


class NearbyMetadata(BaseModel):
    """Search context for /nearby."""

    total_places: int = Field(ge=0)
    search_radius: int
    place_type: str
    profile: CategoryProfileResponse


class NearbyResponse(BaseModel):
    """Full response for /nearby."""

    success: bool = True
    places: List[PlaceSummary] = Field(default_factory=list, description="Places sorted by distance ascending")
    convenience_score: float = Field(ge=0, le=10)
    interpretation: str
    metadata: NearbyMetadata


class GeocodeResponse(BaseModel):
    """Response for /geocode."""

    success: bool = True
    location: LatLng
    formatted_address: str


class CustomPlacesMetadata(BaseModel):
    total_places: int = Field(ge=0)
    search_radius: int
    keywords: str


class CustomPlacesResponse(BaseModel):
    success: bool = True
    places: List[PlaceSummary] = Field(default_factory=list)
    metadata: CustomPlacesMetadata


class RatedPlacesMetadata(BaseModel):
    total_places: int = Field(ge=0)
    min_rating: float
    average_rating: Optional[float] = Field(default=None, description="None when no place qualifies")


class RatedPlacesResponse(BaseModel):
    success: bool = True
    places: List[PlaceSummary] = Field(default_factory=list)
    metadata: RatedPlacesMetadata


class TransitMetadata(BaseModel):
    total_stations: int = Field(ge=0)
    average_distance_km: Optional[float] = Field(default=None, description="None when no station is found")


class PublicTransportResponse(BaseModel):
    success: bool = True
    stations: List[PlaceSummary] = Field(default_factory=list)
    metadata: TransitMetadata


class CostEstimate(BaseModel):
    """Price level estimate for a single place."""

    name: Optional[str] = None
    price_level: int = Field(default=0, ge=0)
    estimated_cost: str = Field(..., description="'$' repeated price_level times, or 'N/A'")
    distance_km: float = Field(ge=0)


class CostMetadata(BaseModel):
    total_places: int = Field(ge=0)
    average_price_level: Optional[float] = None
    price_distribution: Dict[str, int] = Field(default_factory=dict, description="Place count per price level")


class CostEstimationResponse(BaseModel):
    success: bool = True
    places: List[CostEstimate] = Field(default_factory=list)
    metadata: CostMetadata


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    places_api_configured: bool
    uptime_seconds: int = 0


class ErrorResponse(BaseModel):
    """Error response model."""

    error: bool = True
    code: str
    message: str
    request_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
