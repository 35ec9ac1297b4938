"""
Places API Routes.

Endpoints that search Google Maps around a location and enrich the results
with distances and convenience scores.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, Query

from ..clients.places_client import get_places_client
from ..config import get_settings
from ..middleware.error_handler import APIError
from ..models import (
    CategoryProfileResponse,
    CostEstimate,
    CostEstimationResponse,
    CostMetadata,
    CustomPlacesMetadata,
    CustomPlacesResponse,
    ErrorResponse,
    GeocodeResponse,
    LatLng,
    NearbyMetadata,
    NearbyResponse,
    PlaceSummary,
    PublicTransportResponse,
    RatedPlacesMetadata,
    RatedPlacesResponse,
    TransitMetadata,
)
from ..services.distance import Coordinate, parse_coordinate
from ..services.scoring import ConvenienceScorer, get_scorer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["places"])

# Google Places Nearby Search accepts at most 50 km
MAX_RADIUS_M = 50000

TRANSIT_PLACE_TYPE = "transit_station"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid location"},
    422: {"model": ErrorResponse, "description": "Invalid request"},
    502: {"model": ErrorResponse, "description": "Google Maps error"},
}


def _summarize_places(
    places: Sequence[Dict[str, Any]],
    origin: Coordinate,
    scorer: ConvenienceScorer,
) -> List[PlaceSummary]:
    """Attach the distance from origin to each place, keeping input order."""
    summaries = []
    for index, place in enumerate(places):
        location = parse_coordinate(scorer.place_location(place, index))
        summaries.append(
            PlaceSummary.from_place(
                place,
                location.to_dict(),
                scorer.distance(origin, location),
                types=scorer.place_types(place, index),
            )
        )
    return summaries


def _split_keywords(custom_keywords: str) -> str:
    """Turn 'a, b,c' into the 'a|b|c' form Nearby Search expects."""
    keywords = [k.strip() for k in custom_keywords.split(",") if k.strip()]
    if not keywords:
        raise APIError(
            code="INVALID_KEYWORDS",
            message="custom_keywords must contain at least one keyword",
            status_code=400,
        )
    return "|".join(keywords)


@router.get(
    "/nearby",
    response_model=NearbyResponse,
    responses={
        **ERROR_RESPONSES,
        404: {"model": ErrorResponse, "description": "No places found"},
    },
    summary="Nearby Places with Convenience Score",
    description="""
    Search for places of one type around a location and score how well-served
    the area is.

    The convenience score (0-10) combines:
    - **Distance (40%)**: full credit within a third of the category radius
    - **Density (40%)**: place count relative to the category's ideal count
    - **Variety (20%)**: distinct place types among the results

    The result is scaled by the category's importance weight.
    """,
)
async def nearby_places(
    location: str = Query(..., description="Search center as 'lat,lng'", examples=["40.7128,-74.0060"]),
    radius: Optional[int] = Query(default=None, gt=0, le=MAX_RADIUS_M, description="Search radius in meters"),
    place_type: Optional[str] = Query(default=None, alias="type", description="Google place type"),
) -> NearbyResponse:
    """Find nearby places, sorted by distance, with a convenience score."""
    settings = get_settings()
    radius = radius or settings.default_radius_m
    place_type = place_type or settings.default_place_type

    origin = parse_coordinate(location)
    places = await get_places_client().nearby_search(origin, radius, place_type=place_type)

    if not places:
        raise APIError(
            code="NO_PLACES_FOUND",
            message="No places found for the given criteria.",
            status_code=404,
        )

    scorer = get_scorer()
    summaries = _summarize_places(places, origin, scorer)
    result = scorer.analyze(places, place_type, origin)

    summaries.sort(key=lambda p: p.distance_km)

    profile = scorer.profile_for(place_type)
    return NearbyResponse(
        places=summaries,
        convenience_score=result.score,
        interpretation=result.interpretation,
        metadata=NearbyMetadata(
            total_places=len(places),
            search_radius=radius,
            place_type=place_type,
            profile=CategoryProfileResponse(
                category=place_type,
                is_default=place_type not in scorer.profiles,
                **profile.to_dict(),
            ),
        ),
    )


@router.get(
    "/geocode",
    response_model=GeocodeResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Address not found"},
        422: ERROR_RESPONSES[422],
        502: ERROR_RESPONSES[502],
    },
    summary="Geocode Address",
    description="Convert a free-form address into coordinates.",
)
async def geocode_address(
    address: str = Query(..., min_length=1, max_length=200, description="Address to geocode"),
) -> GeocodeResponse:
    """Geocode an address with Google Maps."""
    result = await get_places_client().geocode(address.strip())

    if result is None:
        raise APIError(code="ADDRESS_NOT_FOUND", message="Address not found.", status_code=404)

    return GeocodeResponse(
        location=LatLng(**result.location),
        formatted_address=result.formatted_address,
    )


@router.get(
    "/custom-places",
    response_model=CustomPlacesResponse,
    responses=ERROR_RESPONSES,
    summary="Keyword Place Search",
    description="Search places matching any of several comma-separated keywords.",
)
async def custom_places(
    location: str = Query(..., description="Search center as 'lat,lng'"),
    custom_keywords: str = Query(..., min_length=1, max_length=200, description="Comma-separated keywords"),
    radius: Optional[int] = Query(default=None, gt=0, le=MAX_RADIUS_M),
) -> CustomPlacesResponse:
    """Keyword search around a location."""
    radius = radius or get_settings().default_radius_m
    keywords = _split_keywords(custom_keywords)

    origin = parse_coordinate(location)
    places = await get_places_client().nearby_search(origin, radius, keyword=keywords)

    return CustomPlacesResponse(
        places=_summarize_places(places, origin, get_scorer()),
        metadata=CustomPlacesMetadata(
            total_places=len(places),
            search_radius=radius,
            keywords=custom_keywords,
        ),
    )


@router.get(
    "/places-with-ratings",
    response_model=RatedPlacesResponse,
    responses=ERROR_RESPONSES,
    summary="Places Filtered by Rating",
    description="Nearby places of a type whose rating is at least `min_rating`.",
)
async def places_with_ratings(
    location: str = Query(..., description="Search center as 'lat,lng'"),
    radius: Optional[int] = Query(default=None, gt=0, le=MAX_RADIUS_M),
    place_type: Optional[str] = Query(default=None, alias="type"),
    min_rating: Optional[float] = Query(default=None, ge=0, le=5),
) -> RatedPlacesResponse:
    """Nearby places with a minimum rating."""
    settings = get_settings()
    radius = radius or settings.default_radius_m
    place_type = place_type or settings.default_place_type
    if min_rating is None:
        min_rating = settings.default_min_rating

    origin = parse_coordinate(location)
    places = await get_places_client().nearby_search(origin, radius, place_type=place_type)

    # Unrated places never pass the filter
    rated = [
        place for place in places
        if place.get("rating") is not None and place["rating"] >= min_rating
    ]

    average_rating = None
    if rated:
        average_rating = round(sum(place["rating"] for place in rated) / len(rated), 2)

    return RatedPlacesResponse(
        places=_summarize_places(rated, origin, get_scorer()),
        metadata=RatedPlacesMetadata(
            total_places=len(rated),
            min_rating=min_rating,
            average_rating=average_rating,
        ),
    )


@router.get(
    "/public-transport",
    response_model=PublicTransportResponse,
    responses=ERROR_RESPONSES,
    summary="Nearby Transit Stations",
    description="Transit stations around a location with their distances.",
)
async def public_transport(
    location: str = Query(..., description="Search center as 'lat,lng'"),
    radius: Optional[int] = Query(default=None, gt=0, le=MAX_RADIUS_M),
) -> PublicTransportResponse:
    """Transit stations near a location."""
    radius = radius or get_settings().transit_radius_m

    origin = parse_coordinate(location)
    places = await get_places_client().nearby_search(origin, radius, place_type=TRANSIT_PLACE_TYPE)
    stations = _summarize_places(places, origin, get_scorer())

    average_distance = None
    if stations:
        average_distance = round(sum(s.distance_km for s in stations) / len(stations), 3)

    return PublicTransportResponse(
        stations=stations,
        metadata=TransitMetadata(
            total_stations=len(stations),
            average_distance_km=average_distance,
        ),
    )


@router.get(
    "/cost-estimation",
    response_model=CostEstimationResponse,
    responses=ERROR_RESPONSES,
    summary="Price Level Estimates",
    description="""
    Price levels of nearby places.

    `estimated_cost` repeats `$` once per price level; places without a
    price level report `N/A` and count as level 0.
    """,
)
async def cost_estimation(
    location: str = Query(..., description="Search center as 'lat,lng'"),
    radius: Optional[int] = Query(default=None, gt=0, le=MAX_RADIUS_M),
    place_type: Optional[str] = Query(default=None, alias="type"),
) -> CostEstimationResponse:
    """Price level breakdown for nearby places."""
    settings = get_settings()
    radius = radius or settings.default_radius_m
    place_type = place_type or settings.cost_estimation_place_type

    origin = parse_coordinate(location)
    places = await get_places_client().nearby_search(origin, radius, place_type=place_type)

    estimates = [
        CostEstimate(
            name=summary.name,
            price_level=summary.price_level or 0,
            estimated_cost="$" * summary.price_level if summary.price_level else "N/A",
            distance_km=summary.distance_km,
        )
        for summary in _summarize_places(places, origin, get_scorer())
    ]

    # Unpriced places count toward the denominator
    average_price_level = None
    if estimates:
        average_price_level = round(
            sum(e.price_level for e in estimates if e.price_level) / len(estimates), 2
        )

    distribution = Counter(str(e.price_level) for e in estimates)

    return CostEstimationResponse(
        places=estimates,
        metadata=CostMetadata(
            total_places=len(estimates),
            average_price_level=average_price_level,
            price_distribution=dict(distribution),
        ),
    )
