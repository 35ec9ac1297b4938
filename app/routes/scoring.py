"""
Scoring API Routes.

Expose the convenience scoring core and its category profiles directly, for
callers that already hold place data.
"""

import logging
from typing import List

from fastapi import APIRouter

from ..models import CategoryProfileResponse, ConvenienceResult, ErrorResponse, ScoreRequest
from ..services.scoring import get_scorer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scoring"])


@router.get(
    "/profiles",
    response_model=List[CategoryProfileResponse],
    summary="List Category Profiles",
    description="Scoring parameters for every category with a dedicated profile.",
)
async def list_profiles() -> List[CategoryProfileResponse]:
    """List all known category profiles."""
    scorer = get_scorer()
    return [
        CategoryProfileResponse(category=category, **profile.to_dict())
        for category, profile in scorer.profiles.items()
    ]


@router.get(
    "/profiles/{category}",
    response_model=CategoryProfileResponse,
    summary="Get Category Profile",
    description="Profile used for a category. Unknown categories get the default profile.",
)
async def get_category_profile(category: str) -> CategoryProfileResponse:
    """Get the active profile for a category."""
    scorer = get_scorer()
    profile = scorer.profile_for(category)
    return CategoryProfileResponse(
        category=category,
        is_default=category not in scorer.profiles,
        **profile.to_dict(),
    )


@router.post(
    "/score",
    response_model=ConvenienceResult,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid coordinate"},
        422: {"model": ErrorResponse, "description": "Invalid request, place without location or non-string types"},
    },
    summary="Score Places",
    description="""
    Compute a convenience score for already-fetched places.

    **Example Request:**
    ```json
    {
        "category": "hospital",
        "origin": "40.7128,-74.0060",
        "places": [
            {"geometry": {"location": {"lat": 40.713, "lng": -74.006}}, "types": ["hospital"]}
        ]
    }
    ```
    """,
)
async def score_places(request: ScoreRequest) -> ConvenienceResult:
    """Score places around an origin."""
    logger.info(f"Scoring {len(request.places)} places for category {request.category}")
    return get_scorer().analyze(request.places, request.category, request.origin)
