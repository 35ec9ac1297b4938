"""
API Routes Module.

Contains all FastAPI router definitions:
- places_router: Google Maps backed endpoints (nearby, geocode, custom, ratings, transit, cost)
- scoring_router: Direct access to the scoring core (score, profiles)
"""

from .places import router as places_router
from .scoring import router as scoring_router

__all__ = ["places_router", "scoring_router"]
