from fastapi import APIRouter
from pip_intel.routers import data_quality, pips, plans, reviews

# Centralized API router hub
# Routers are aggregated here and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(reviews.router, tags=["Review Analysis"])
api_router.include_router(plans.router, tags=["Development Plans"])
api_router.include_router(pips.router, tags=["Performance Improvement Plans"])
api_router.include_router(data_quality.router, tags=["Data Quality"])
