"""API v1 routes."""

from fastapi import APIRouter

from company_review.api.v1 import companies

api_router = APIRouter()

# Include all route modules
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
