"""API router aggregation."""

from fastapi import APIRouter

from app.api import integrations

api_router = APIRouter()

api_router.include_router(integrations.router)
