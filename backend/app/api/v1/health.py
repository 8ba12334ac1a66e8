"""
Health Check Endpoints

Provides health status and fixture status endpoints.
"""
from fastapi import APIRouter
from datetime import datetime

from chainlab.data.fixtures import FIXTURE_DIR, load_fixture

from app.api.schemas import HealthCheckResponse, FixtureStatusResponse
from app.config import settings

router = APIRouter()

FIXTURE_NAMES = ["bridge_hacks", "price_feeds", "il_reference", "ecdsa_display", "ecdsa_signing"]


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint

    Returns the current health status of the API.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
        timestamp=datetime.utcnow()
    )


@router.get("/fixtures/status", response_model=FixtureStatusResponse)
async def fixture_status():
    """
    Fixture status endpoint

    Tries to load every versioned fixture table from the configured directory.
    """
    fixtures = {}
    for name in FIXTURE_NAMES:
        try:
            load_fixture(name, settings.FIXTURE_DIR)
            fixtures[name] = True
        except (FileNotFoundError, ValueError) as e:
            print(f"[Fixtures] {name}: {e}")
            fixtures[name] = False

    return FixtureStatusResponse(
        fixture_dir=settings.FIXTURE_DIR or str(FIXTURE_DIR),
        fixtures=fixtures,
        status="ready" if all(fixtures.values()) else "degraded"
    )
