"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured ``api.v1_prefix``
(default ``/api/v1/recipe-extractor``).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_extractor.api.v1.endpoints import extraction, health


router = APIRouter()

router.include_router(health.router)
router.include_router(extraction.router)
