"""
Top‑level API router.

Aggregates the resource routers.  The application factory mounts this
router under the ``/api`` prefix.
"""

from fastapi import APIRouter

from .endpoints import flocks, records

router = APIRouter()

router.include_router(records.router, prefix="/records", tags=["records"])
router.include_router(flocks.router, prefix="/flock", tags=["flocks"])
