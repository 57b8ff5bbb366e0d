"""Router package exposing all API routers."""

from fastapi import APIRouter

from .visits.router import router as visits_router

router = APIRouter()
router.include_router(visits_router)

__all__ = ["router", "visits_router"]
