"""
Admin API routes package
"""
from fastapi import APIRouter

from .analytics import router as analytics_router

# Create main admin router
router = APIRouter()

router.include_router(analytics_router, tags=["Analytics"])
