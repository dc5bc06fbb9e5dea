"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from towerguess import state


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    catalog = state.CATALOG
    return {
        "status": "ok",
        "message": "Guess the EToH Tower - Quiz Server",
        "version": "1.0.0",
        "default_images": len(catalog.default_images) if catalog else 0,
        "pom_images": len(catalog.pom_images) if catalog else 0,
        "active_sessions": len(state.SESSIONS)
    }
