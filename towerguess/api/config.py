"""
Configuration and catalog endpoints
"""
from fastapi import APIRouter

from towerguess import state
from towerguess.models import Catalog


router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config():
    """Client-relevant settings and pool sizes"""
    settings = state.SETTINGS
    catalog = state.CATALOG or Catalog()

    return {
        "url_prefix": settings.url_prefix,
        "preload_timeout": settings.preload_timeout,
        "bonus_dir": settings.bonus_dir,
        "pools": {
            "defaultImages": len(catalog.default_images),
            "pomImages": len(catalog.pom_images),
        }
    }


@router.get("/catalog")
async def get_catalog():
    """Catalog document as loaded at startup"""
    return (state.CATALOG or Catalog()).to_document()
