"""
FastAPI main application
Guess the EToH Tower - Quiz Server

Modular architecture with separated API routers in towerguess/api/:
- health.py: Health check and system status
- config.py: Client configuration and the loaded catalog
- game.py: Game sessions (start, guess, restart, back to menu)

All routers access shared state via towerguess.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
import os

from towerguess import state
from towerguess.config import load_config
from towerguess.core.catalog import read_catalog
from towerguess.models import Settings

# Import all API routers
from towerguess.api import health, game
from towerguess.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def mount_images(app: FastAPI, settings: Settings) -> bool:
    """
    Serve the image folder (and towers.json) at the catalog URL prefix

    Called from lifespan so the mount follows the settings loaded at
    startup; a previous mount is replaced.
    """
    app.router.routes[:] = [r for r in app.router.routes if getattr(r, "name", None) != "images"]
    if not os.path.exists(settings.images_dir):
        logger.warning(f"⚠️ Image folder {settings.images_dir} not found, images are not served")
        return False
    app.mount(settings.url_prefix, StaticFiles(directory=settings.images_dir), name="images")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: load settings and catalog into global state.
    # A missing or broken catalog leaves empty pools instead of failing startup.
    state.SETTINGS = load_config()
    state.CATALOG = read_catalog(state.SETTINGS.catalog_file)
    mount_images(app, state.SETTINGS)
    logger.info(
        f"✅ Server started with {len(state.CATALOG.default_images)} default "
        f"and {len(state.CATALOG.pom_images)} PoM towers"
    )

    yield

    # Shutdown
    state.SESSIONS.clear()
    state.SESSION_SEEN.clear()
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Guess the EToH Tower",
    description="Image guessing quiz: catalog, game sessions and high score",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Config and catalog (GET /config, GET /catalog)
app.include_router(config_router.router)

# Game sessions (POST /game/sessions, /game/{id}/start, /game/{id}/guess, ...)
app.include_router(game.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    _settings = load_config()
    uvicorn.run(app, host=_settings.host, port=_settings.port)
