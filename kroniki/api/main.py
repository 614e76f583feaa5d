"""
HTTP facade over the Kroniki Mroku engine.

Every endpoint is stateless: the caller sends the character document
(and, for towers, the run) and gets the updated copies back to persist.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kroniki.core.logging_setup import setup_logging
from .config import settings
from .routes import stats, combat, expeditions, towers, pvp, data

API_NAME = "Kroniki Mroku Engine API"
API_VERSION = "1.0.0"

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=API_NAME,
    description="Derived stats, fight resolution, expeditions, towers and duels",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])
app.include_router(combat.router, prefix="/api/combat", tags=["Combat"])
app.include_router(expeditions.router, prefix="/api/expeditions", tags=["Expeditions"])
app.include_router(towers.router, prefix="/api/towers", tags=["Towers"])
app.include_router(pvp.router, prefix="/api/pvp", tags=["PvP"])
app.include_router(data.router, prefix="/api/data", tags=["Data"])


@app.get("/")
async def root():
    """Engine name and version."""
    return {"status": "ok", "name": API_NAME, "version": API_VERSION}


@app.get("/health")
async def health_check():
    """Liveness check for the process supervisor."""
    return {"status": "healthy"}
