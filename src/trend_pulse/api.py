"""FastAPI server exposing the trend snapshot."""

from datetime import datetime
import logging
import re
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import assembler
from .config import settings

logger = logging.getLogger(__name__)

APP_NAME = "Trend Pulse"
APP_VERSION = "1.0.0"

app = FastAPI(title=APP_NAME, version=APP_VERSION)

# Track system state
_start_time = datetime.now()

NO_STORE_HEADERS = {"Cache-Control": "no-store, must-revalidate"}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw: Optional[str]) -> Optional[int]:
    """Leading-integer parse of the limit parameter; junk falls back to the default."""
    match = _LEADING_INT.match(raw or "")
    return int(match.group(1)) if match else None


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
    }


@app.get("/api/trends")
async def trends(geo: Optional[str] = None, limit: Optional[str] = None):
    """Collect a fresh snapshot for the requested region and depth."""
    logger.debug(f"Snapshot requested: geo={geo!r} limit={limit!r}")
    snapshot = await assembler.collect_trend_snapshot(geo=geo, limit=parse_limit(limit))
    return JSONResponse(content=snapshot.to_payload(), headers=NO_STORE_HEADERS)


@app.get("/healthz")
async def healthcheck():
    """Health check endpoint for container orchestration."""
    defaults = settings.snapshot_defaults
    return {
        "status": "healthy",
        "uptime_seconds": int((datetime.now() - _start_time).total_seconds()),
        "defaults": {
            "geo": defaults.geo,
            "limit": defaults.limit,
            "max_limit": defaults.max_limit,
        },
    }
