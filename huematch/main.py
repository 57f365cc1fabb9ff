"""huematch — FastAPI application entry point."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import match
from .services import color_sets

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ORIGINS = os.environ.get(
    "HUEMATCH_CORS_ORIGINS",
    "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
).split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load and prepare every palette once so keystroke queries only scan
    sets = color_sets.warm_up()
    logger.info(f"Color sets ready: {', '.join(f'{cs.id}={cs.count}' for cs in sets) or 'none'}")
    yield


app = FastAPI(
    title="huematch",
    description="Closest named colors by CIEDE2000",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS — allow the Vite dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in CORS_ORIGINS if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(match.router)


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "color_sets": {cs.id: cs.count for cs in color_sets.available_color_sets()},
    }


@app.get("/")
async def root() -> dict:
    return {"message": "huematch API", "docs": "/docs"}
