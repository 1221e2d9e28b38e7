"""FastAPI application: CORS, shared HTTP client, route registration, health check."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orbitiq.config import Settings
from orbitiq.models import HealthResponse
from orbitiq.pipeline import PositionPipeline
from orbitiq.providers import build_http_client
from orbitiq.routes.satellites import router as satellites_router

# Load .env before anything else
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# httpx logs each request URL at INFO, and N2YO URLs carry the API key.
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with build_http_client() as http:
            app.state.pipeline = PositionPipeline.create(settings, http)
            logger.info(
                "OrbitIQ API ready (N2YO key %s)",
                "configured" if settings.has_n2yo_key else "missing, serving static data",
            )
            yield

    app = FastAPI(
        title="OrbitIQ API",
        description="Satellite positions with live tracking and graceful fallback",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(satellites_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="ok")

    return app


app = create_app()
