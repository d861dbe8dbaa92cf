"""
Sleeper Trade Finder API - Main Application

FastAPI application for fantasy football trade recommendations.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sleeper_trade_finder import __version__
from sleeper_trade_finder.api.dependencies import ClientManager
from sleeper_trade_finder.api.routes import leagues, trade_finder
from sleeper_trade_finder.clients.sleeper import SleeperAPIError
from sleeper_trade_finder.config import configure_logging, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting Sleeper Trade Finder API v%s", __version__)
    logger.info("Debug mode: %s, default season: %s", settings.debug, settings.default_season)

    yield

    # Shutdown
    logger.info("Shutting down Sleeper Trade Finder API")
    await ClientManager.close_client()


def create_app() -> FastAPI:
    """Application factory to create the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SleeperAPIError)
    async def sleeper_error_handler(request: Request, exc: SleeperAPIError):
        logger.error("Sleeper API error on %s: %s", request.url.path, exc.message)
        status_code = 404 if exc.status_code == 404 else 502
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "leagues": "/api/leagues",
                "trade_finder": "/api/trade-finder",
            },
        }

    # Register API routes
    app.include_router(leagues.router, prefix="/api/leagues", tags=["Leagues"])
    app.include_router(trade_finder.router, prefix="/api/trade-finder", tags=["Trade Finder"])

    return app


# Create the application instance
app = create_app()


def run():
    """Run the application (used by the API entry point)."""
    settings = get_settings()
    uvicorn.run(
        "sleeper_trade_finder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
