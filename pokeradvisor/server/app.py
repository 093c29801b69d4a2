"""
FastAPI Application Entry Point for pokeradvisor.

This module creates and configures the FastAPI application with:
- HTTP routes for tables, actions and advice
- WebSocket endpoint for real-time updates
- CORS middleware for development
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokeradvisor import __version__
from pokeradvisor.server.routes import router
from pokeradvisor.server.websocket import websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="pokeradvisor",
        description="Texas Hold'em engine with a decision and advice API",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.websocket("/ws")(websocket_endpoint)

    logger.info("pokeradvisor app created")
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "pokeradvisor.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
