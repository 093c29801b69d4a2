"""
pokeradvisor Server - FastAPI HTTP and WebSocket boundary.
"""

from pokeradvisor.server.app import app, create_app

__all__ = ["app", "create_app"]
