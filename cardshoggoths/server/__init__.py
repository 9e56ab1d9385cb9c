"""
Card Shoggoths Server - FastAPI host around the game engine
"""

from cardshoggoths.server.app import app, create_app

__all__ = ["app", "create_app"]
