"""
FastAPI Application Entry Point for Card Shoggoths.

This module creates and configures the FastAPI application with:
- HTTP routes for playing rounds against The Ancient One
- An in-memory, per-session game store
- Static file serving for the browser client, when present
- CORS middleware for development
"""

from typing import Optional
import os
import logging
import random

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

from cardshoggoths import __version__
from cardshoggoths.agents.shoggoth import ShoggothAgent
from cardshoggoths.config import AIConfig, GameConfig
from cardshoggoths.core.game import GameState
from cardshoggoths.server.routes import router
from cardshoggoths.server.store import GameStore

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    game_config: Optional[GameConfig] = None,
    ai_config: Optional[AIConfig] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        game_config: Table settings (read from the environment if omitted)
        ai_config: Opponent tuning (read from the environment if omitted)

    Returns:
        Configured FastAPI application instance
    """
    game_config = game_config or GameConfig.from_env()
    ai_config = ai_config or AIConfig.from_env()

    app = FastAPI(
        title="Card Shoggoths",
        description="Five-card draw against The Ancient One",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def agent_factory() -> ShoggothAgent:
        return ShoggothAgent(config=ai_config, rng=random.Random())

    app.state.game_config = game_config
    app.state.ai_config = ai_config
    app.state.agent_factory = agent_factory
    app.state.store = GameStore(
        loader=lambda data: GameState.from_dict(
            data, config=game_config, agent=agent_factory()
        )
    )

    app.include_router(router)

    # Mount the browser client
    static_dir = os.path.join(os.path.dirname(__file__), "..", "..", "static")
    if os.path.exists(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Mounted static files from {static_dir}")
    else:
        logger.warning(f"Static directory not found: {static_dir}")

    logger.info(
        f"Card Shoggoths ready: ante={game_config.ante}, "
        f"courage={ai_config.courage}, simulations={ai_config.discard_simulations}"
    )
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "cardshoggoths.server.app:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8080")),
        reload=False,
    )


if __name__ == "__main__":
    main()
