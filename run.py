#!/usr/bin/env python3
"""
Card Shoggoths - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]
                  [--ante N] [--courage X] [--simulations N] [--hide-on-fold]

Game options are handed to the app through the same environment variables
GameConfig.from_env() and AIConfig.from_env() read, so they also reach the
worker process uvicorn spawns with --reload.
"""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Card Shoggoths Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--ante", type=int, help="Ante per player per round")
    parser.add_argument("--courage", type=float, help="Opponent aggression (>1 bolder)")
    parser.add_argument("--simulations", type=int, help="Monte-Carlo trials per discard option")
    parser.add_argument("--hide-on-fold", action="store_true",
                        help="Keep the opponent's cards hidden when a round ends by fold")
    args = parser.parse_args()

    overrides = {
        "ANTE": args.ante,
        "AI_COURAGE": args.courage,
        "AI_DISCARD_SIMULATIONS": args.simulations,
        "REVEAL_ON_FOLD": "false" if args.hide_on_fold else None,
    }
    for name, value in overrides.items():
        if value is not None:
            os.environ[name] = str(value)

    uvicorn.run(
        "cardshoggoths.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
