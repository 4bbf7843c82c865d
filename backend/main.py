"""
Run the verse dispatcher HTTP app.

Usage:
    uv run python main.py

Environment variables:
    PORT: Port to listen on (default: 8000)
    HOST: Interface to bind (default: 0.0.0.0)
"""

import os

import uvicorn
from dotenv import load_dotenv

from api.app import app

load_dotenv()


def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    print(f"Starting Bible Verse dispatcher on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
