#!/usr/bin/env python
"""
Run the Eros identity API server.

Usage:
    python run_api.py
    python run_api.py --reload              # Development mode
    python run_api.py --log-level debug     # Verbose verification logs

Requires JWT_SECRET and the IDENTITY_PROVIDER_* settings; startup fails otherwise.
"""

import argparse
import uvicorn

from shared.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description=f"Run {settings.app_name} server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--log-level", type=str, help="uvicorn log level (defaults to LOG_LEVEL)")
    args = parser.parse_args()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=(args.log_level or settings.log_level).lower(),
    )


if __name__ == "__main__":
    main()
