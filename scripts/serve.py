#!/usr/bin/env python3
"""
Farm Lookup - FastAPI service entrypoint

Usage:
    python scripts/serve.py [--host HOST] [--port PORT] [--data-dir DIR]

With --data-dir the service runs on an embedded SurrealDB stored under DIR;
otherwise the FARM_* environment (or .env) decides the backend.
"""

import argparse
import os
import sys
from pathlib import Path


def setup_embedded_store(data_dir: str) -> None:
    """Point the service at an embedded SurrealDB under data_dir."""
    surreal_path = Path(data_dir) / "surrealdb" / "farm"
    surreal_path.parent.mkdir(parents=True, exist_ok=True)

    os.environ.setdefault("FARM_BACKEND", "surrealdb")
    os.environ.setdefault("FARM_SURREAL_URL", f"file://{surreal_path}")

    # Disable Python buffering for better log output
    os.environ["PYTHONUNBUFFERED"] = "1"


def start_service(host: str, port: int, reload: bool = False) -> None:
    """Start the uvicorn server."""
    import uvicorn

    print(f"[farm-lookup] Starting service on {host}:{port}")
    print(f"[farm-lookup] Backend: {os.environ.get('FARM_BACKEND', 'postgres')}")

    uvicorn.run(
        "farm_lookup.api:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
        access_log=True,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Farm Lookup - FastAPI service")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--data-dir", help="Run on an embedded SurrealDB stored here")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    if args.data_dir:
        setup_embedded_store(args.data_dir)

    try:
        start_service(args.host, args.port, args.reload)
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
