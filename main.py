#!/usr/bin/env python3
"""
Furnishare -- accounts, session tokens, and a furniture catalog over HTTP.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8080
  python main.py serve --reload
  python main.py seed

Environment variables (see core/config.py for the full list):
  JWT_SECRET     Required unless DEBUG=true. At least 32 characters.
  DATABASE_URL   SQLAlchemy URL. Defaults to sqlite:///furnishare.db.
  SERVE_STATIC   true to serve the built frontend from STATIC_DIR.
  CORS_ORIGINS   Allowed origins, comma-separated or a JSON list.
"""

import argparse
import sys

from pydantic import ValidationError as SettingsError

from catalog.seed import seed_if_empty
from catalog.store import CatalogStore
from core.config import get_settings


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "asgi:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


def _cmd_seed(args: argparse.Namespace) -> int:
    settings = get_settings()
    store = CatalogStore(settings.database_url)
    try:
        inserted = seed_if_empty(store)
    finally:
        store.close()
    if inserted:
        print(f"  Inserted {inserted} sample listings.")
    else:
        print("  Catalog already has data; nothing inserted.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="furnishare", description="Furnishare backend")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", default=None, help="bind address (default: HOST setting)")
    serve.add_argument("--port", type=int, default=None, help="bind port (default: PORT setting)")
    serve.add_argument("--reload", action="store_true", help="auto-reload on code changes")
    serve.set_defaults(func=_cmd_serve)

    seed = sub.add_parser("seed", help="insert sample furniture into an empty catalog")
    seed.set_defaults(func=_cmd_seed)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except SettingsError as exc:
        print(f"  [!] Invalid configuration:\n{exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
