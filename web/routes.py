"""
web/routes.py -- Static file serving for the single-page frontend.

Mounted by asgi.py only when SERVE_STATIC=true (production builds ship the
compiled client into STATIC_DIR). api/ knows nothing about this module and
this module knows nothing about api/.

Routing rules:
  /                 -> index.html
  /assets/app.js    -> that file, if it exists under STATIC_DIR
  /some/client/url  -> index.html (client-side routing)
  /api/...          -> never served from disk; 404
  ../ traversal     -> 404, nothing outside STATIC_DIR is reachable
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

logger = logging.getLogger("furnishare.web")


def build_static_router(static_dir: str | Path) -> APIRouter:
    """Return a catch-all GET router serving files from static_dir.

    Include it AFTER the API routers so API paths always match first.
    """
    root = Path(static_dir).resolve()
    index = root / "index.html"
    router = APIRouter()

    @router.get("/{full_path:path}", include_in_schema=False)
    async def serve_static(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        candidate = (root / full_path).resolve()
        if not candidate.is_relative_to(root):
            logger.warning("Rejected static path outside root: %r", full_path)
            raise HTTPException(status_code=404, detail="Not Found")
        if full_path and candidate.is_file():
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not Found")

    return router
