"""
asgi.py -- Application assembly for Furnishare.

This is the ONLY file that imports from both api/ and web/. It joins the two
independent layers into a single ASGI app without coupling them to each other.

Run with:  uvicorn asgi:app --reload
           python main.py serve
"""

from api.main import create_app
from core.config import get_settings
from web.routes import build_static_router

settings = get_settings()
app = create_app(settings)

# Static frontend is mounted last so its catch-all route never shadows /api.
if settings.serve_static:
    app.include_router(build_static_router(settings.static_dir), tags=["Web UI"])
