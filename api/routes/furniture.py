"""
api/routes/furniture.py -- Public furniture catalog listing.

Routes:
  GET /api/furniture?tags=Chair&tags=Modern&offerType=Sell

Filters:
  tags       -- repeatable; a listing matches when it has ANY of them
  offerType  -- exact match on the listing's offer type

Results are always ordered by ascending id. latitude/longitude are omitted
from an item when the listing has no coordinates.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.models import FurnitureItem, FurnitureListResponse
from catalog.store import CatalogStore
from core.errors import InternalError

logger = logging.getLogger("furnishare.api")

router = APIRouter()


@router.get("/furniture", response_model=FurnitureListResponse)
def list_furniture(
    request: Request,
    tags: list[str] = Query(default=[]),
    offer_type: Optional[str] = Query(default=None, alias="offerType"),
) -> JSONResponse:
    """List catalog entries matching the optional tag and offer-type filters."""
    catalog: CatalogStore = request.app.state.catalog
    try:
        items = catalog.list_furniture(tags=tags, offer_type=offer_type)
    except SQLAlchemyError as exc:
        logger.exception("Furniture query failed (tags=%r, offerType=%r)", tags, offer_type)
        raise InternalError("Error fetching furniture") from exc

    body = FurnitureListResponse(
        furniture=[FurnitureItem.from_furniture(i) for i in items],
        total=len(items),
    )
    return JSONResponse(content=body.model_dump(by_alias=True, exclude_none=True))
