"""
catalog/store.py -- SQLAlchemy-backed persistence layer for the furniture catalog.

Uses SQLAlchemy Core (not ORM) so the Furniture dataclass in catalog/models.py
remains the authoritative domain representation. Swapping SQLite for
PostgreSQL is a connection string change, not a rewrite.

Pattern: Repository + Data Mapper. CatalogStore is the repository; the
_row_to_furniture function is the mapper. Route handlers never touch SQL.

Tags live in their own table (furniture_tags) rather than a JSON column or a
PostgreSQL array. That keeps the tag-overlap filter ("listing has ANY of the
requested tags") a plain IN-subquery that every backend understands.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = CatalogStore()
    item_id = store.create_furniture(Furniture(title="Sofa", ...))
    items = store.list_furniture(tags=["Chair", "Modern"], offer_type="Sell")
    store.close()
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
    select,
)
from sqlalchemy.engine import Engine

from catalog.models import Furniture
from core.config import DEFAULT_DB_URL
from core.db import make_engine

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_furniture = Table(
    "furniture",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("url", Text, nullable=False),
    Column("seller", String(255), nullable=False),
    Column("location", String(255), nullable=False),
    Column("offer_type", String(50), nullable=False, server_default="Sell"),
    Column("latitude", Float),
    Column("longitude", Float),
    Column("created_at", String(32), nullable=False),
)

_furniture_tags = Table(
    "furniture_tags",
    metadata,
    Column("furniture_id", Integer, ForeignKey("furniture.id", ondelete="CASCADE"), primary_key=True),
    Column("tag", String(100), primary_key=True),
    Column("position", Integer, nullable=False),  # preserves listing tag order
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CatalogStore:
    def __init__(self, db_url: str = DEFAULT_DB_URL) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def create_furniture(self, item: Furniture) -> int:
        """Insert a listing with its tags and return the assigned ID.

        Duplicate tags on one listing are collapsed (first occurrence wins).
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _furniture.insert().values(
                    title=item.title,
                    url=item.url,
                    seller=item.seller,
                    location=item.location,
                    offer_type=item.offer_type,
                    latitude=item.latitude,
                    longitude=item.longitude,
                    created_at=item.created_at or _now_iso(),
                )
            )
            furniture_id = result.inserted_primary_key[0]
            tags = list(dict.fromkeys(item.tags))
            if tags:
                conn.execute(
                    _furniture_tags.insert(),
                    [{"furniture_id": furniture_id, "tag": tag, "position": i} for i, tag in enumerate(tags)],
                )
            conn.commit()
            return furniture_id

    def count_furniture(self) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(_furniture)).scalar()
        return result or 0

    def list_furniture(self, tags: Optional[list[str]] = None, offer_type: Optional[str] = None) -> list[Furniture]:
        """Return listings matching the filters, ordered by ascending ID.

        tags       -- keep listings carrying AT LEAST ONE of these tags (overlap,
                      not containment). None or [] disables the filter.
        offer_type -- exact, case-sensitive match. None or "" disables the filter.
        """
        stmt = select(_furniture)
        if tags:
            tagged = select(_furniture_tags.c.furniture_id).where(_furniture_tags.c.tag.in_(tags))
            stmt = stmt.where(_furniture.c.id.in_(tagged))
        if offer_type:
            stmt = stmt.where(_furniture.c.offer_type == offer_type)
        stmt = stmt.order_by(_furniture.c.id)

        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
            tags_by_id = self._tags_for(conn, [r.id for r in rows])
        return [_row_to_furniture(r, tags_by_id.get(r.id, [])) for r in rows]

    def _tags_for(self, conn, ids: list[int]) -> dict[int, list[str]]:
        if not ids:
            return {}
        rows = conn.execute(
            select(_furniture_tags.c.furniture_id, _furniture_tags.c.tag)
            .where(_furniture_tags.c.furniture_id.in_(ids))
            .order_by(_furniture_tags.c.furniture_id, _furniture_tags.c.position)
        ).fetchall()
        result: dict[int, list[str]] = {}
        for furniture_id, tag in rows:
            result.setdefault(furniture_id, []).append(tag)
        return result

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_furniture(row, tags: list[str]) -> Furniture:
    return Furniture(
        id=row.id,
        title=row.title,
        url=row.url,
        seller=row.seller,
        location=row.location,
        tags=tags,
        offer_type=row.offer_type,
        latitude=row.latitude,
        longitude=row.longitude,
        created_at=row.created_at,
    )
