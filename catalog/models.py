"""
catalog/models.py -- Domain dataclass for the furniture catalog.

Pure data container with zero logic. Filtering and persistence live in
catalog/store.py.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Furniture:
    """One listing in the catalog.

    offer_type is free text in the schema; the sample data uses "Sell",
    "Giveaway" and "Free". id is None before the record is written.
    """

    title: str
    url: str
    seller: str
    location: str
    tags: list[str] = field(default_factory=list)
    offer_type: str = "Sell"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
