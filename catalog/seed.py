"""
catalog/seed.py -- Sample listings loaded into an empty catalog on startup.

seed_if_empty() is idempotent: it only writes when the furniture table has no
rows, so restarting the server never duplicates the sample data.
"""

import logging

from catalog.models import Furniture
from catalog.store import CatalogStore

logger = logging.getLogger("furnishare.catalog")

_IMG = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop"

SAMPLE_FURNITURE: list[Furniture] = [
    Furniture(
        title="Modern Leather Sofa",
        url=_IMG.format("1555041469-a586c61ea9bc"),
        tags=["Sofa", "Modern"],
        seller="Meblowa Galeria",
        location="Warszawa, Mazowieckie",
        offer_type="Sell",
        latitude=52.2297,
        longitude=21.0122,
    ),
    Furniture(
        title="Vintage Wooden Chair",
        url=_IMG.format("1567538096630-e0c55bd6374c"),
        tags=["Chair", "Vintage"],
        seller="Antykwariat Stary",
        location="Kraków, Małopolskie",
        offer_type="Giveaway",
        latitude=50.0647,
        longitude=19.9450,
    ),
    Furniture(
        title="Glass Coffee Table",
        url=_IMG.format("1533090481720-856c6e3c1fdc"),
        tags=["Table", "Modern"],
        seller="Nowoczesne Meblarstwo",
        location="Wrocław, Dolnośląskie",
        offer_type="Sell",
        latitude=51.1079,
        longitude=17.0385,
    ),
    Furniture(
        title="Queen Size Bed Frame",
        url=_IMG.format("1505693314120-0d443867891c"),
        tags=["Bed", "Modern"],
        seller="Sypialnia Plus",
        location="Poznań, Wielkopolskie",
        offer_type="Free",
        latitude=52.4064,
        longitude=16.9252,
    ),
    Furniture(
        title="Classic Wardrobe",
        url=_IMG.format("1586023492125-27b2c045efd7"),
        tags=["Wardrobe", "Classic"],
        seller="Szafa i Komoda",
        location="Gdańsk, Pomorskie",
        offer_type="Sell",
        latitude=54.3521,
        longitude=18.6466,
    ),
    Furniture(
        title="Office Desk",
        url=_IMG.format("1518455027359-f3f8164ba6bd"),
        tags=["Desk", "Office"],
        seller="Biuro Mebli",
        location="Łódź, Łódzkie",
        offer_type="Giveaway",
        latitude=51.7592,
        longitude=19.4559,
    ),
    Furniture(
        title="Kitchen Cabinet Set",
        url=_IMG.format("1556909114-f6e7ad7d3136"),
        tags=["Cabinet", "Kitchen"],
        seller="Kuchnia i Jadalnia",
        location="Katowice, Śląskie",
        offer_type="Sell",
        latitude=50.2613,
        longitude=19.0233,
    ),
    Furniture(
        title="Modern Pendant Light",
        url=_IMG.format("1507473885765-e6ed057f782c"),
        tags=["Lighting", "Modern"],
        seller="Oświetlenie Nowoczesne",
        location="Szczecin, Zachodniopomorskie",
        offer_type="Free",
        latitude=53.4285,
        longitude=14.5528,
    ),
    Furniture(
        title="Dining Room Table",
        url=_IMG.format("1615066390971-03e4e1c36ddf"),
        tags=["Table", "Dining"],
        seller="Jadalnia Premium",
        location="Lublin, Lubelskie",
        offer_type="Sell",
        latitude=51.2465,
        longitude=22.5684,
    ),
    Furniture(
        title="Accent Armchair",
        url=_IMG.format("1567538096630-e0c55bd6374c"),
        tags=["Chair", "Accent"],
        seller="Fotel i Kanapa",
        location="Białystok, Podlaskie",
        offer_type="Giveaway",
        latitude=53.1325,
        longitude=23.1688,
    ),
    Furniture(
        title="Bookshelf Unit",
        url=_IMG.format("1586023492125-27b2c045efd7"),
        tags=["Cabinet", "Storage"],
        seller="Regały i Szafki",
        location="Kielce, Świętokrzyskie",
        offer_type="Free",
        latitude=50.8661,
        longitude=20.6286,
    ),
    Furniture(
        title="Bedside Table",
        url=_IMG.format("1533090481720-856c6e3c1fdc"),
        tags=["Table", "Bedroom"],
        seller="Sypialnia Komplet",
        location="Rzeszów, Podkarpackie",
        offer_type="Sell",
        latitude=50.0409,
        longitude=21.9992,
    ),
]


def seed_if_empty(store: CatalogStore) -> int:
    """Insert SAMPLE_FURNITURE when the catalog is empty. Returns rows inserted.

    A failed insert is logged and skipped so one bad row does not block the
    rest of the sample set.
    """
    if store.count_furniture() > 0:
        return 0
    inserted = 0
    for item in SAMPLE_FURNITURE:
        try:
            store.create_furniture(item)
            inserted += 1
        except Exception:
            logger.exception("Failed to insert sample listing %r", item.title)
    logger.info("Sample furniture data inserted (%d rows)", inserted)
    return inserted
