import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from stadium_orders.models.product import Product
from stadium_orders.models.section import Section

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS = [
    {"name": "Stadium Burger", "description": "Classic beef burger with cheese and lettuce", "price": "8.50", "category": "food", "image_url": "https://placehold.co/600x400/orange/white?text=Burger"},
    {"name": "Hot Dog", "description": "Grilled jumbo hot dog with mustard and onions", "price": "6.00", "category": "food", "image_url": "https://placehold.co/600x400/red/white?text=Hot+Dog"},
    {"name": "Fries", "description": "Crispy salted fries", "price": "4.50", "category": "snack", "image_url": "https://placehold.co/600x400/yellow/black?text=Fries"},
    {"name": "Soda (Large)", "description": "Cola, Diet, or Lemon-Lime", "price": "5.00", "category": "drink", "image_url": "https://placehold.co/600x400/black/white?text=Soda"},
    {"name": "Beer", "description": "Premium lager 500ml", "price": "7.50", "category": "drink", "image_url": "https://placehold.co/600x400/brown/white?text=Beer"},
    {"name": "Nachos", "description": "Tortilla chips with cheese sauce and jalapeños", "price": "6.50", "category": "snack", "image_url": "https://placehold.co/600x400/orange/black?text=Nachos"},
]

DEFAULT_SECTIONS = [
    {"name": "Section A (Home)", "is_delivery_available": True},
    {"name": "Section B (Away)", "is_delivery_available": True},
    {"name": "Section C (VIP)", "is_delivery_available": True},
    # high traffic: pickup only
    {"name": "Section D (Family)", "is_delivery_available": False},
]


def seed_database(db: Session) -> bool:
    """Insert the default menu and sections when the catalog is empty.

    Returns True when rows were inserted.
    """
    if db.query(Product.id).first() is not None:
        return False
    logger.info("Seeding database...")
    try:
        for row in DEFAULT_PRODUCTS:
            db.add(Product(**{**row, "price": Decimal(row["price"])}, is_available=True))
        for row in DEFAULT_SECTIONS:
            db.add(Section(**row))
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Database seeded with %s products and %s sections", len(DEFAULT_PRODUCTS), len(DEFAULT_SECTIONS))
    return True
