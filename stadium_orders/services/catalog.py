import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from stadium_orders.models.product import Product
from stadium_orders.models.section import Section

logger = logging.getLogger(__name__)


def list_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.id.asc()).all()


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def get_products_by_ids(db: Session, product_ids: Iterable[int]) -> dict:
    """Fetch every product in ``product_ids`` with a single query, keyed by id."""
    ids = set(product_ids)
    if not ids:
        return {}
    rows = db.query(Product).filter(Product.id.in_(ids)).all()
    return {p.id: p for p in rows}


def list_sections(db: Session) -> List[Section]:
    return db.query(Section).order_by(Section.id.asc()).all()


def get_section(db: Session, section_id: int) -> Optional[Section]:
    return db.query(Section).filter(Section.id == section_id).first()


def update_section(db: Session, section_id: int, is_delivery_available: bool) -> Optional[Section]:
    """Toggle delivery for a section. Orders already placed for it are untouched."""
    section = get_section(db, section_id)
    if section is None:
        return None
    try:
        section.is_delivery_available = bool(is_delivery_available)
        db.add(section)
        db.commit()
        db.refresh(section)
    except Exception:
        db.rollback()
        raise
    logger.info("section id=%s delivery_available=%s", section.id, section.is_delivery_available)
    return section
