"""Read-model assembly: an order joined with its items, their products and its section.

Views are rebuilt from the database on every read; nothing is cached.
"""
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from stadium_orders.models.order import Order
from stadium_orders.schemas.order import KitchenBoard, OrderWithDetails
from stadium_orders.services.order_status import is_terminal


def assemble(order: Order) -> OrderWithDetails:
    return OrderWithDetails.model_validate(order)


def assemble_many(orders: List[Order]) -> List[OrderWithDetails]:
    return [assemble(o) for o in orders]


def _order_query(db: Session):
    # items (and their joined products) for all selected orders load in one
    # extra SELECT instead of one per order
    return db.query(Order).options(selectinload(Order.items))


def get_order(db: Session, order_id: int) -> Optional[OrderWithDetails]:
    """Return the assembled order, or None when it does not exist."""
    order = _order_query(db).filter(Order.id == order_id).first()
    if order is None:
        return None
    return assemble(order)


def list_order_rows(db: Session, status: Optional[str] = None) -> List[Order]:
    q = _order_query(db)
    if status:
        q = q.filter(Order.status == getattr(status, "value", status))
    return q.order_by(Order.created_at.desc(), Order.id.desc()).all()


def list_orders(db: Session, status: Optional[str] = None) -> List[OrderWithDetails]:
    """All orders newest first, optionally restricted to one status. Not paginated."""
    return assemble_many(list_order_rows(db, status=status))


def kitchen_board(db: Session) -> KitchenBoard:
    """Active orders and finished (completed/cancelled) orders, both newest first."""
    rows = list_order_rows(db)
    active = [o for o in rows if not is_terminal(o.status)]
    history = [o for o in rows if is_terminal(o.status)]
    return KitchenBoard(active=assemble_many(active), history=assemble_many(history))
