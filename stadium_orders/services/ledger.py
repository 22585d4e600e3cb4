"""Order ledger: creates orders with snapshotted prices and applies status changes.

``create_order`` is all-or-nothing. The order row and every item row are
added to one session and committed together; any failure rolls the session
back so no partial order is ever visible.
"""
import logging
import secrets
import string
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from stadium_orders.core.config import settings
from stadium_orders.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from stadium_orders.models.order import Order, OrderType
from stadium_orders.models.order_item import OrderItem
from stadium_orders.schemas.order import OrderCreate, OrderWithDetails
from stadium_orders.services import assembler, catalog
from stadium_orders.services.order_status import (
    OrderStatus,
    can_transition,
    next_status,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Uppercase letters and digits: 36 ** 6 ~ 2.18 billion six-character codes.
ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number(length: int = None) -> str:
    length = length or settings.ORDER_NUMBER_LENGTH
    return "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(length))


def _unique_order_number(db: Session) -> str:
    """Draw codes until one is unused; the UNIQUE column is the final guard."""
    for _ in range(settings.ORDER_NUMBER_MAX_ATTEMPTS):
        candidate = generate_order_number()
        taken = db.query(Order.id).filter(Order.order_number == candidate).first()
        if taken is None:
            return candidate
        logger.warning("order number collision on %s; retrying", candidate)
    raise RuntimeError("could not allocate a unique order number")


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_guest_name(guest_name: Optional[str], user=None) -> str:
    """Explicit name, else the signed-in user's name, else "Guest"."""
    if not _blank(guest_name):
        return guest_name.strip()
    if user is not None:
        return user.display_name
    return "Guest"


def _validate_delivery(db: Session, payload: OrderCreate) -> None:
    missing = [
        field for field, value in (
            ("sectionId", payload.section_id),
            ("row", payload.row),
            ("seat", payload.seat),
        )
        if _blank(value)
    ]
    if missing:
        raise ValidationError(
            f"Delivery orders require {', '.join(missing)}", field=missing[0]
        )
    section = catalog.get_section(db, payload.section_id)
    if section is None:
        raise NotFoundError(f"Section {payload.section_id} not found")
    if not section.is_delivery_available:
        raise ValidationError(f"Delivery is not available for {section.name}", field="sectionId")


def create_order(db: Session, payload: OrderCreate, user=None) -> OrderWithDetails:
    if not payload.items:
        raise ValidationError("Order must contain at least one item", field="items")

    is_delivery = OrderType(payload.type) is OrderType.delivery
    if is_delivery:
        _validate_delivery(db, payload)

    products = catalog.get_products_by_ids(db, (line.product_id for line in payload.items))
    subtotal = Decimal("0")
    lines = []
    for line in payload.items:
        product = products.get(line.product_id)
        if product is None:
            logger.warning("rejected order: product %s not found", line.product_id)
            raise NotFoundError(f"Product {line.product_id} not found")
        if not product.is_available:
            raise ValidationError(f"Product {product.name} is not available", field="items")
        price = Decimal(product.price)
        subtotal += price * line.quantity
        lines.append((product.id, line.quantity, price))

    delivery_fee = settings.DELIVERY_FEE.quantize(CENTS) if is_delivery else ZERO
    # round once, at storage time
    total = (subtotal + delivery_fee).quantize(CENTS, rounding=ROUND_HALF_UP)

    try:
        order = Order(
            user_id=getattr(user, "id", None),
            guest_name=resolve_guest_name(payload.guest_name, user),
            status=OrderStatus.pending.value,
            type=OrderType(payload.type).value,
            section_id=payload.section_id if is_delivery else None,
            row=payload.row.strip() if is_delivery else None,
            seat=payload.seat.strip() if is_delivery else None,
            delivery_fee=delivery_fee,
            total_amount=total,
            order_number=_unique_order_number(db),
        )
        for product_id, quantity, price in lines:
            order.items.append(
                OrderItem(product_id=product_id, quantity=quantity, price_at_time=price.quantize(CENTS))
            )
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("failed to persist order")
        raise

    logger.info(
        "created order id=%s number=%s type=%s items=%s total=%s",
        order.id, order.order_number, order.type, len(lines), total,
    )
    return assembler.get_order(db, order.id)


def _load(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")
    return order


def _set_status(db: Session, order: Order, target: OrderStatus) -> OrderWithDetails:
    previous = order.status
    try:
        order.status = target.value
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("order id=%s status %s -> %s", order.id, previous, target.value)
    return assembler.get_order(db, order.id)


def update_order_status(db: Session, order_id: int, status, strict: bool = None) -> OrderWithDetails:
    """Overwrite the order's status and return the refreshed view.

    With ``strict`` (default: ``STRICT_STATUS_TRANSITIONS``) a change outside
    the transition table raises InvalidTransitionError. Re-applying the
    current status is always accepted.
    """
    target = OrderStatus(getattr(status, "value", status))
    order = _load(db, order_id)
    if strict is None:
        strict = settings.STRICT_STATUS_TRANSITIONS
    if strict and order.status != target.value and not can_transition(order.status, target, order.type):
        raise InvalidTransitionError(
            f"Cannot move order {order.order_number} from {order.status} to {target.value}"
        )
    return _set_status(db, order, target)


def advance_order(db: Session, order_id: int) -> OrderWithDetails:
    """Apply the next kitchen step (pending -> preparing -> ready/delivering -> completed)."""
    order = _load(db, order_id)
    target = next_status(order.status, order.type)
    if target is None:
        raise InvalidTransitionError(f"Order {order.order_number} is already {order.status}")
    return _set_status(db, order, target)


def cancel_order(db: Session, order_id: int) -> OrderWithDetails:
    order = _load(db, order_id)
    if not can_transition(order.status, OrderStatus.cancelled, order.type):
        raise InvalidTransitionError(
            f"Order {order.order_number} can only be cancelled while pending"
        )
    return _set_status(db, order, OrderStatus.cancelled)
