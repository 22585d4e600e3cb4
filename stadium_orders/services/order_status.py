"""Order status state machine.

The kitchen flow moves an order forward one step at a time::

    pending -> preparing -> ready      -> completed   (pickup)
                         -> delivering -> completed   (delivery)
    pending -> cancelled

``completed`` and ``cancelled`` are terminal. Which branch follows
``preparing`` depends on the order type.
"""
import enum
from typing import Optional


class OrderStatus(str, enum.Enum):
    pending = "pending"
    preparing = "preparing"
    ready = "ready"
    delivering = "delivering"
    completed = "completed"
    cancelled = "cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.completed, OrderStatus.cancelled})
ACTIVE_STATUSES = frozenset(s for s in OrderStatus if s not in TERMINAL_STATUSES)

# status -> {order type (None = any) -> allowed targets}
_TRANSITIONS = {
    OrderStatus.pending: {None: {OrderStatus.preparing, OrderStatus.cancelled}},
    OrderStatus.preparing: {
        "pickup": {OrderStatus.ready},
        "delivery": {OrderStatus.delivering},
    },
    OrderStatus.ready: {None: {OrderStatus.completed}},
    OrderStatus.delivering: {None: {OrderStatus.completed}},
    OrderStatus.completed: {None: set()},
    OrderStatus.cancelled: {None: set()},
}


def _coerce(status) -> OrderStatus:
    return status if isinstance(status, OrderStatus) else OrderStatus(str(status))


def _type_value(order_type) -> str:
    return getattr(order_type, "value", order_type)


def allowed_transitions(status, order_type) -> frozenset:
    """Return the statuses an order of ``order_type`` may move to from ``status``."""
    by_type = _TRANSITIONS[_coerce(status)]
    if None in by_type:
        return frozenset(by_type[None])
    return frozenset(by_type.get(_type_value(order_type), set()))


def can_transition(current, target, order_type) -> bool:
    return _coerce(target) in allowed_transitions(current, order_type)


def is_terminal(status) -> bool:
    return _coerce(status) in TERMINAL_STATUSES


def next_status(current, order_type) -> Optional[OrderStatus]:
    """Forward step offered on the kitchen display, or None for terminal orders.

    Cancellation is never the forward step.
    """
    current = _coerce(current)
    if current is OrderStatus.pending:
        return OrderStatus.preparing
    targets = allowed_transitions(current, order_type) - {OrderStatus.cancelled}
    if not targets:
        return None
    (target,) = targets
    return target
