from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from stadium_orders.core.timezone_utils import to_venue_time
from stadium_orders.models.order import OrderType
from stadium_orders.schemas.common import CamelModel, Money
from stadium_orders.schemas.product import ProductRead
from stadium_orders.schemas.section import SectionRead
from stadium_orders.services.order_status import OrderStatus


class CartLine(CamelModel):
    product_id: int
    quantity: int = Field(gt=0)


class OrderCreate(CamelModel):
    # emptiness is checked by the ledger so it reports a domain message
    items: List[CartLine]
    type: OrderType
    section_id: Optional[int] = None
    row: Optional[str] = None
    seat: Optional[str] = None
    guest_name: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderItemRead(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price_at_time: Money
    product: ProductRead


class OrderWithDetails(CamelModel):
    """An order joined with its line items (and their products) and its section."""

    id: int
    user_id: Optional[int] = None
    guest_name: Optional[str] = None
    status: OrderStatus
    type: OrderType
    section_id: Optional[int] = None
    row: Optional[str] = None
    seat: Optional[str] = None
    delivery_fee: Money
    total_amount: Money
    created_at: datetime
    order_number: str
    items: List[OrderItemRead] = []
    section: Optional[SectionRead] = None

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return to_venue_time(value).isoformat()


class KitchenBoard(CamelModel):
    active: List[OrderWithDetails] = []
    history: List[OrderWithDetails] = []
