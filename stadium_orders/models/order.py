import enum

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from stadium_orders.core.timezone_utils import utcnow
from stadium_orders.db.session import Base
# referenced by the relationships below
from stadium_orders.models.order_item import OrderItem  # noqa: F401
from stadium_orders.models.section import Section  # noqa: F401
from stadium_orders.models.user import User  # noqa: F401


class OrderType(str, enum.Enum):
    pickup = "pickup"
    delivery = "delivery"


class Order(Base):
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=True)
    guest_name = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default='pending', index=True)
    type = Column(String(20), nullable=False)  # 'pickup' or 'delivery'
    # seat coordinates: all set for delivery orders, all NULL for pickup
    section_id = Column(Integer, ForeignKey('sections.id'), nullable=True)
    row = Column(String(20), nullable=True)
    seat = Column(String(20), nullable=True)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)
    # python-side default keeps sub-second precision for newest-first listings
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    order_number = Column(String(16), nullable=False, unique=True, index=True)

    items = relationship('OrderItem', back_populates='order', order_by='OrderItem.id')
    section = relationship('Section', lazy='joined', viewonly=True)
