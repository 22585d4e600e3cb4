import enum

from sqlalchemy import Column, Integer, String, Boolean, Text, Numeric
from stadium_orders.db.session import Base


class ProductCategory(str, enum.Enum):
    food = "food"
    drink = "drink"
    snack = "snack"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    # current menu price; orders snapshot it into order_items.price_at_time
    price = Column(Numeric(10, 2), nullable=False)
    # stored as string to avoid ENUM mismatches across databases
    category = Column(String(20), nullable=False)
    image_url = Column(String(500), nullable=False, default="")
    is_available = Column(Boolean, nullable=False, default=True)
