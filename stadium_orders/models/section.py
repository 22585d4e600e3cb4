from sqlalchemy import Column, Integer, String, Boolean
from stadium_orders.db.session import Base


class Section(Base):
    """A physical seating zone that staff can deliver to."""

    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # toggled by staff; does not affect orders already placed for the section
    is_delivery_available = Column(Boolean, nullable=False, default=True)
