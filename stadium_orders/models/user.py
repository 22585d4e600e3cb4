from sqlalchemy import Column, Integer, String, DateTime, Enum
from stadium_orders.core.timezone_utils import utcnow
from stadium_orders.db.session import Base
import enum


class RoleEnum(str, enum.Enum):
    customer = "customer"
    staff = "staff"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(150), nullable=True)
    last_name = Column(String(150), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.customer)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def display_name(self) -> str:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.email
