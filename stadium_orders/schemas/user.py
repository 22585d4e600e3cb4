from typing import Optional

from pydantic import EmailStr, Field

from stadium_orders.models.user import RoleEnum
from stadium_orders.schemas.common import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserRead(CamelModel):
    id: int
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: RoleEnum


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
