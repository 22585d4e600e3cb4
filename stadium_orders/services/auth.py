from datetime import datetime, timedelta, timezone
import logging
import uuid
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from stadium_orders.core.config import settings
from stadium_orders.core.errors import ValidationError
from stadium_orders.db.session import get_db
from stadium_orders.models.user import RoleEnum, User

logger = logging.getLogger(__name__)

# Use a scheme without the 72-byte password limit as the preferred hashing algorithm.
# Keep bcrypt in the list so existing bcrypt hashes can still be verified.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")
# auto_error=False: a missing token means guest checkout, not a 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str = None,
    last_name: str = None,
    profile_image_url: str = None,
    role: RoleEnum = RoleEnum.customer,
) -> User:
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("Email already registered", field="email")
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        profile_image_url=profile_image_url,
        role=RoleEnum(role),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise
    logger.info("created user id=%s role=%s", user.id, user.role.value)
    return user


def authenticate_user(db: Session, email: str, password: str):
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "jti": str(uuid.uuid4()), "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _user_from_token(token: str, db: Session) -> Optional[User]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    email = payload.get("sub")
    if email is None or payload.get("type") != "access":
        return None
    return db.query(User).filter(User.email == email).first()


def get_optional_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Optional[User]:
    """Current user when a valid bearer token is sent, otherwise None (guest)."""
    if not token:
        return None
    return _user_from_token(token, db)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_roles(*roles: str):
    """Return a dependency that ensures the current user has one of the provided roles.

    Usage in a route:
        @router.get('/kitchen/orders')
        def board(current_user=Depends(require_roles('staff', 'admin'))):
            ...
    """
    def role_checker(current_user=Depends(get_current_user)):
        user_role = getattr(current_user, 'role', None)
        role_value = user_role.value if hasattr(user_role, 'value') else str(user_role)
        if role_value not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient privileges",
            )
        return current_user

    return role_checker


_staff_checker = require_roles(RoleEnum.staff.value, RoleEnum.admin.value)


def staff_guard(user: Optional[User] = Depends(get_optional_user)):
    """Gate staff operations behind the staff/admin role when STAFF_AUTH_REQUIRED is on."""
    if not settings.STAFF_AUTH_REQUIRED:
        return user
    return _staff_checker(current_user=get_current_user(user))
