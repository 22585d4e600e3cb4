from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stadium_orders.db.session import get_db
from stadium_orders.schemas.user import LoginRequest, Token, UserCreate, UserRead
from stadium_orders.services import auth as auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserRead, status_code=201)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    # self-registration always creates customers; staff accounts come from scripts/create_staff_user.py
    return auth_service.create_user(
        db,
        email=user_in.email,
        password=user_in.password,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        profile_image_url=user_in.profile_image_url,
    )


@router.post("/login", response_model=Token)
def login(form_data: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate_user(db, form_data.email, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = auth_service.create_access_token(data={"sub": user.email})
    return Token(access_token=access_token)


@router.get("/user", response_model=UserRead)
def read_current_user(current_user=Depends(auth_service.get_current_user)):
    return current_user
