from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
from sqlalchemy.orm import Session

from stadium_orders.core.errors import NotFoundError, ValidationError
from stadium_orders.db.session import get_db
from stadium_orders.schemas.order import OrderCreate, OrderStatusUpdate, OrderWithDetails
from stadium_orders.services import assembler, ledger
from stadium_orders.services.auth import get_optional_user, staff_guard

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=OrderWithDetails, status_code=201)
@router.post("/", response_model=OrderWithDetails, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db), user=Depends(get_optional_user)):
    try:
        return ledger.create_order(db, payload, user=user)
    except NotFoundError as e:
        # an unknown product or section is a bad cart, not a missing resource
        raise ValidationError(e.message, field=e.field) from e


@router.get("", response_model=List[OrderWithDetails])
@router.get("/", response_model=List[OrderWithDetails])
def list_orders(status: Optional[str] = None, db: Session = Depends(get_db)):
    return assembler.list_orders(db, status=status)


@router.get("/{order_id}", response_model=OrderWithDetails)
def get_order(order_id: int, db: Session = Depends(get_db)):
    order = assembler.get_order(db, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=OrderWithDetails)
def update_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db), staff=Depends(staff_guard)):
    return ledger.update_order_status(db, order_id, payload.status)
