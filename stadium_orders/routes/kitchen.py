from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stadium_orders.db.session import get_db
from stadium_orders.schemas.order import KitchenBoard, OrderWithDetails
from stadium_orders.services import assembler, ledger
from stadium_orders.services.auth import staff_guard

# Staff display: every route here is behind staff_guard
router = APIRouter(prefix="/api/kitchen", tags=["Kitchen"], dependencies=[Depends(staff_guard)])


@router.get("/orders", response_model=KitchenBoard)
def board(db: Session = Depends(get_db)):
    """Active orders (pending through ready/delivering) and finished ones."""
    return assembler.kitchen_board(db)


@router.post("/orders/{order_id}/advance", response_model=OrderWithDetails)
def advance(order_id: int, db: Session = Depends(get_db)):
    return ledger.advance_order(db, order_id)


@router.post("/orders/{order_id}/cancel", response_model=OrderWithDetails)
def cancel(order_id: int, db: Session = Depends(get_db)):
    return ledger.cancel_order(db, order_id)
