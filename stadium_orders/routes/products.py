from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlalchemy.orm import Session

from stadium_orders.db.session import get_db
from stadium_orders.schemas.product import ProductRead
from stadium_orders.services import catalog

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductRead])
@router.get("/", response_model=List[ProductRead])
def list_products(db: Session = Depends(get_db)):
    return catalog.list_products(db)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = catalog.get_product(db, product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p
