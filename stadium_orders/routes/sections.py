from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlalchemy.orm import Session

from stadium_orders.db.session import get_db
from stadium_orders.schemas.section import SectionRead, SectionUpdate
from stadium_orders.services import catalog
from stadium_orders.services.auth import staff_guard

router = APIRouter(prefix="/api/sections", tags=["Sections"])


@router.get("", response_model=List[SectionRead])
@router.get("/", response_model=List[SectionRead])
def list_sections(db: Session = Depends(get_db)):
    return catalog.list_sections(db)


@router.patch("/{section_id}", response_model=SectionRead)
def update_section(section_id: int, payload: SectionUpdate, db: Session = Depends(get_db), staff=Depends(staff_guard)):
    section = catalog.update_section(db, section_id, payload.is_delivery_available)
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section
