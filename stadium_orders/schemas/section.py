from stadium_orders.schemas.common import CamelModel


class SectionRead(CamelModel):
    id: int
    name: str
    is_delivery_available: bool


class SectionUpdate(CamelModel):
    is_delivery_available: bool
