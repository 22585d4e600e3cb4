from stadium_orders.models.product import ProductCategory
from stadium_orders.schemas.common import CamelModel, Money


class ProductRead(CamelModel):
    id: int
    name: str
    description: str
    price: Money
    category: ProductCategory
    image_url: str
    is_available: bool
