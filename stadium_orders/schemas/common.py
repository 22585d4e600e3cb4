from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Money travels as a two-decimal string ("17.00") so clients never see
# binary floating point artifacts.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: f"{Decimal(v):.2f}", return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON keys, ORM-readable."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )
