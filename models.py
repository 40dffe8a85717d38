from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator


class Record(BaseModel):
    """Base for records read from and written to the JSON files.

    Keys are matched case-insensitively, so `Id`/`Name`/... files still load.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode='before')
    @classmethod
    def _lower_keys(cls, data):
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data


#product model
class Product(Record):
    id: StrictInt
    name: StrictStr
    category: StrictStr
    price: Decimal = Field(ge=0, allow_inf_nan=False)


#cart item model
class CartItem(Record):
    product: Product
    quantity: StrictInt = Field(default=1, ge=1)

    @property
    def line_total(self):
        return self.product.price * self.quantity


#receipt model
class Receipt(Record):
    date: datetime
    items: Tuple[CartItem, ...] = ()
    total: Decimal = Field(default=Decimal('0'), allow_inf_nan=False)


ALL_CATEGORIES = "All Categories"


#session state held by the controller
@dataclass(frozen=True)
class StoreState:
    """Everything the window shows: the catalog, the cart and the current filter.

    Handlers take a state and return the next one instead of mutating it.
    """
    catalog: dict = field(default_factory=dict)
    cart: tuple = ()
    category: str = ALL_CATEGORIES
    query: str = ""
    displayed: tuple = ()
