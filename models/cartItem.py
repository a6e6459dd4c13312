from pydantic import BaseModel, Field, field_validator

from models.bilingual import BilingualText


class CartItemDTO(BaseModel):
    """
    A line item in the client cart.

    Identity is the composite key (id, size): the same product in two sizes
    is two entries. `price` is the unit price of the size at add-to-cart time
    and is not re-checked against the catalog later.
    """
    id: str
    name: BilingualText = Field(default_factory=BilingualText)
    price: float = Field(..., ge=0)
    image: str = ""
    quantity: int = Field(1, ge=1)
    size: str

    @field_validator("size", mode="before")
    @classmethod
    def size_to_label(cls, value):
        return "" if value is None else str(value)

    @field_validator("image", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def key(self) -> tuple[str, str]:
        return self.id, self.size

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartSummaryDTO(BaseModel):
    items: list[CartItemDTO]
    total: float
    item_count: int
