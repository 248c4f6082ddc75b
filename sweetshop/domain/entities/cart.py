"""Cart line item model."""
from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .product import Product


class LineItem(BaseModel):
    """A product snapshot and how many units of it are in the cart."""

    product: Product
    quantity: int = Field(..., gt=0, description="Units in the cart")

    class Config:
        """Pydantic config."""

        frozen = True

    @model_validator(mode="after")
    def check_stock(self) -> LineItem:
        """Quantity can never exceed the stock snapshot."""
        if self.quantity > self.product.stock:
            raise ValueError(
                f"quantity {self.quantity} exceeds stock {self.product.stock} "
                f"for product {self.product.id}"
            )
        return self

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def to_dict(self) -> dict:
        """Convert to the persisted ``{product, quantity}`` shape."""
        return {
            "product": self.product.model_dump(by_alias=True, mode="json"),
            "quantity": self.quantity,
        }
