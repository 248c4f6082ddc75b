"""Product entity model."""
from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from sweetshop.domain.value_objects import ProductCategory


class Product(BaseModel):
    """Catalog product snapshot.

    The cart never fetches stock itself: ``stock`` is whatever the caller
    saw when the product was rendered.
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Display name")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    stock: int = Field(..., ge=0, description="Units available")
    description: str = Field("", description="Long description")
    ingredients: str = Field("", description="Ingredient list")
    category: ProductCategory | str | None = Field(None, description="Catalog category")
    images: list[str] = Field(default_factory=list, description="Image URLs")
    is_active: bool = Field(True, description="Visible in the catalog")
    is_featured: bool = Field(False, description="Shown on the home page")
    rating: float = Field(0, ge=0, description="Average review rating")
    review_count: int = Field(0, ge=0, description="Number of reviews")
    weight: str = Field("", description="Net weight label")
    allergens: str | None = Field(None, description="Allergen notes")
    nutritional_info: str | None = Field(None, description="Nutritional information")
    created_at: str | None = Field(None, description="Creation timestamp")
    updated_at: str | None = Field(None, description="Last update timestamp")

    class Config:
        """Pydantic config."""

        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        frozen = True