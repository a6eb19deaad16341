# app/models/catalog.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogItem(BaseModel):
    """
    A purchasable item as supplied by the catalog source.

    Read-only: created once when the catalog loads.
    JSON shape: {"name": str, "price": number, "imageClass": str}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    price: float = Field(ge=0)
    image_class: str = Field(default="", alias="imageClass")

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v
