"""Costume API contract models.

Wire names are camelCase (``itemId``, ``vendorTrusted``...) to match what the
browser front-end and earlier clients send and expect; Python code uses the
snake_case attribute names.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Quality = Literal["cheaper", "better", "normal"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CostumeItem(_CamelModel):
    """One normalized shopping-list entry. Every field is populated."""

    item_id: str
    category: str
    name: str
    brand: str = "Generic"
    price: float = Field(ge=0)
    vendor: str
    vendor_trusted: bool
    product_link: str
    image_url: str
    search_term: str | None = None


class CostumeRequest(_CamelModel):
    description: str
    budget: float | None = Field(default=None, gt=0)
    quality: Quality | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please describe your costume idea")
        return value.strip()

    @field_validator("budget", mode="before")
    @classmethod
    def _zero_budget_is_unset(cls, value: object) -> object:
        # Older clients send 0 for "no budget"; the configured default applies.
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return None
        return value


class CostumeResponse(_CamelModel):
    items: list[CostumeItem] = []
    total: float = Field(ge=0, default=0.0)


class ErrorResponse(BaseModel):
    error: str
