"""
PawMart Backend — Listing Schemas
===================================

What:  Bodies accepted by POST /listings and PATCH /updateItem/{id}.
How:   Only the fields the application queries on are typed; anything else
       the frontend sends (images, pickup notes, ...) is stored as-is.

Fields the backend depends on:
    email         owner; compared with the caller on owner-only routes
    name          matched by GET /search
    categorySlug  matched by GET /category-filtered-product/{category}
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ListingCreate(BaseModel):
    name: str = Field(min_length=1, description="Display name shown on product cards")
    email: str = Field(min_length=1, description="Owner email")
    categorySlug: Optional[str] = Field(
        default=None, description="Category classifier, e.g. 'pets' or 'pet-food'"
    )
    category: Optional[str] = Field(default=None, description="Human-readable category")
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ListingUpdate(BaseModel):
    """
    Partial update: every field is optional and only the fields present in
    the request body are `$set` on the stored document.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    categorySlug: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("name", "email")
    @classmethod
    def not_null_or_blank(cls, v: Optional[str]) -> str:
        # Omitting the field leaves it unchanged; null or blank would unset the owner or title
        if v is None or not v.strip():
            raise ValueError("must not be null or blank")
        return v
