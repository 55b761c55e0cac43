"""
PawMart Backend — Order Schemas
=================================

What:  Body accepted by POST /orders.
Why:   `buyerEmail` is the only field the backend reads back
       (GET /myOrders/{email}); the rest is order detail for the UI.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class OrderCreate(BaseModel):
    buyerEmail: str = Field(min_length=1, description="Email of the buying user")
    buyerName: Optional[str] = None
    productId: Optional[str] = Field(
        default=None, description="Listing id; not checked against the listings collection"
    )
    productName: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    additionalNotes: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("buyerEmail")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v
