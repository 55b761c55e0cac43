"""Body accepted by POST /subscription."""

from pydantic import BaseModel, Field, field_validator


class SubscriptionCreate(BaseModel):
    email: str = Field(min_length=1)

    model_config = {"extra": "allow"}

    @field_validator("email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v
