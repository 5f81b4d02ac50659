from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import ApiInput, ApiModel, round_money
from app.schemas.user import UserPublicProfile
from app.schemas.wish import WishPartial


class OfferCreate(ApiInput):
    item_id: int = Field(gt=0)
    amount: float = Field(gt=0)
    hidden: bool = False

    @field_validator("amount")
    @classmethod
    def _round_amount(cls, value: float) -> float:
        return round_money(value)


class OfferPublic(ApiModel):
    id: int
    created_at: datetime
    updated_at: datetime
    amount: float
    hidden: bool
    item: WishPartial
    user: UserPublicProfile | None = None
