from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import ApiInput, ApiModel, UrlStr, round_money
from app.schemas.user import UserPublicProfile


class WishCreate(ApiInput):
    name: str = Field(min_length=1, max_length=250)
    link: UrlStr
    image: UrlStr
    price: float = Field(gt=0)
    description: str = Field(min_length=1, max_length=1024)

    @field_validator("price")
    @classmethod
    def _round_price(cls, value: float) -> float:
        return round_money(value)


class WishUpdate(ApiInput):
    name: str | None = Field(default=None, min_length=1, max_length=250)
    link: UrlStr | None = None
    image: UrlStr | None = None
    price: float | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, min_length=1, max_length=1024)

    @field_validator("price")
    @classmethod
    def _round_price(cls, value: float | None) -> float | None:
        return round_money(value)


class WishPartial(ApiModel):
    id: int
    created_at: datetime
    updated_at: datetime
    name: str
    link: str
    image: str
    price: float
    raised: float
    copied: int
    description: str


class WishOffer(ApiModel):
    """An offer as shown on a wish card; ``user`` is None for hidden offers."""

    id: int
    created_at: datetime
    amount: float
    hidden: bool
    user: UserPublicProfile | None = None


class WishPublic(WishPartial):
    owner: UserPublicProfile
    offers: list[WishOffer] = []
