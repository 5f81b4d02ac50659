from datetime import datetime

from pydantic import Field

from app.schemas.common import ApiInput, ApiModel, UrlStr
from app.schemas.user import UserPublicProfile
from app.schemas.wish import WishPartial


class WishlistCreate(ApiInput):
    name: str = Field(min_length=1, max_length=250)
    image: UrlStr
    description: str = Field(default="", max_length=1500)
    items_id: list[int] = Field(default_factory=list)


class WishlistUpdate(ApiInput):
    name: str | None = Field(default=None, min_length=1, max_length=250)
    image: UrlStr | None = None
    description: str | None = Field(default=None, max_length=1500)
    items_id: list[int] | None = None


class WishlistPublic(ApiModel):
    id: int
    created_at: datetime
    updated_at: datetime
    name: str
    description: str
    image: str
    owner: UserPublicProfile
    items: list[WishPartial] = []
