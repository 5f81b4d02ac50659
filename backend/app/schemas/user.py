from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.common import ApiInput, ApiModel, UrlStr


class UserPublicProfile(ApiModel):
    id: int
    username: str
    about: str
    avatar: str
    created_at: datetime
    updated_at: datetime


class UserProfile(UserPublicProfile):
    email: EmailStr


class UserCreate(ApiInput):
    username: str = Field(min_length=2, max_length=30)
    email: EmailStr
    password: str = Field(min_length=2, max_length=72)
    about: str | None = Field(default=None, min_length=2, max_length=200)
    avatar: UrlStr | None = None


class UserUpdate(ApiInput):
    username: str | None = Field(default=None, min_length=2, max_length=30)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=2, max_length=72)
    about: str | None = Field(default=None, min_length=2, max_length=200)
    avatar: UrlStr | None = None


class FindUsersRequest(ApiInput):
    query: str = ""
