from pydantic import BaseModel, Field

from app.schemas.common import ApiInput


class Token(BaseModel):
    access_token: str


class SigninRequest(ApiInput):
    username: str = Field(min_length=1, max_length=30)
    password: str = Field(min_length=1, max_length=72)
