from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, HttpUrl, PlainSerializer
from pydantic.alias_generators import to_camel


# Validated as an http(s) URL, stored and returned as a plain string.
UrlStr = Annotated[HttpUrl, AfterValidator(str), PlainSerializer(str, return_type=str)]


def round_money(value: float | None) -> float | None:
    if value is None:
        return None
    rounded = round(value, 2)
    if rounded <= 0:
        raise ValueError("must be at least 0.01")
    return rounded


class ApiModel(BaseModel):
    """Base for response schemas: camelCase on the wire, built from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiInput(ApiModel):
    """Base for request bodies; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
