"""
Тесты схем: ссылки хранятся строками и сериализуются без предупреждений.
"""
import warnings

import pytest
from pydantic import ValidationError

from app.schemas.user import UserUpdate
from app.schemas.wish import WishCreate


def test_url_fields_dump_as_plain_strings():
    """Ссылки в схеме остаются строками при model_dump."""
    payload = WishCreate(
        name="Наушники",
        link="https://shop.example.com/items/headphones",
        image="https://shop.example.com/images/headphones.jpg",
        price=5000,
        description="Беспроводные",
    )

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        dumped = payload.model_dump()
        as_json = payload.model_dump_json()

    assert isinstance(dumped["link"], str)
    assert dumped["link"] == "https://shop.example.com/items/headphones"
    assert "https://shop.example.com/images/headphones.jpg" in as_json


def test_optional_url_dump_without_warnings():
    """Частичное обновление с аватаром сериализуется без предупреждений."""
    payload = UserUpdate(avatar="https://cdn.example.com/a.png")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        dumped = payload.model_dump(exclude_unset=True)

    assert dumped == {"avatar": "https://cdn.example.com/a.png"}


def test_non_http_url_rejected():
    """Ссылка без http(s) не проходит валидацию."""
    with pytest.raises(ValidationError):
        WishCreate(
            name="Наушники",
            link="ftp://shop.example.com/items/headphones",
            image="https://shop.example.com/images/headphones.jpg",
            price=5000,
            description="Беспроводные",
        )
