"""
Тесты желаний: создание, ленты, редактирование, удаление и копирование.
"""
from fastapi.testclient import TestClient

from app.main import app


class TestWishCreate:
    """Тесты создания желаний."""

    def test_create_wish(self, client, make_user):
        """Создание желания."""
        user, headers = make_user("alice")

        response = client.post(
            "/wishes",
            json={
                "name": "Наушники",
                "link": "https://shop.example.com/items/headphones",
                "image": "https://shop.example.com/images/headphones.jpg",
                "price": 5000,
                "description": "Беспроводные",
            },
            headers=headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Наушники"
        assert data["price"] == 5000.0
        assert data["raised"] == 0.0
        assert data["copied"] == 0
        assert data["owner"]["id"] == user["id"]
        assert data["offers"] == []

    def test_price_is_rounded_to_cents(self, client, make_user, make_wish):
        """Цена округляется до копеек."""
        _, headers = make_user("alice")

        wish = make_wish(headers, price=99.999)

        assert wish["price"] == 100.0

    def test_create_rejects_non_positive_price(self, client, make_user):
        """Нулевая цена отклоняется."""
        _, headers = make_user("alice")

        response = client.post(
            "/wishes",
            json={
                "name": "Наушники",
                "link": "https://shop.example.com/items/headphones",
                "image": "https://shop.example.com/images/headphones.jpg",
                "price": 0,
                "description": "Беспроводные",
            },
            headers=headers,
        )

        assert response.status_code == 400

    def test_create_rejects_price_rounding_to_zero(self, client, make_user):
        """Цена, округляемая до нуля, отклоняется."""
        _, headers = make_user("alice")

        response = client.post(
            "/wishes",
            json={
                "name": "Наушники",
                "link": "https://shop.example.com/items/headphones",
                "image": "https://shop.example.com/images/headphones.jpg",
                "price": 0.001,
                "description": "Беспроводные",
            },
            headers=headers,
        )

        assert response.status_code == 400
        assert any(message.startswith("price:") for message in response.json()["detail"])

    def test_create_rejects_bad_link(self, client, make_user):
        """Некорректная ссылка отклоняется."""
        _, headers = make_user("alice")

        response = client.post(
            "/wishes",
            json={
                "name": "Наушники",
                "link": "not a url",
                "image": "https://shop.example.com/images/headphones.jpg",
                "price": 10,
                "description": "Беспроводные",
            },
            headers=headers,
        )

        assert response.status_code == 400

    def test_create_requires_auth(self):
        """Создание без авторизации."""
        response = TestClient(app).post("/wishes", json={"name": "x"})

        assert response.status_code == 401


class TestWishFeeds:
    """Тесты лент желаний."""

    def test_last_is_public_and_newest_first(self, client, make_user, make_wish):
        """Лента новых желаний доступна без входа."""
        _, headers = make_user("alice")
        make_wish(headers, name="Первое")
        make_wish(headers, name="Второе")

        response = TestClient(app).get("/wishes/last")

        assert response.status_code == 200
        assert [wish["name"] for wish in response.json()] == ["Второе", "Первое"]

    def test_last_is_limited_to_40(self, client, make_user, make_wish):
        """Лента новых желаний ограничена 40 записями."""
        _, headers = make_user("alice")
        for index in range(42):
            make_wish(headers, name=f"Желание {index}")

        response = client.get("/wishes/last")

        assert len(response.json()) == 40
        assert response.json()[0]["name"] == "Желание 41"

    def test_top_orders_by_copied(self, client, make_user, make_wish):
        """Популярные желания отсортированы по копированиям."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        _, carol_headers = make_user("carol")
        popular = make_wish(alice_headers, name="Популярное")
        make_wish(alice_headers, name="Обычное")
        client.post(f"/wishes/{popular['id']}/copy", headers=bob_headers)
        client.post(f"/wishes/{popular['id']}/copy", headers=carol_headers)

        response = TestClient(app).get("/wishes/top")

        assert response.status_code == 200
        top = response.json()[0]
        assert top["id"] == popular["id"]
        assert top["copied"] == 2


class TestWishRead:
    """Тесты чтения желаний."""

    def test_get_wish(self, client, make_user, make_wish):
        """Получение желания по id."""
        _, headers = make_user("alice")
        wish = make_wish(headers)

        response = client.get(f"/wishes/{wish['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["owner"]["username"] == "alice"

    def test_get_missing_wish(self, client, make_user):
        """Несуществующее желание."""
        _, headers = make_user("alice")

        response = client.get("/wishes/12345", headers=headers)

        assert response.status_code == 404

    def test_non_numeric_id(self, client, make_user):
        """Нечисловой id отклоняется."""
        _, headers = make_user("alice")

        response = client.get("/wishes/abc", headers=headers)

        assert response.status_code == 400


class TestWishUpdate:
    """Тесты обновления желаний."""

    def test_owner_can_update(self, client, make_user, make_wish):
        """Владелец обновляет желание."""
        _, headers = make_user("alice")
        wish = make_wish(headers)

        response = client.patch(
            f"/wishes/{wish['id']}",
            json={"name": "Новые наушники", "price": 4500},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Новые наушники"
        assert response.json()["price"] == 4500.0
        assert response.json()["description"] == wish["description"]

    def test_other_user_cannot_update(self, client, make_user, make_wish):
        """Чужое желание изменить нельзя."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        wish = make_wish(alice_headers)

        response = client.patch(f"/wishes/{wish['id']}", json={"name": "Моё"}, headers=bob_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Это не ваше желание"

    def test_price_locked_after_offers(self, client, make_user, make_wish):
        """Цену нельзя менять после начала сбора."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        wish = make_wish(alice_headers, price=1000)
        client.post("/offers", json={"itemId": wish["id"], "amount": 100}, headers=bob_headers)

        changed = client.patch(f"/wishes/{wish['id']}", json={"price": 2000}, headers=alice_headers)
        same = client.patch(
            f"/wishes/{wish['id']}",
            json={"price": 1000, "name": "Переименовано"},
            headers=alice_headers,
        )

        assert changed.status_code == 400
        assert changed.json()["detail"] == "Нельзя изменить цену: уже собраны средства"
        assert same.status_code == 200
        assert same.json()["name"] == "Переименовано"

    def test_update_missing_wish(self, client, make_user):
        """Обновление несуществующего желания."""
        _, headers = make_user("alice")

        response = client.patch("/wishes/999", json={"name": "x"}, headers=headers)

        assert response.status_code == 404


class TestWishRemove:
    """Тесты удаления желаний."""

    def test_owner_can_remove(self, client, make_user, make_wish):
        """Владелец удаляет желание вместе с заявками."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        wish = make_wish(alice_headers, price=1000)
        client.post("/offers", json={"itemId": wish["id"], "amount": 100}, headers=bob_headers)

        response = client.delete(f"/wishes/{wish['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["id"] == wish["id"]
        assert client.get(f"/wishes/{wish['id']}", headers=alice_headers).status_code == 404
        assert client.get("/offers", headers=bob_headers).json() == []

    def test_other_user_cannot_remove(self, client, make_user, make_wish):
        """Чужое желание удалить нельзя."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        wish = make_wish(alice_headers)

        response = client.delete(f"/wishes/{wish['id']}", headers=bob_headers)

        assert response.status_code == 400
        assert client.get(f"/wishes/{wish['id']}", headers=alice_headers).status_code == 200


class TestWishCopy:
    """Тесты копирования желаний."""

    def test_copy_creates_fresh_wish(self, client, make_user, make_wish):
        """Копия создаётся с нулевым сбором."""
        _, alice_headers = make_user("alice")
        bob, bob_headers = make_user("bob")
        _, carol_headers = make_user("carol")
        source = make_wish(alice_headers, price=1000)
        client.post("/offers", json={"itemId": source["id"], "amount": 300}, headers=carol_headers)

        response = client.post(f"/wishes/{source['id']}/copy", headers=bob_headers)

        assert response.status_code == 201
        copy = response.json()
        assert copy["id"] != source["id"]
        assert copy["owner"]["id"] == bob["id"]
        assert copy["name"] == source["name"]
        assert copy["price"] == 1000.0
        assert copy["raised"] == 0.0
        assert copy["copied"] == 0
        assert copy["offers"] == []

        refreshed = client.get(f"/wishes/{source['id']}", headers=alice_headers).json()
        assert refreshed["copied"] == 1
        assert refreshed["raised"] == 300.0

    def test_cannot_copy_own_wish(self, client, make_user, make_wish):
        """Своё желание скопировать нельзя."""
        _, headers = make_user("alice")
        wish = make_wish(headers)

        response = client.post(f"/wishes/{wish['id']}/copy", headers=headers)

        assert response.status_code == 400

    def test_cannot_copy_twice(self, client, make_user, make_wish):
        """Повторное копирование даёт конфликт."""
        _, alice_headers = make_user("alice")
        _, bob_headers = make_user("bob")
        wish = make_wish(alice_headers)

        first = client.post(f"/wishes/{wish['id']}/copy", headers=bob_headers)
        second = client.post(f"/wishes/{wish['id']}/copy", headers=bob_headers)

        assert first.status_code == 201
        assert second.status_code == 409
        refreshed = client.get(f"/wishes/{wish['id']}", headers=alice_headers).json()
        assert refreshed["copied"] == 1

    def test_copy_missing_wish(self, client, make_user):
        """Копирование несуществующего желания."""
        _, headers = make_user("alice")

        response = client.post("/wishes/999/copy", headers=headers)

        assert response.status_code == 404
