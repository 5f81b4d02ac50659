from sqlalchemy.exc import IntegrityError

from app.core.rate_limit import InMemoryRateLimiter
from app.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from app.services.users import conflict_from_integrity_error


def test_password_hash_verifies():
    """Хеш пароля проверяется."""
    hashed = get_password_hash("secret-pass")
    assert hashed != "secret-pass"
    assert verify_password("secret-pass", hashed)
    assert not verify_password("other-pass", hashed)


def test_access_token_subject():
    """Токен содержит id пользователя."""
    payload = decode_access_token(create_access_token("42"))
    assert payload is not None
    assert payload["sub"] == "42"
    assert payload["type"] == "access"


def test_tampered_token_rejected():
    """Подделанный токен отклоняется."""
    token = create_access_token("42")
    assert decode_access_token(token[:-2] + "xx") is None


def test_expired_token_rejected():
    """Просроченный токен отклоняется."""
    token = create_access_token("42", expires_delta_minutes=-1)
    assert decode_access_token(token) is None


def test_integrity_error_maps_to_column_conflict():
    """Нарушение уникальности даёт нужное сообщение 409."""
    email_error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
    username_error = IntegrityError("INSERT", {}, Exception('duplicate key value violates "ix_users_username"'))
    other_error = IntegrityError("INSERT", {}, Exception("constraint failed"))

    assert conflict_from_integrity_error(email_error).status_code == 409
    assert "почты" in conflict_from_integrity_error(email_error).detail
    assert "именем" in conflict_from_integrity_error(username_error).detail
    assert conflict_from_integrity_error(other_error).detail == "Пользователь с такими данными уже существует"


def test_rate_limiter_blocks_after_window_is_full():
    """Лимитер блокирует после заполнения окна."""
    limiter = InMemoryRateLimiter()
    assert limiter.is_allowed("k", max_requests=2, window_seconds=60) == (True, 0)
    assert limiter.is_allowed("k", max_requests=2, window_seconds=60) == (True, 0)
    allowed, retry_after = limiter.is_allowed("k", max_requests=2, window_seconds=60)
    assert allowed is False
    assert retry_after >= 1
    assert limiter.is_allowed("other", max_requests=2, window_seconds=60)[0] is True


def test_rate_limiter_reset():
    """Сброс ключа снимает ограничение."""
    limiter = InMemoryRateLimiter()
    limiter.is_allowed("k", max_requests=1, window_seconds=60)
    limiter.reset("k")
    assert limiter.is_allowed("k", max_requests=1, window_seconds=60)[0] is True
