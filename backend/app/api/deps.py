from typing import Annotated
import logging

from fastapi import Cookie, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_access_token
from app.db.session import get_db
from app.models.models import User
from app.services.constants import AuthErrors


DbSessionDep = Annotated[AsyncSession, Depends(get_db)]
logger = logging.getLogger("kupipodaridai.auth")


def _extract_token(request: Request, cookie_token: str | None) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.removeprefix("Bearer ").strip() or None
    return cookie_token


async def get_current_user(
    request: Request,
    db: DbSessionDep,
    access_token: str | None = Cookie(default=None, alias="access_token"),
) -> User:
    """JWT guard: bearer header first, then the ``access_token`` cookie."""
    token = _extract_token(request, access_token)
    if not token:
        logger.info(
            "Auth token missing path=%s ip=%s",
            request.url.path,
            request.client.host if request.client else None,
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthErrors.NOT_AUTHENTICATED.value)

    payload = decode_access_token(token)
    if not payload or "sub" not in payload:
        logger.info("Auth token invalid path=%s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthErrors.INVALID_TOKEN.value)

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        logger.info("Auth token subject invalid path=%s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthErrors.INVALID_TOKEN.value) from None

    user = await db.get(User, user_id)
    if not user:
        logger.info("Auth user missing path=%s user_id=%s", request.url.path, user_id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthErrors.INVALID_TOKEN.value)

    logger.debug("get_current_user: authenticated user_id=%s", user.id)
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
