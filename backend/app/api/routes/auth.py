from typing import TypedDict
import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from app.api.deps import DbSessionDep
from app.core.audit import audit_signin_failed, audit_signin_success, audit_signup
from app.core.config import settings
from app.core.rate_limit import check_rate_limit
from app.schemas.auth import SigninRequest, Token
from app.schemas.user import UserCreate, UserProfile
from app.services.auth import AuthService
from app.services.constants import AuthErrors
from app.services.serializers import serialize_user_profile
from app.services.users import UsersService


router = APIRouter(tags=["auth"])
logger = logging.getLogger("kupipodaridai")


class CookieOptions(TypedDict, total=False):
    samesite: str
    secure: bool


def _cookie_options() -> CookieOptions:
    """Lax plain-HTTP cookies locally, cross-site secure cookies everywhere else."""
    environment = (settings.environment or "local").lower()
    if environment == "local":
        return {"samesite": "lax", "secure": False}
    return {"samesite": "none", "secure": True}


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        "access_token",
        token,
        httponly=True,
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
        **_cookie_options(),
    )


@router.post("/signup", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: UserCreate,
    db: DbSessionDep,
    request: Request,
) -> UserProfile:
    check_rate_limit(request, max_requests=5, window_seconds=300, key_suffix="signup")

    user = await UsersService(db).create(payload)
    audit_signup(request, user.id, user.username)
    return serialize_user_profile(user)


@router.post("/signin", response_model=Token)
async def signin(
    payload: SigninRequest,
    response: Response,
    db: DbSessionDep,
    request: Request,
) -> Token:
    check_rate_limit(
        request,
        max_requests=settings.rate_limit_signin_requests,
        window_seconds=60,
        key_suffix="signin",
    )

    auth_service = AuthService(db)
    user = await auth_service.validate_password(payload.username, payload.password)
    if not user:
        audit_signin_failed(request, payload.username, "invalid_credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AuthErrors.INVALID_CREDENTIALS.value,
        )

    token = auth_service.sign_in(user.id)
    _set_auth_cookie(response, token)
    audit_signin_success(request, user.id, user.username)
    logger.info("Signin success user_id=%s", user.id)
    return Token(access_token=token)
