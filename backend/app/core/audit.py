"""Audit logging for account events and ownership-protected mutations."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from fastapi import Request


logger = logging.getLogger("kupipodaridai.audit")

_SENSITIVE_KEYS = {"password", "token", "access_token", "secret", "authorization"}


class AuditAction(str, Enum):
    SIGNUP = "signup"
    SIGNIN = "signin"
    SIGNIN_FAILED = "signin_failed"
    PROFILE_UPDATE = "profile_update"

    WISH_CREATE = "wish_create"
    WISH_UPDATE = "wish_update"
    WISH_DELETE = "wish_delete"
    WISH_COPY = "wish_copy"

    OFFER_CREATE = "offer_create"

    WISHLIST_CREATE = "wishlist_create"
    WISHLIST_UPDATE = "wishlist_update"
    WISHLIST_DELETE = "wishlist_delete"


def audit_log(
    action: AuditAction,
    request: Request | None = None,
    user_id: int | str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """
    Log an audit event.

    Args:
        action: The action being performed
        request: FastAPI request object (for IP, user agent)
        user_id: ID of the user performing the action
        details: Additional details about the action
        success: Whether the action was successful
    """
    event: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action.value,
        "success": success,
    }

    if user_id is not None:
        event["user_id"] = str(user_id)

    if request:
        client_host = request.client.host if request.client else None
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            client_host = forwarded.split(",")[0].strip()
        event["ip"] = client_host
        event["user_agent"] = request.headers.get("User-Agent", "")[:200]
        event["request_id"] = request.headers.get("X-Request-Id", "")

    if details:
        event["details"] = {
            key: "***REDACTED***" if key in _SENSITIVE_KEYS else value
            for key, value in details.items()
        }

    if success:
        logger.info("AUDIT: %s", event)
    else:
        logger.warning("AUDIT: %s", event)


def audit_signup(request: Request, user_id: int, username: str) -> None:
    audit_log(AuditAction.SIGNUP, request=request, user_id=user_id, details={"username": username})


def audit_signin_success(request: Request, user_id: int, username: str) -> None:
    audit_log(AuditAction.SIGNIN, request=request, user_id=user_id, details={"username": username})


def audit_signin_failed(request: Request, username: str, reason: str) -> None:
    audit_log(
        AuditAction.SIGNIN_FAILED,
        request=request,
        details={"username": username, "reason": reason},
        success=False,
    )


def audit_entity_action(
    action: AuditAction,
    request: Request,
    user_id: int,
    entity_id: int,
    details: dict[str, Any] | None = None,
) -> None:
    """Log a create/update/delete on a wish, offer or wishlist."""
    event_details: dict[str, Any] = {"entity_id": entity_id}
    if details:
        event_details.update(details)
    audit_log(action, request=request, user_id=user_id, details=event_details)
