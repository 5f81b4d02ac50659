from fastapi import APIRouter, Depends, Request

from app.api.deps import CurrentUserDep, DbSessionDep, get_current_user
from app.core.audit import AuditAction, audit_entity_action
from app.schemas.user import FindUsersRequest, UserProfile, UserPublicProfile, UserUpdate
from app.schemas.wish import WishPublic
from app.services.serializers import serialize_public_profile, serialize_user_profile, serialize_wish
from app.services.users import UsersService


router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/me", response_model=UserProfile)
async def get_own(current_user: CurrentUserDep, db: DbSessionDep) -> UserProfile:
    user = await UsersService(db).find_by_id(current_user.id)
    return serialize_user_profile(user)


@router.patch("/me", response_model=UserProfile)
async def update_current_user(
    payload: UserUpdate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> UserProfile:
    user = await UsersService(db).update(current_user.id, payload)
    audit_entity_action(
        AuditAction.PROFILE_UPDATE,
        request,
        user.id,
        user.id,
        details={"fields": sorted(payload.model_dump(exclude_unset=True))},
    )
    return serialize_user_profile(user)


@router.get("/me/wishes", response_model=list[WishPublic])
async def get_own_wishes(current_user: CurrentUserDep, db: DbSessionDep) -> list[WishPublic]:
    wishes = await UsersService(db).get_own_wishes(current_user.id)
    return [serialize_wish(wish, viewer_id=current_user.id) for wish in wishes]


@router.get("/{username}", response_model=UserPublicProfile)
async def get_user_by_username(username: str, db: DbSessionDep) -> UserPublicProfile:
    user = await UsersService(db).find_one(username)
    return serialize_public_profile(user)


@router.get("/{username}/wishes", response_model=list[WishPublic])
async def get_wishes_by_username(
    username: str,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> list[WishPublic]:
    wishes = await UsersService(db).find_wishes(username)
    return [serialize_wish(wish, viewer_id=current_user.id) for wish in wishes]


@router.post("/find", response_model=list[UserProfile])
async def find_users(payload: FindUsersRequest, db: DbSessionDep) -> list[UserProfile]:
    users = await UsersService(db).find_many(payload.query)
    return [serialize_user_profile(user) for user in users]
