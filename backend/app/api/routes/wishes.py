from fastapi import APIRouter, Request, status

from app.api.deps import CurrentUserDep, DbSessionDep
from app.core.audit import AuditAction, audit_entity_action
from app.schemas.wish import WishCreate, WishPartial, WishPublic, WishUpdate
from app.services.serializers import serialize_wish, serialize_wish_partial
from app.services.wishes import WishesService


router = APIRouter(prefix="/wishes", tags=["wishes"])


@router.post("", response_model=WishPublic, status_code=status.HTTP_201_CREATED)
async def create_wish(
    payload: WishCreate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishPublic:
    wish = await WishesService(db).create(payload, current_user)
    audit_entity_action(AuditAction.WISH_CREATE, request, current_user.id, wish.id)
    return serialize_wish(wish, viewer_id=current_user.id)


@router.get("/last", response_model=list[WishPartial])
async def get_last_wishes(db: DbSessionDep) -> list[WishPartial]:
    wishes = await WishesService(db).get_last()
    return [serialize_wish_partial(wish) for wish in wishes]


@router.get("/top", response_model=list[WishPartial])
async def get_top_wishes(db: DbSessionDep) -> list[WishPartial]:
    wishes = await WishesService(db).get_top()
    return [serialize_wish_partial(wish) for wish in wishes]


@router.get("/{wish_id}", response_model=WishPublic)
async def get_wish(wish_id: int, current_user: CurrentUserDep, db: DbSessionDep) -> WishPublic:
    wish = await WishesService(db).find_by_id(wish_id)
    return serialize_wish(wish, viewer_id=current_user.id)


@router.patch("/{wish_id}", response_model=WishPublic)
async def update_wish(
    wish_id: int,
    payload: WishUpdate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishPublic:
    wish = await WishesService(db).update(wish_id, payload, current_user.id)
    audit_entity_action(
        AuditAction.WISH_UPDATE,
        request,
        current_user.id,
        wish.id,
        details={"fields": sorted(payload.model_dump(exclude_unset=True))},
    )
    return serialize_wish(wish, viewer_id=current_user.id)


@router.delete("/{wish_id}", response_model=WishPublic)
async def remove_wish(
    wish_id: int,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishPublic:
    wish = await WishesService(db).remove(wish_id, current_user.id)
    audit_entity_action(AuditAction.WISH_DELETE, request, current_user.id, wish_id)
    return serialize_wish(wish, viewer_id=current_user.id)


@router.post("/{wish_id}/copy", response_model=WishPublic, status_code=status.HTTP_201_CREATED)
async def copy_wish(
    wish_id: int,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishPublic:
    wish = await WishesService(db).copy(wish_id, current_user)
    audit_entity_action(
        AuditAction.WISH_COPY,
        request,
        current_user.id,
        wish.id,
        details={"source_id": wish_id},
    )
    return serialize_wish(wish, viewer_id=current_user.id)
