import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import CurrentUserDep, DbSessionDep, get_current_user
from app.core.audit import AuditAction, audit_entity_action
from app.schemas.wishlist import WishlistCreate, WishlistPublic, WishlistUpdate
from app.services.serializers import serialize_wishlist
from app.services.wishlists import WishlistsService


logger = logging.getLogger("kupipodaridai.wishlists")

# Frontend clients call "/wishlistlists"; "/wishlists" is served as an alias.
WISHLISTS_PREFIX = "/wishlistlists"
WISHLISTS_ALIAS_PREFIX = "/wishlists"

router = APIRouter(tags=["wishlists"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[WishlistPublic])
async def get_wishlists(db: DbSessionDep) -> list[WishlistPublic]:
    wishlists = await WishlistsService(db).get_wishlists()
    return [serialize_wishlist(wishlist) for wishlist in wishlists]


@router.post("", response_model=WishlistPublic, status_code=status.HTTP_201_CREATED)
async def create_wishlist(
    payload: WishlistCreate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishlistPublic:
    wishlist = await WishlistsService(db).create(payload, current_user)
    audit_entity_action(
        AuditAction.WISHLIST_CREATE,
        request,
        current_user.id,
        wishlist.id,
        details={"items": [item.id for item in wishlist.items]},
    )
    return serialize_wishlist(wishlist)


@router.get("/{wishlist_id}", response_model=WishlistPublic)
async def get_wishlist(wishlist_id: int, db: DbSessionDep) -> WishlistPublic:
    wishlist = await WishlistsService(db).find_by_id(wishlist_id)
    return serialize_wishlist(wishlist)


@router.patch("/{wishlist_id}", response_model=WishlistPublic)
async def update_wishlist(
    wishlist_id: int,
    payload: WishlistUpdate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishlistPublic:
    wishlist = await WishlistsService(db).update(wishlist_id, payload, current_user.id)
    audit_entity_action(
        AuditAction.WISHLIST_UPDATE,
        request,
        current_user.id,
        wishlist.id,
        details={"fields": sorted(payload.model_dump(exclude_unset=True))},
    )
    return serialize_wishlist(wishlist)


@router.delete("/{wishlist_id}", response_model=WishlistPublic)
async def remove_wishlist(
    wishlist_id: int,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> WishlistPublic:
    wishlist = await WishlistsService(db).remove(wishlist_id, current_user.id)
    audit_entity_action(AuditAction.WISHLIST_DELETE, request, current_user.id, wishlist_id)
    return serialize_wishlist(wishlist)
