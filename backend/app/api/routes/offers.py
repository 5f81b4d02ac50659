from fastapi import APIRouter, Depends, Request, status

from app.api.deps import CurrentUserDep, DbSessionDep, get_current_user
from app.core.audit import AuditAction, audit_entity_action
from app.schemas.offer import OfferCreate, OfferPublic
from app.services.offers import OffersService
from app.services.serializers import serialize_offer


router = APIRouter(
    prefix="/offers",
    tags=["offers"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=OfferPublic, status_code=status.HTTP_201_CREATED)
async def create_offer(
    payload: OfferCreate,
    request: Request,
    current_user: CurrentUserDep,
    db: DbSessionDep,
) -> OfferPublic:
    offer = await OffersService(db).create(payload, current_user)
    audit_entity_action(
        AuditAction.OFFER_CREATE,
        request,
        current_user.id,
        offer.id,
        details={"wish_id": offer.item_id, "amount": float(offer.amount)},
    )
    return serialize_offer(offer, viewer_id=current_user.id)


@router.get("", response_model=list[OfferPublic])
async def get_offers(current_user: CurrentUserDep, db: DbSessionDep) -> list[OfferPublic]:
    offers = await OffersService(db).get_offers()
    return [serialize_offer(offer, viewer_id=current_user.id) for offer in offers]


@router.get("/{offer_id}", response_model=OfferPublic)
async def get_offer(offer_id: int, current_user: CurrentUserDep, db: DbSessionDep) -> OfferPublic:
    offer = await OffersService(db).get_offer(offer_id)
    return serialize_offer(offer, viewer_id=current_user.id)
