import logging

from fastapi import HTTPException, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.models import Offer, User, Wish
from app.schemas.offer import OfferCreate
from app.services.constants import OfferErrors, WishErrors
from app.services.wishes import to_money


logger = logging.getLogger("kupipodaridai.offers")


class OffersService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, payload: OfferCreate, user: User) -> Offer:
        wish = await self.db.get(Wish, payload.item_id, populate_existing=True)
        if not wish:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WishErrors.NOT_FOUND.value)

        if wish.owner_id == user.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=OfferErrors.OWN_WISH.value)

        remaining = wish.price - wish.raised
        if remaining <= 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=OfferErrors.ALREADY_RAISED.value)

        amount = to_money(payload.amount)
        if amount > remaining:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{OfferErrors.AMOUNT_TOO_LARGE.value}: {remaining}",
            )

        # Guarded increment in whole cents: a concurrent offer that already filled the gap makes this a no-op.
        raised = await self.db.execute(
            update(Wish)
            .where(
                Wish.id == wish.id,
                func.round((Wish.raised + amount) * 100) <= func.round(Wish.price * 100),
            )
            .values(raised=Wish.raised + amount)
            .execution_options(synchronize_session=False)
        )
        if not raised.rowcount:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=OfferErrors.AMOUNT_TOO_LARGE.value)

        offer = Offer(user_id=user.id, item_id=wish.id, amount=amount, hidden=payload.hidden)
        self.db.add(offer)
        await self.db.commit()
        logger.info(
            "Offer created id=%s wish_id=%s user_id=%s amount=%s price=%s",
            offer.id,
            wish.id,
            user.id,
            amount,
            wish.price,
        )
        return await self.get_offer(offer.id)

    async def get_offers(self) -> list[Offer]:
        result = await self.db.execute(
            select(Offer)
            .options(selectinload(Offer.user), selectinload(Offer.item))
            .order_by(Offer.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().unique())

    async def get_offer(self, offer_id: int) -> Offer:
        result = await self.db.execute(
            select(Offer)
            .options(selectinload(Offer.user), selectinload(Offer.item))
            .where(Offer.id == offer_id)
            .execution_options(populate_existing=True)
        )
        offer = result.scalar_one_or_none()
        if not offer:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=OfferErrors.NOT_FOUND.value)
        return offer
