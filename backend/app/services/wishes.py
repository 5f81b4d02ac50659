from decimal import Decimal
import logging

from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.models import Offer, User, Wish
from app.schemas.wish import WishCreate, WishUpdate
from app.services.constants import WishErrors, WishesLimits


logger = logging.getLogger("kupipodaridai.wishes")


def _wish_load_options():
    return [
        selectinload(Wish.owner),
        selectinload(Wish.offers).selectinload(Offer.user),
    ]


def to_money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


class WishesService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _select_wishes(self, stmt) -> list[Wish]:
        result = await self.db.execute(
            stmt.options(*_wish_load_options()).execution_options(populate_existing=True)
        )
        return list(result.scalars().unique())

    async def create(self, payload: WishCreate, owner: User) -> Wish:
        data = payload.model_dump()
        data["price"] = to_money(data["price"])
        wish = Wish(owner_id=owner.id, raised=Decimal("0"), copied=0, **data)
        self.db.add(wish)
        await self.db.commit()
        logger.info("Wish created id=%s owner_id=%s", wish.id, owner.id)
        return await self.find_by_id(wish.id)

    async def get_last(self) -> list[Wish]:
        return await self._select_wishes(
            select(Wish)
            .order_by(Wish.created_at.desc(), Wish.id.desc())
            .limit(WishesLimits.LATEST.value)
        )

    async def get_top(self) -> list[Wish]:
        return await self._select_wishes(
            select(Wish)
            .order_by(Wish.copied.desc(), Wish.id.desc())
            .limit(WishesLimits.MOST_COPIED.value)
        )

    async def find_by_id(self, wish_id: int) -> Wish:
        wishes = await self._select_wishes(select(Wish).where(Wish.id == wish_id))
        if not wishes:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WishErrors.NOT_FOUND.value)
        return wishes[0]

    async def get_many_by_ids(self, ids: list[int]) -> list[Wish]:
        wanted = set(ids or [])
        if not wanted:
            return []
        result = await self.db.execute(
            select(Wish).where(Wish.id.in_(wanted)).order_by(Wish.id)
        )
        wishes = list(result.scalars().unique())
        if len(wishes) != len(wanted):
            missing = sorted(wanted - {wish.id for wish in wishes})
            logger.info("Unknown wish ids requested: %s", missing)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WishErrors.NOT_FOUND.value)
        return wishes

    async def update(self, wish_id: int, payload: WishUpdate, user_id: int) -> Wish:
        wish = await self.find_by_id(wish_id)
        if wish.owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=WishErrors.NOT_OWNER.value)

        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "price" in update_data:
            new_price = to_money(update_data["price"])
            if new_price != wish.price and wish.raised > 0:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=WishErrors.CANNOT_CHANGE_PRICE.value,
                )
            update_data["price"] = new_price

        for key, value in update_data.items():
            setattr(wish, key, value)
        await self.db.commit()
        return await self.find_by_id(wish_id)

    async def remove(self, wish_id: int, user_id: int) -> Wish:
        wishes = await self._select_wishes(
            select(Wish)
            .options(selectinload(Wish.wishlists))
            .where(Wish.id == wish_id)
        )
        if not wishes:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WishErrors.NOT_FOUND.value)
        wish = wishes[0]
        if wish.owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=WishErrors.NOT_OWNER.value)

        await self.db.delete(wish)
        await self.db.commit()
        logger.info("Wish removed id=%s owner_id=%s", wish_id, user_id)
        return wish

    async def copy(self, wish_id: int, user: User) -> Wish:
        source = await self.find_by_id(wish_id)
        if source.owner_id == user.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=WishErrors.CANNOT_COPY_OWN.value)

        duplicate = await self.db.execute(
            select(Wish.id)
            .where(Wish.owner_id == user.id)
            .where(Wish.name == source.name)
            .where(Wish.link == source.link)
            .limit(1)
        )
        if duplicate.scalar_one_or_none() is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=WishErrors.ALREADY_COPIED.value)

        await self.db.execute(
            update(Wish).where(Wish.id == source.id).values(copied=Wish.copied + 1)
        )
        copy = Wish(
            owner_id=user.id,
            name=source.name,
            link=source.link,
            image=source.image,
            price=source.price,
            description=source.description,
            raised=Decimal("0"),
            copied=0,
        )
        self.db.add(copy)
        await self.db.commit()
        logger.info("Wish copied source_id=%s copy_id=%s user_id=%s", source.id, copy.id, user.id)
        return await self.find_by_id(copy.id)
