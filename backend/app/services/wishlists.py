import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.models import User, Wishlist
from app.schemas.wishlist import WishlistCreate, WishlistUpdate
from app.services.constants import WishListsErrors
from app.services.wishes import WishesService


logger = logging.getLogger("kupipodaridai.wishlists")


class WishlistsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.wishes = WishesService(db)

    def _select(self):
        return (
            select(Wishlist)
            .options(selectinload(Wishlist.owner), selectinload(Wishlist.items))
            .execution_options(populate_existing=True)
        )

    async def create(self, payload: WishlistCreate, user: User) -> Wishlist:
        items = await self.wishes.get_many_by_ids(payload.items_id)
        wishlist = Wishlist(
            name=payload.name,
            image=payload.image,
            description=payload.description,
            owner_id=user.id,
            items=items,
        )
        self.db.add(wishlist)
        await self.db.commit()
        logger.info("Wishlist created id=%s owner_id=%s items=%d", wishlist.id, user.id, len(items))
        return await self.find_by_id(wishlist.id)

    async def get_wishlists(self) -> list[Wishlist]:
        result = await self.db.execute(self._select().order_by(Wishlist.id))
        return list(result.scalars().unique())

    async def find_by_id(self, wishlist_id: int) -> Wishlist:
        result = await self.db.execute(self._select().where(Wishlist.id == wishlist_id))
        wishlist = result.scalar_one_or_none()
        if not wishlist:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WishListsErrors.NOT_FOUND.value)
        return wishlist

    async def _owned(self, wishlist_id: int, user_id: int) -> Wishlist:
        wishlist = await self.find_by_id(wishlist_id)
        if wishlist.owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=WishListsErrors.NOT_OWNER.value)
        return wishlist

    async def update(self, wishlist_id: int, payload: WishlistUpdate, user_id: int) -> Wishlist:
        wishlist = await self._owned(wishlist_id, user_id)

        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        items_id = update_data.pop("items_id", None)
        if items_id is not None:
            wishlist.items = await self.wishes.get_many_by_ids(items_id)
        for key, value in update_data.items():
            setattr(wishlist, key, value)

        await self.db.commit()
        return await self.find_by_id(wishlist_id)

    async def remove(self, wishlist_id: int, user_id: int) -> Wishlist:
        wishlist = await self._owned(wishlist_id, user_id)
        await self.db.delete(wishlist)
        await self.db.commit()
        logger.info("Wishlist removed id=%s owner_id=%s", wishlist_id, user_id)
        return wishlist
