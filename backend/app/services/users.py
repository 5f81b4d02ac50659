import logging

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.security import get_password_hash
from app.models.models import Offer, User, Wish
from app.schemas.user import UserCreate, UserUpdate
from app.services.constants import UserErrors


logger = logging.getLogger("kupipodaridai.users")


def conflict_from_integrity_error(exc: IntegrityError) -> HTTPException:
    """Translate a unique-constraint violation on users into a 409."""
    detail = str(getattr(exc, "orig", exc)).lower()
    if "username" in detail:
        message = UserErrors.USERNAME_TAKEN
    elif "email" in detail:
        message = UserErrors.EMAIL_TAKEN
    else:
        message = UserErrors.ALREADY_EXISTS
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message.value)


class UsersService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _ensure_unique(self, username: str | None, email: str | None, user_id: int | None = None) -> None:
        if username:
            existing = await self._get_by_username(username)
            if existing and existing.id != user_id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=UserErrors.USERNAME_TAKEN.value)
        if email:
            existing = await self._get_by_email(email)
            if existing and existing.id != user_id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=UserErrors.EMAIL_TAKEN.value)

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.info("User unique constraint hit: %s", exc.orig)
            raise conflict_from_integrity_error(exc) from exc

    async def create(self, payload: UserCreate) -> User:
        await self._ensure_unique(payload.username, payload.email)

        user = User(
            username=payload.username,
            email=payload.email,
            hashed_password=get_password_hash(payload.password),
        )
        if payload.about is not None:
            user.about = payload.about
        if payload.avatar is not None:
            user.avatar = payload.avatar
        self.db.add(user)
        await self._commit()
        await self.db.refresh(user)
        logger.info("User created id=%s username=%s", user.id, user.username)
        return user

    async def find_one(self, username: str) -> User:
        user = await self._get_by_username(username)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=UserErrors.NOT_FOUND.value)
        return user

    async def find_many(self, query: str) -> list[User]:
        if not query:
            return []
        pattern = f"%{query}%"
        result = await self.db.execute(
            select(User)
            .where(or_(User.username.ilike(pattern), User.email.ilike(pattern)))
            .order_by(User.id)
        )
        return list(result.scalars())

    async def find_by_id(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=UserErrors.NOT_FOUND.value)
        return user

    async def update(self, user_id: int, payload: UserUpdate) -> User:
        user = await self.find_by_id(user_id)
        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        await self._ensure_unique(update_data.get("username"), update_data.get("email"), user_id=user.id)

        password = update_data.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)
        for key, value in update_data.items():
            setattr(user, key, value)

        await self._commit()
        await self.db.refresh(user)
        return user

    async def _wishes_of(self, owner_id: int) -> list[Wish]:
        result = await self.db.execute(
            select(Wish)
            .options(
                selectinload(Wish.owner),
                selectinload(Wish.offers).selectinload(Offer.user),
            )
            .where(Wish.owner_id == owner_id)
            .order_by(Wish.id)
        )
        return list(result.scalars().unique())

    async def get_own_wishes(self, user_id: int) -> list[Wish]:
        user = await self.find_by_id(user_id)
        return await self._wishes_of(user.id)

    async def find_wishes(self, username: str) -> list[Wish]:
        user = await self.find_one(username)
        return await self._wishes_of(user.id)
