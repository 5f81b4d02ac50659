import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token, verify_password
from app.models.models import User


logger = logging.getLogger("kupipodaridai.auth")


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def validate_password(self, username: str, password: str) -> User | None:
        """Return the user when the username/password pair matches, else None."""
        result = await self.db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        if not user:
            logger.info("Signin unknown username=%s", username)
            return None
        if not verify_password(password, user.hashed_password):
            logger.info("Signin wrong password user_id=%s", user.id)
            return None
        return user

    @staticmethod
    def sign_in(user_id: int) -> str:
        return create_access_token(str(user_id))
