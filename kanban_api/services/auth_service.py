from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from ..core.auth import create_access_token
from ..core.exceptions import ConflictError, KanbanError, ValidationError
from ..core.security import hash_password, verify_password
from ..models.user import User

logger = logging.getLogger(__name__)


class AuthenticationError(KanbanError):
    status_code = 401


class AuthService:
    """User registration and login"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(
        self,
        username: str,
        password: str,
        email: Optional[str] = None
    ) -> User:
        """Register a new user with a hashed password"""

        if not username or not password:
            raise ValidationError("Missing required fields")

        stmt = select(User).where(User.username == username)
        if email:
            stmt = select(User).where(or_(User.username == username, User.email == email))

        result = await self.db.execute(stmt)
        existing = result.scalars().first()
        if existing is not None:
            if existing.username == username:
                raise ConflictError("username already exists")
            raise ConflictError("email already exists")

        user = User(
            username=username,
            email=email or None,
            password_hash=hash_password(password)
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("Registered user %s (id=%d)", username, user.id)
        return user

    async def login(self, username: str, password: str) -> str:
        """Verify credentials and issue a JWT access token"""

        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        user = result.scalar_one_or_none()

        if user is None or not user.is_active:
            logger.info("Login rejected for unknown user %s", username)
            raise AuthenticationError("invalid username")

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected for %s: bad password", username)
            raise AuthenticationError("invalid password")

        return create_access_token({"sub": user.username})
