import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from movesbook.core.config import settings
from movesbook.db.async_session import get_async_db
from movesbook.models.user import User, UserRole
from movesbook.schemas.auth import TokenPayload
from movesbook.services.errors import Unauthorized
from movesbook.utils.logger import auth_logger

logger = logging.getLogger(__name__)

# The header is optional at the framework level so a missing token
# surfaces as our own Unauthorized error shape.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/login", auto_error=False)


class AsyncAuthService:
    """
    Identity/session collaborator: bearer token issue and verification,
    password hashing and the privileged (super admin) credential check.
    """

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash."""
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password for storage."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    @classmethod
    def create_access_token(
        cls, user_id: str, role: Optional[str] = None, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new JWT access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        expire = datetime.now(timezone.utc) + expires_delta
        to_encode = {"sub": str(user_id), "exp": expire}
        if role:
            to_encode["role"] = role

        return jwt.encode(
            to_encode,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    @classmethod
    def decode_access_token(cls, token: str) -> TokenPayload:
        """Decode and validate a bearer token; expired or tampered tokens raise Unauthorized."""
        try:
            payload = jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
            return TokenPayload(**payload)
        except jwt.PyJWTError as e:
            logger.info(f"Token verification failed: {e}")
            raise Unauthorized("Invalid token")
        except ValueError as e:
            logger.info(f"Malformed token payload: {e}")
            raise Unauthorized("Invalid token")

    @classmethod
    async def get_user_by_id(cls, db: AsyncSession, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def get_user_by_email(cls, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email."""
        stmt = select(User).where(User.email == email)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def update_last_login(cls, db: AsyncSession, user_id: str) -> None:
        """Update the user's last login timestamp."""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(last_login_at=datetime.now(timezone.utc))
        )
        await db.execute(stmt)
        await db.commit()

    @classmethod
    async def authenticate(cls, db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Return the active user matching email and password, or None."""
        user = await cls.get_user_by_email(db, email)
        if not user or not user.hashed_password or not user.is_active:
            return None

        try:
            if not cls.verify_password(password, user.hashed_password):
                return None
        except ValueError as e:
            logger.warning(f"Password check failed for user {user.id}: {e}")
            return None

        return user

    @classmethod
    async def verify_admin_password(cls, db: AsyncSession, password: Optional[str]) -> bool:
        """
        Check a plaintext password against the privileged credential.

        The password is accepted when it matches the configured
        SUPER_ADMIN_PASSWORD_HASH or the hash of any active ADMIN user.
        Fails closed: any error while verifying denies access.
        """
        if not password:
            return False

        try:
            if settings.SUPER_ADMIN_PASSWORD_HASH and cls.verify_password(
                password, settings.SUPER_ADMIN_PASSWORD_HASH
            ):
                return True

            stmt = select(User.hashed_password).where(
                User.role == UserRole.ADMIN,
                User.is_active.is_(True),
                User.hashed_password.is_not(None),
            )
            result = await db.execute(stmt)
            for hashed_password in result.scalars().all():
                if cls.verify_password(password, hashed_password):
                    return True
        except Exception as e:
            logger.error(f"Super admin credential verification failed: {e}")
            auth_logger.error("Credential verifier error, denying access", context="ADMIN")
            return False

        return False

    @classmethod
    async def get_current_user(cls, db: AsyncSession, token: Optional[str]) -> User:
        """Resolve the caller identity from an explicit bearer token."""
        if not token:
            raise Unauthorized("Unauthorized")

        token_data = cls.decode_access_token(token)

        user = await cls.get_user_by_id(db, token_data.sub)
        if user is None:
            raise Unauthorized("Invalid token")

        return user


# Standalone async dependency functions for FastAPI
async def get_current_user_async(
    db: AsyncSession = Depends(get_async_db),
    token: Optional[str] = Depends(oauth2_scheme)
) -> User:
    """Get the current authenticated user from the token."""
    return await AsyncAuthService.get_current_user(db, token)


async def get_current_active_user_async(
    current_user: User = Depends(get_current_user_async)
) -> User:
    """Check if the current user is active."""
    if not current_user.is_active:
        raise Unauthorized("Inactive user")
    return current_user
