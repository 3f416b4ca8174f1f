"""
Jotter Backend: User Service
=============================

What:  Registration, login and token revocation.
How:   Passwords are hashed with passlib before they reach the database.
       Every successful registration or login issues a new JWT and stores it
       as an AuthToken row; logout deletes rows.
Who:   Called by jotter.routes.users.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.auth import Principal, create_access_token, hash_password, verify_password
from jotter.exceptions import ValidationError
from jotter.models.user import AuthToken, User
from jotter.schemas.user import AuthResponse, UserLogin, UserResponse, validate_user_create

logger = logging.getLogger(__name__)

UNABLE_TO_LOGIN = "Unable to login"
EMAIL_IN_USE = "Email is already in use"


class UserService:
    """Stateless; every call receives the request's session."""

    async def _issue_token(self, db: AsyncSession, user: User) -> str:
        token = create_access_token(subject=user.id)
        db.add(AuthToken(user_id=user.id, token=token))
        await db.flush()
        return token

    async def register(self, db: AsyncSession, payload: Any) -> AuthResponse:
        """
        Creates a user and logs them in.

        Raises:
            ValidationError: invalid email/password, or email already registered
        """
        data = validate_user_create(payload)

        existing = await db.execute(select(User.id).where(User.email == data.email))
        if existing.scalar_one_or_none() is not None:
            raise ValidationError(message=EMAIL_IN_USE, field="email")

        user = User(email=data.email, password_hash=hash_password(data.password))
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise ValidationError(message=EMAIL_IN_USE, field="email")

        token = await self._issue_token(db, user)
        logger.info("User %s registered", user.id)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    async def login(self, db: AsyncSession, credentials: UserLogin) -> AuthResponse:
        """
        Raises:
            ValidationError: unknown email or wrong password (same message for both)
        """
        result = await db.execute(select(User).where(User.email == credentials.email))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(credentials.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise ValidationError(message=UNABLE_TO_LOGIN)

        token = await self._issue_token(db, user)
        logger.info("User %s logged in", user.id)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    async def logout(self, db: AsyncSession, principal: Principal) -> None:
        """Revokes only the token used for this request."""
        await db.execute(
            delete(AuthToken).where(
                AuthToken.user_id == principal.id,
                AuthToken.token == principal.token,
            )
        )
        logger.info("User %s logged out", principal.id)

    async def logout_all(self, db: AsyncSession, principal: Principal) -> None:
        """Revokes every token the user holds."""
        await db.execute(delete(AuthToken).where(AuthToken.user_id == principal.id))
        logger.info("User %s logged out of all sessions", principal.id)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
