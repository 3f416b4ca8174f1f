"""
Jotter Backend: Authentication
===============================

What:  Password hashing, bearer token issuance/verification, and the FastAPI
       dependency that resolves `Authorization: Bearer <token>` to a user.
How:   Passwords are hashed with passlib (bcrypt). Tokens are HS256 JWTs
       signed with settings.jwt_secret and carrying the user id in `sub`.
       A token is only accepted while a matching auth_tokens row exists,
       which makes logout a row delete.
Who:   UserService issues tokens; every protected route depends on
       get_current_principal.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.config import settings
from jotter.database import get_db_session
from jotter.exceptions import AuthError
from jotter.identifiers import new_object_id
from jotter.models.user import AuthToken, User

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must surface as our own 401 body,
# not FastAPI's default 403
bearer = HTTPBearer(auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


# ══════════════════════════════════════════════════════════════════════════
# Passwords
# ══════════════════════════════════════════════════════════════════════════

def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Returns True if `plain` matches `hashed`; malformed hashes never match."""
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


# ══════════════════════════════════════════════════════════════════════════
# Tokens
# ══════════════════════════════════════════════════════════════════════════

def create_access_token(subject: str) -> str:
    now = datetime.now(timezone.utc)
    # jti keeps two tokens issued in the same second distinct
    payload = {"sub": subject, "iat": int(now.timestamp()), "jti": new_object_id()}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Raises jose.JWTError if the signature or claims are invalid."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


@dataclass(frozen=True)
class Principal:
    """
    The authenticated caller of a request.

    `id` is the only attribute the note core looks at; `user` and `token`
    are kept for the /users endpoints (logout revokes `token`).
    """

    user: User
    token: str

    @property
    def id(self) -> str:
        return self.user.id


async def resolve_principal(db: AsyncSession, token: str) -> Principal:
    """
    Verifies `token` and loads its user.

    Raises:
        AuthError: bad signature, missing `sub`, or token no longer registered
    """
    try:
        claims = decode_token(token)
    except JWTError as exc:
        raise AuthError(context={"reason": type(exc).__name__})

    user_id = claims.get("sub")
    if not user_id:
        raise AuthError(context={"reason": "missing_sub"})

    result = await db.execute(
        select(User)
        .join(AuthToken, AuthToken.user_id == User.id)
        .where(User.id == user_id, AuthToken.token == token)
    )
    user = result.scalars().first()
    if user is None:
        raise AuthError(context={"reason": "token_not_registered", "user_id": user_id})

    return Principal(user=user, token=token)


async def get_current_principal(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: AsyncSession = Depends(get_db_session),
) -> Principal:
    """
    FastAPI dependency guarding every protected route.

    Runs before any route-specific logic, so an unauthenticated request gets
    401 regardless of what else is wrong with it.
    """
    if creds is None or creds.scheme.lower() != "bearer" or not creds.credentials:
        raise AuthError(context={"reason": "missing_credentials"})

    principal = await resolve_principal(db, creds.credentials)
    logger.debug("Authenticated user %s", principal.id)
    return principal
