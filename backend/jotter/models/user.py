"""
Jotter Backend: User and AuthToken SQLAlchemy Models
=====================================================

What:  ORM models for the `users` and `auth_tokens` tables.
How:   A user owns zero or more auth tokens. Each issued bearer token is
       stored so it can be revoked individually (logout) or all at once
       (logout everywhere).
Who:   Used by UserService and the auth dependency.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jotter.database import Base
from jotter.identifiers import OBJECT_ID_LENGTH, new_object_id


class User(Base):
    """An account that can own notes."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )

    # Stored trimmed and lowercased; uniqueness enforced by the database
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier, lowercased",
    )

    # passlib hash string (algorithm, cost and salt are encoded in the value)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    tokens: Mapped[List["AuthToken"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class AuthToken(Base):
    """One active bearer token for a user. Deleting the row revokes the token."""

    __tablename__ = "auth_tokens"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )

    user_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    token: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user: Mapped[User] = relationship(back_populates="tokens")

    __table_args__ = (
        Index("idx_auth_tokens_user_id", "user_id"),
    )
