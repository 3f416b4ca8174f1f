"""
Jotter Backend: Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteRepository for CRUD operations and by Alembic for schema management.

Table Design:
    - id: 24-hex object id, generated in Python (see jotter.identifiers)
    - text: normalized note text, at most 50 characters
    - completed: the only field clients may change after creation
    - creator_id: owning user, set once at creation and never reassigned
    - created_at: UTC timestamp, set at creation, immutable

    Index on creator_id:
        Every read is scoped to one owner ("list my notes"), so the owner
        column is the primary access path after the primary key.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from jotter.database import Base
from jotter.identifiers import OBJECT_ID_LENGTH, new_object_id

NOTE_TEXT_MAX_LENGTH = 50


class Note(Base):
    """
    A short to-do style note owned by exactly one user.

    Lifecycle:
        1. Created by POST /notes (creator_id taken from the authenticated user)
        2. `completed` toggled by PATCH /notes/{id}
        3. Removed by DELETE /notes/{id} (hard delete, no soft-delete flag)
    """

    __tablename__ = "notes"

    # ── Primary Key ───────────────────────────────────────────────────────
    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
        comment="24-hex object id",
    )

    # ── Content ───────────────────────────────────────────────────────────
    # Stored already trimmed and lowercased by the schema layer
    text: Mapped[str] = mapped_column(
        String(NOTE_TEXT_MAX_LENGTH),
        nullable=False,
        comment="Trimmed, lowercased note text (1-50 chars)",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=sql_text("false"),
        comment="Whether the note has been marked done",
    )

    # ── Ownership ─────────────────────────────────────────────────────────
    # The sole authorization predicate is notes.creator_id == users.id
    creator_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user; immutable after creation",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=sql_text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_creator_id", "creator_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, creator_id={self.creator_id}, "
            f"completed={self.completed})>"
        )
