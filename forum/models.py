from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from forum.database import Base


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    # Issued by the database on insert.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    # Argon2 PHC string; algorithm, parameters and salt are all embedded.
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_moderator: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )


# ---------------------------------------------------------------------------
# Sub (community) membership
# ---------------------------------------------------------------------------
class SubMembership(Base):
    __tablename__ = "sub_memberships"

    # A sub exists only through its members; there is no subs table.
    sub_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    # Not a foreign key: listings join on users, so members whose user row
    # was deleted simply drop out.
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(Base):
    __tablename__ = "comments"

    __table_args__ = (
        # Thread listing for a post, oldest first.
        Index("ix_comments_post_id_timestamp", "post_id", "timestamp"),
    )

    # Generated by the comment service, never by the database.
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    # post_id, user_id and parent_id are deliberately not foreign keys:
    # deleting a user or a parent comment leaves these rows in place.
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
