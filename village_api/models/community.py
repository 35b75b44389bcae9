"""
Village Backend — Community SQLAlchemy Models
===============================================

What:  Announcements (admin-authored), suggestions and queries (citizen-authored).
How:   Each table carries a storage-internal `pk` and an application `id` drawn
       from its own sequence ("announcements", "suggestions", "queries").

Suggestions and queries store the submitter's username as a plain string;
no foreign key ties them to `users`, so they survive the account's removal.
The admin's reply is the only field that changes after creation.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from village_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Announcement(Base):
    """Notice published by an administrator."""

    __tablename__ = "announcements"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        Index("idx_announcements_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Announcement(id={self.id}, title='{self.title}')>"


class Suggestion(Base):
    """Citizen suggestion with an optional administrator response."""

    __tablename__ = "suggestions"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    username: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Suggestion(id={self.id}, username='{self.username}')>"


class CitizenQuery(Base):
    """Question raised by a citizen, answered through `admin_response`."""

    __tablename__ = "queries"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    username: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    matter: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_queries_username_time", "username", "time"),
    )

    def __repr__(self) -> str:
        return f"<CitizenQuery(id={self.id}, username='{self.username}')>"
