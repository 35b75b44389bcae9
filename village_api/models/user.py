"""
Village Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table (citizens and administrators).
How:   `pk` is the storage-internal key; `id` is the application id drawn from
       the "users" sequence and is what every API call refers to.

Lifecycle:
    1. Signup creates a row with activation=0, user_type='user'
    2. An admin activates it (activation=1)
    3. Deactivation or removal deletes the row outright
    Admins added through /add-admin start with activation=1.

Constraints:
    - username is unique (index `uq_users_username`); the API maps a violation
      to DuplicateKeyError instead of checking before inserting
    - id is unique
"""

from typing import Optional

from sqlalchemy import Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from village_api.database import Base

USER_TYPE_USER = "user"
USER_TYPE_ADMIN = "admin"

ACTIVATION_PENDING = 0
ACTIVATION_ACTIVE = 1


class User(Base):
    """A registered account. `password` always holds a salted hash."""

    __tablename__ = "users"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    job_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    activation: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=ACTIVATION_PENDING,
        server_default=text("0"),
    )
    user_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=USER_TYPE_USER,
        server_default=text("'user'"),
    )

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, username='{self.username}', "
            f"user_type='{self.user_type}', activation={self.activation})>"
        )
