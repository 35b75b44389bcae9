"""
Village Backend — User Service
================================

What:  Account lifecycle: signup, login, activation, admin management and
       profile edits.
Who:   Called by the routes in routes/auth.py and routes/admin.py.

Lifecycle:
    signup ──▶ activation=0 ──(activate-user)──▶ activation=1
       │                                              │
       └──────────(deactivate-user / remove-user)─────┴──▶ row deleted

    Activation is a flag flip while deactivation deletes the row. The two
    operations are not inverses; a deactivated citizen has to sign up again.

Login:
    Unknown username and wrong password raise the same AuthenticationError.
    For an unknown username a dummy hash verification runs so both paths cost
    about the same. A correct password on a pending account is not an error:
    it returns success=False with "Account not activated".

Uniqueness:
    username is protected by a unique index. Signup and add-admin insert
    directly and translate the IntegrityError into DuplicateKeyError.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from village_api import security
from village_api.config import settings
from village_api.exceptions import AuthenticationError, NotFoundError
from village_api.models.user import (
    ACTIVATION_ACTIVE,
    ACTIVATION_PENDING,
    USER_TYPE_ADMIN,
    USER_TYPE_USER,
    User,
)
from village_api.schemas.user import (
    AdminCreateRequest,
    LoginResponse,
    ProfileUpdateRequest,
    SignupRequest,
)
from village_api.services.sequence_service import SequenceGenerator
from village_api.services.store import store_errors

logger = logging.getLogger(__name__)


class UserService:
    """Stateless account operations; every method receives its session."""

    # ── Authentication ────────────────────────────────────────────────────

    async def login(self, db: AsyncSession, username: str, password: str) -> LoginResponse:
        """
        Check a username/password pair.

        Returns:
            LoginResponse(success=True, userType=...) for an active account, or
            LoginResponse(success=False, message="Account not activated").

        Raises:
            AuthenticationError: Unknown username or wrong password.
        """
        with store_errors("login"):
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()

        if user is None:
            await security.dummy_verify_async()
            logger.info("Login failed: invalid credentials")
            raise AuthenticationError()

        if not await security.verify_password_async(password, user.password):
            logger.info("Login failed: invalid credentials for user id %s", user.id)
            raise AuthenticationError()

        if user.activation == ACTIVATION_PENDING:
            return LoginResponse(success=False, message="Account not activated")

        return LoginResponse(success=True, userType=user.user_type)

    # ── Registration ──────────────────────────────────────────────────────

    async def signup(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: SignupRequest
    ) -> User:
        """Register a citizen account awaiting activation."""
        return await self._create_user(
            db,
            sequences,
            username=payload.username,
            password=payload.password,
            fields=payload.model_dump(exclude={"username", "password"}),
            activation=ACTIVATION_PENDING,
            user_type=USER_TYPE_USER,
            duplicate_message="Try using different username",
        )

    async def add_admin(
        self, db: AsyncSession, sequences: SequenceGenerator, payload: AdminCreateRequest
    ) -> User:
        """Create an administrator account, active immediately."""
        return await self._create_user(
            db,
            sequences,
            username=payload.username,
            password=payload.password,
            fields=payload.model_dump(exclude={"username", "password"}),
            activation=ACTIVATION_ACTIVE,
            user_type=USER_TYPE_ADMIN,
            duplicate_message="Username already exists",
        )

    async def _create_user(
        self,
        db: AsyncSession,
        sequences: SequenceGenerator,
        username: str,
        password: str,
        fields: dict,
        activation: int,
        user_type: str,
        duplicate_message: str,
    ) -> User:
        hashed = await security.hash_password_async(password)
        user_id = await sequences.next_value("users")

        user = User(
            id=user_id,
            username=username,
            password=hashed,
            activation=activation,
            user_type=user_type,
            **fields,
        )
        with store_errors("create_user", duplicate_message=duplicate_message, username=username):
            db.add(user)
            await db.flush()

        logger.info("Created %s account id=%d", user_type, user.id)
        return user

    # ── Activation ────────────────────────────────────────────────────────

    async def activate_user(self, db: AsyncSession, user_id: int) -> None:
        with store_errors("activate_user", user_id=user_id):
            result = await db.execute(
                update(User)
                .where(User.id == user_id)
                .values(activation=ACTIVATION_ACTIVE)
                .execution_options(synchronize_session=False)
            )
        if result.rowcount == 0:
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("Activated user id=%d", user_id)

    async def deactivate_user(self, db: AsyncSession, user_id: int) -> None:
        """Deactivation removes the account outright (see module docstring)."""
        await self._delete_user(db, user_id, user_type=None, message="User not found")
        logger.info("Deactivated (deleted) user id=%d", user_id)

    async def list_pending_users(self, db: AsyncSession) -> List[User]:
        """Accounts awaiting activation; NotFoundError when there are none."""
        with store_errors("list_pending_users"):
            result = await db.execute(
                select(User).where(User.activation == ACTIVATION_PENDING).order_by(User.id)
            )
            users = list(result.scalars().all())
        if not users:
            raise NotFoundError(resource="user", message="No pending users found")
        return users

    # ── Admin management ──────────────────────────────────────────────────

    async def list_admins(self, db: AsyncSession) -> List[User]:
        """All administrators except the built-in seed admin."""
        with store_errors("list_admins"):
            result = await db.execute(
                select(User)
                .where(User.user_type == USER_TYPE_ADMIN, User.id != settings.seed_admin_id)
                .order_by(User.id)
            )
            return list(result.scalars().all())

    async def list_admin_contacts(self, db: AsyncSession) -> List[User]:
        """Every administrator, seed admin included; routes expose contact fields only."""
        with store_errors("list_admin_contacts"):
            result = await db.execute(
                select(User).where(User.user_type == USER_TYPE_ADMIN).order_by(User.id)
            )
            return list(result.scalars().all())

    async def remove_admin(self, db: AsyncSession, user_id: int) -> None:
        await self._delete_user(
            db, user_id, user_type=USER_TYPE_ADMIN, message="Admin not found or not an admin"
        )
        logger.info("Removed admin id=%d", user_id)

    # ── Citizen management ────────────────────────────────────────────────

    async def list_active_users(self, db: AsyncSession) -> List[User]:
        with store_errors("list_active_users"):
            result = await db.execute(
                select(User)
                .where(User.user_type == USER_TYPE_USER, User.activation == ACTIVATION_ACTIVE)
                .order_by(User.id)
            )
            return list(result.scalars().all())

    async def remove_user(self, db: AsyncSession, user_id: int) -> None:
        await self._delete_user(
            db, user_id, user_type=USER_TYPE_USER, message="User not found or not a user"
        )
        logger.info("Removed user id=%d", user_id)

    async def _delete_user(
        self, db: AsyncSession, user_id: int, user_type: Optional[str], message: str
    ) -> None:
        stmt = delete(User).where(User.id == user_id)
        if user_type is not None:
            stmt = stmt.where(User.user_type == user_type)

        with store_errors("delete_user", user_id=user_id):
            result = await db.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 0:
            raise NotFoundError(resource="user", resource_id=user_id, message=message)

    # ── Profile ───────────────────────────────────────────────────────────

    async def get_profile(self, db: AsyncSession, username: str) -> User:
        with store_errors("get_profile"):
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", message="User not found")
        return user

    async def update_profile(self, db: AsyncSession, payload: ProfileUpdateRequest) -> User:
        """Change the contact fields sent in the payload; omitted or null ones keep their value."""
        user = await self.get_profile(db, payload.username)
        for field, value in payload.model_dump(exclude={"username"}, exclude_none=True).items():
            setattr(user, field, value)
        with store_errors("update_profile"):
            await db.flush()
        return user


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
