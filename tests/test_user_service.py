"""
Village Backend — User Service Tests
======================================

What we test:
    ✅ Signup stores a pending citizen with a hashed password
    ✅ Login: active, pending, wrong password, unknown user
    ✅ Duplicate usernames are rejected by the unique index
    ✅ Activation flips the flag; deactivation deletes the account
    ✅ Admin listing hides the seed admin
    ✅ remove-admin / remove-user only match the right account type
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from village_api.config import settings
from village_api.exceptions import AuthenticationError, DatabaseError, DuplicateKeyError, NotFoundError
from village_api.models.user import User
from village_api.schemas.user import AdminCreateRequest, ProfileUpdateRequest, SignupRequest
from village_api.security import verify_password
from village_api.services.user_service import UserService


def _signup(username="ravi", password="harvest-2024", **fields):
    return SignupRequest(username=username, password=password, **fields)


class TestSignupAndLogin:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_signup_creates_pending_citizen(self, db_session, sequences):
        user = await self.service.signup(db_session, sequences, _signup(jobTitle="Farmer"))
        await db_session.commit()

        assert user.id == 1
        assert user.activation == 0
        assert user.user_type == "user"
        assert user.job_title == "Farmer"
        assert user.password != "harvest-2024"
        assert verify_password("harvest-2024", user.password)

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, db_session, sequences):
        await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()

        with pytest.raises(DuplicateKeyError) as exc_info:
            await self.service.signup(db_session, sequences, _signup(password="other"))
        await db_session.rollback()

        assert exc_info.value.message == "Try using different username"

    @pytest.mark.asyncio
    async def test_login_pending_account(self, db_session, sequences):
        await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()

        result = await self.service.login(db_session, "ravi", "harvest-2024")

        assert result.success is False
        assert result.message == "Account not activated"
        assert result.userType is None

    @pytest.mark.asyncio
    async def test_login_active_account(self, db_session, sequences):
        user = await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()
        await self.service.activate_user(db_session, user.id)
        await db_session.commit()
        db_session.expire_all()

        result = await self.service.login(db_session, "ravi", "harvest-2024")

        assert result.success is True
        assert result.userType == "user"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_the_same(self, db_session, sequences):
        await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()

        with pytest.raises(AuthenticationError) as wrong_password:
            await self.service.login(db_session, "ravi", "not-it")
        with pytest.raises(AuthenticationError) as unknown_user:
            await self.service.login(db_session, "nobody", "not-it")

        assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


class TestActivation:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_activate_missing_user_raises(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.activate_user(db_session, 42)

    @pytest.mark.asyncio
    async def test_deactivate_deletes_account(self, db_session, sequences):
        user = await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()

        await self.service.deactivate_user(db_session, user.id)
        await db_session.commit()

        result = await db_session.execute(select(User).where(User.username == "ravi"))
        assert result.scalar_one_or_none() is None

    @pytest.mark.asyncio
    async def test_pending_users_empty_raises(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.list_pending_users(db_session)

        assert exc_info.value.message == "No pending users found"


class TestAdmins:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_added_admin_is_active(self, db_session, sequences):
        admin = await self.service.add_admin(
            db_session, sequences, AdminCreateRequest(username="sarpanch", password="pw", job_title="Sarpanch")
        )
        await db_session.commit()

        assert admin.activation == 1
        assert admin.user_type == "admin"

    @pytest.mark.asyncio
    async def test_list_admins_hides_seed_admin(self, db_session):
        db_session.add_all([
            User(id=settings.seed_admin_id, username="root", password="x", activation=1, user_type="admin"),
            User(id=20, username="clerk", password="x", activation=1, user_type="admin"),
        ])
        await db_session.commit()

        admins = await self.service.list_admins(db_session)
        contacts = await self.service.list_admin_contacts(db_session)

        assert [a.username for a in admins] == ["clerk"]
        assert len(contacts) == 2

    @pytest.mark.asyncio
    async def test_remove_admin_ignores_citizens(self, db_session, sequences):
        citizen = await self.service.signup(db_session, sequences, _signup())
        await db_session.commit()

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.remove_admin(db_session, citizen.id)

        assert exc_info.value.message == "Admin not found or not an admin"

    @pytest.mark.asyncio
    async def test_remove_user_ignores_admins(self, db_session, sequences):
        admin = await self.service.add_admin(db_session, sequences, AdminCreateRequest(username="clerk", password="pw"))
        await db_session.commit()

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.remove_user(db_session, admin.id)

        assert exc_info.value.message == "User not found or not a user"


class TestProfile:

    @pytest.mark.asyncio
    async def test_update_profile_changes_only_sent_fields(self, db_session, sequences):
        service = UserService()
        await service.signup(db_session, sequences, _signup(phone="111", address="Old lane"))
        await db_session.commit()

        await service.update_profile(
            db_session, ProfileUpdateRequest(username="ravi", phone="222", jobTitle="Teacher")
        )
        await db_session.commit()

        user = await service.get_profile(db_session, "ravi")
        assert user.phone == "222"
        assert user.job_title == "Teacher"
        assert user.address == "Old lane"

    @pytest.mark.asyncio
    async def test_listing_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

        with pytest.raises(DatabaseError):
            await UserService().list_active_users(mock_db_session)
