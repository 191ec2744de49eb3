"""Tests for UserService and StaffService."""

import uuid
from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    InputValidationError,
    MediaUploadError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
)
from app.core.security import hash_password, verify_password
from app.core.types import LocalFile
from app.models.principal import Role
from app.schemas.identity import (
    AccountCreate,
    ChangePasswordRequest,
    ProfileUpdateForm,
    RegisterForm,
)
from app.services.identity import StaffService, UserService
from app.services.identity.base import EMAIL_IN_USE, IN_USE, PHONE_IN_USE, avatar_url


@pytest.fixture
def users(mock_db_session_factory, config, mock_media) -> UserService:
    factory, _ = mock_db_session_factory
    return UserService(db_session_factory=factory, config=config, media=mock_media)


@pytest.fixture
def staff(mock_db_session_factory, config) -> StaffService:
    factory, _ = mock_db_session_factory
    return StaffService(db_session_factory=factory, config=config)


@pytest.fixture
def avatar(tmp_path) -> LocalFile:
    path = Path(tmp_path) / "me.jpg"
    path.write_bytes(b"jpg")
    return LocalFile(path=path, filename="me.jpg", content_type="image/jpeg", size=3)


def registration(**overrides) -> RegisterForm:
    fields = {
        "name": "Rami",
        "email": "Rami@Example.com",
        "password": "harbour123",
        "phoneNumber": "+201001234567",
    }
    fields.update(overrides)
    return RegisterForm.model_validate(fields)


@pytest.mark.unit
class TestAvatarUrl:
    def test_generated_avatar(self):
        image = avatar_url("https://ui-avatars.com/api/", "Rami Nasser")
        assert image["public_id"] is None
        assert image["url"].startswith("https://ui-avatars.com/api/?name=Rami")
        assert "background=random" in image["url"]


@pytest.mark.unit
class TestRegister:
    @pytest.mark.asyncio
    async def test_register(self, users, mock_db_session_factory, mock_media, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)

        user = await users.register(registration())

        assert user.role == Role.USER.value
        assert user.email == "rami@example.com"
        assert verify_password("harbour123", user.password_hash)
        assert user.image["public_id"] is None
        mock_media.upload.assert_not_called()
        session.refresh.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_register_with_avatar(
        self, users, mock_db_session_factory, mock_media, avatar, scalar_result
    ):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)

        user = await users.register(registration(), avatar)

        assert user.image == {"public_id": "seagulls/x/abc", "url": "https://cdn.test/abc.png"}
        assert mock_media.upload.call_args.kwargs["folder"] == "seagulls/users"

    @pytest.mark.asyncio
    async def test_avatar_failure_keeps_generated_image(
        self, users, mock_db_session_factory, mock_media, avatar, scalar_result
    ):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)
        mock_media.upload.side_effect = MediaUploadError("Upload timed out")

        user = await users.register(registration(), avatar)

        assert user.image["public_id"] is None
        assert "ui-avatars.com" in user.image["url"]

    @pytest.mark.asyncio
    async def test_duplicate(self, users, mock_db_session_factory, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result((uuid.uuid4(),))

        with pytest.raises(RecordAlreadyExistsError) as exc_info:
            await users.register(registration())

        assert exc_info.value.message == IN_USE
        assert exc_info.value.http_status == 400
        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_race(self, users, mock_db_session_factory, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(RecordAlreadyExistsError, match=IN_USE):
            await users.register(registration())

        session.rollback.assert_awaited_once()


@pytest.mark.unit
class TestProfile:
    @pytest.mark.asyncio
    async def test_update_fields(self, users, mock_db_session_factory, make_principal, scalar_result):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER)
        session.get.return_value = user
        session.execute.return_value = scalar_result(None)

        updated = await users.update_profile(user.id, ProfileUpdateForm(name="Rami N."))

        assert updated.name == "Rami N."
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_email_taken(self, users, mock_db_session_factory, make_principal, scalar_result):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER)
        session.get.return_value = user
        session.execute.return_value = scalar_result((uuid.uuid4(),))

        with pytest.raises(RecordAlreadyExistsError, match=EMAIL_IN_USE):
            await users.update_profile(user.id, ProfileUpdateForm(email="taken@example.com"))

    @pytest.mark.asyncio
    async def test_phone_taken(self, users, mock_db_session_factory, make_principal, scalar_result):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER)
        session.get.return_value = user
        session.execute.return_value = scalar_result((uuid.uuid4(),))

        with pytest.raises(RecordAlreadyExistsError, match=PHONE_IN_USE):
            await users.update_profile(
                user.id, ProfileUpdateForm(phone_number="+201001234568")
            )

    @pytest.mark.asyncio
    async def test_new_avatar_replaces_old(
        self, users, mock_db_session_factory, mock_media, make_principal, avatar
    ):
        _, session = mock_db_session_factory
        user = make_principal(
            Role.USER, image={"public_id": "seagulls/users/old", "url": "https://cdn.test/old"}
        )
        session.get.return_value = user

        updated = await users.update_profile(user.id, ProfileUpdateForm(), avatar)

        mock_media.destroy_quietly.assert_awaited_once_with("seagulls/users/old")
        assert updated.image["public_id"] == "seagulls/x/abc"

    @pytest.mark.asyncio
    async def test_failed_avatar_keeps_old(
        self, users, mock_db_session_factory, mock_media, make_principal, avatar
    ):
        _, session = mock_db_session_factory
        old = {"public_id": "seagulls/users/old", "url": "https://cdn.test/old"}
        user = make_principal(Role.USER, image=dict(old))
        session.get.return_value = user
        mock_media.upload.side_effect = MediaUploadError("Upload timed out")

        updated = await users.update_profile(user.id, ProfileUpdateForm(), avatar)

        assert updated.image == old
        mock_media.destroy_quietly.assert_not_called()

    @pytest.mark.asyncio
    async def test_staff_are_not_users(self, users, mock_db_session_factory, make_principal):
        _, session = mock_db_session_factory
        session.get.return_value = make_principal(Role.ADMIN)

        with pytest.raises(RecordNotFoundError, match="User not found"):
            await users.get(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete_image(self, users, mock_db_session_factory, mock_media, make_principal):
        _, session = mock_db_session_factory
        user = make_principal(
            Role.USER, image={"public_id": "seagulls/users/old", "url": "https://cdn.test/old"}
        )
        session.get.return_value = user

        updated = await users.delete_image(user.id)

        assert updated.image == {"public_id": None, "url": None}
        mock_media.destroy_quietly.assert_awaited_once_with("seagulls/users/old")


@pytest.mark.unit
class TestChangePassword:
    @pytest.fixture
    def user(self, make_principal, mock_db_session_factory):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER, password_hash=hash_password("harbour123"))
        session.get.return_value = user
        return user

    @pytest.mark.asyncio
    async def test_change(self, users, user):
        data = ChangePasswordRequest(current_password="harbour123", new_password="lighthouse")

        await users.change_password(user.id, data)

        assert verify_password("lighthouse", user.password_hash)

    @pytest.mark.asyncio
    async def test_wrong_current(self, users, user):
        data = ChangePasswordRequest(current_password="guess", new_password="lighthouse")

        with pytest.raises(InputValidationError, match="Current password is incorrect"):
            await users.change_password(user.id, data)

    @pytest.mark.asyncio
    async def test_unchanged(self, users, user):
        data = ChangePasswordRequest(current_password="harbour123", new_password="harbour123")

        with pytest.raises(InputValidationError, match="must be different"):
            await users.change_password(user.id, data)


@pytest.mark.unit
class TestModeration:
    @pytest.mark.asyncio
    async def test_toggle_active(self, users, mock_db_session_factory, make_principal):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER)
        session.get.return_value = user

        assert (await users.toggle_active(user.id)).is_active is False
        assert (await users.toggle_active(user.id)).is_active is True

    @pytest.mark.asyncio
    async def test_delete_user(self, users, mock_db_session_factory, mock_media, make_principal):
        _, session = mock_db_session_factory
        user = make_principal(Role.USER)
        session.get.return_value = user

        await users.delete(user.id)

        session.delete.assert_awaited_once_with(user)
        mock_media.destroy_quietly.assert_not_called()


@pytest.mark.unit
class TestStaffService:
    @pytest.mark.asyncio
    async def test_create_admin(self, staff, mock_db_session_factory, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)
        data = AccountCreate(
            name="Desk Admin",
            email="desk@seagulls.fm",
            password="secret123",
            phone_number="+201001234567",
        )

        admin = await staff.create_admin(data)

        assert admin.role == Role.ADMIN.value
        assert admin.is_staff

    @pytest.mark.asyncio
    async def test_create_superadmin(self, staff, mock_db_session_factory, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)
        data = AccountCreate(
            name="Owner",
            email="owner@seagulls.fm",
            password="secret123",
            phone_number="+201001234567",
        )

        assert (await staff.create_superadmin(data)).role == Role.SUPERADMIN.value

    @pytest.mark.asyncio
    async def test_superadmin_cannot_be_deleted_as_admin(
        self, staff, mock_db_session_factory, make_principal
    ):
        _, session = mock_db_session_factory
        session.get.return_value = make_principal(Role.SUPERADMIN)

        with pytest.raises(RecordNotFoundError, match="Admin not found"):
            await staff.delete_admin(uuid.uuid4())

        session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_admin(self, staff, mock_db_session_factory, make_principal):
        _, session = mock_db_session_factory
        admin = make_principal(Role.ADMIN)
        session.get.return_value = admin

        await staff.delete_admin(admin.id)

        session.delete.assert_awaited_once_with(admin)
        session.commit.assert_awaited_once()
