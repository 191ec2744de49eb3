"""Listener account routes (``/api/user``)."""

import uuid

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import (
    clear_session_cookie,
    get_auth_service,
    get_current_principal,
    get_settings,
    get_user_service,
    require_staff,
    require_user,
    set_session_cookie,
)
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.config import Config
from app.core.types import LocalFile
from app.models.principal import Principal, Role
from app.schemas.identity import (
    ChangePasswordRequest,
    LoginRequest,
    PrincipalOut,
    ProfileUpdateForm,
    RegisterForm,
    ResetPasswordRequest,
    SendOtpRequest,
    VerifyOtpRequest,
)
from app.services.identity import AuthService, UserService

router = APIRouter(prefix="/api/user", tags=["user"])

avatar = staged_file("image", FileKind.IMAGE)


# ============================================
# Public
# ============================================


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    response: Response,
    data: RegisterForm = Depends(form_body(RegisterForm)),
    image: LocalFile | None = Depends(avatar),
    users: UserService = Depends(get_user_service),
    auth: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_settings),
) -> dict:
    user = await users.register(data, image)
    token = auth.issue_token(user)
    set_session_cookie(response, token, config)
    return envelope(dump(PrincipalOut, user), message="User registered successfully", token=token)


@router.post("/login")
async def login(
    data: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_settings),
) -> dict:
    session = await auth.login(data.email, data.password, Role.USER)
    set_session_cookie(response, session.token, config)
    return envelope(
        dump(PrincipalOut, session.principal), message="Login successful", token=session.token
    )


@router.put("/send-otp")
async def send_otp(data: SendOtpRequest, auth: AuthService = Depends(get_auth_service)) -> dict:
    await auth.send_otp(data.email)
    return envelope(message="OTP sent successfully to your email")


@router.post("/verify-otp")
async def verify_otp(
    data: VerifyOtpRequest,
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    await auth.verify_otp(data.email, data.otp)
    return envelope(message="OTP correct!")


@router.post("/reset-password")
async def reset_password(
    data: ResetPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    await auth.reset_password(data.email, data.new_password)
    return envelope(message="Password changed successfully")


# ============================================
# Signed in
# ============================================


@router.post("/logout", dependencies=[Depends(get_current_principal)])
async def logout(response: Response, config: Config = Depends(get_settings)) -> dict:
    clear_session_cookie(response, config)
    return envelope(message="Logged out successfully")


@router.get("/me")
async def me(user: Principal = Depends(require_user)) -> dict:
    return envelope(dump(PrincipalOut, user))


@router.put("/profile")
async def update_profile(
    user: Principal = Depends(require_user),
    data: ProfileUpdateForm = Depends(form_body(ProfileUpdateForm)),
    image: LocalFile | None = Depends(avatar),
    users: UserService = Depends(get_user_service),
) -> dict:
    updated = await users.update_profile(user.id, data, image)
    return envelope(dump(PrincipalOut, updated), message="Profile updated successfully")


@router.put("/change-password")
async def change_password(
    data: ChangePasswordRequest,
    user: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
) -> dict:
    await users.change_password(user.id, data)
    return envelope(message="Password changed successfully")


@router.delete("/delete-image")
async def delete_image(
    user: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
) -> dict:
    updated = await users.delete_image(user.id)
    return envelope(dump(PrincipalOut, updated), message="Image deleted successfully")


# ============================================
# Staff
# ============================================


@router.get("/", dependencies=[Depends(require_staff)])
async def list_users(users: UserService = Depends(get_user_service)) -> dict:
    return envelope(dump(PrincipalOut, await users.list_users()))


@router.put("/{user_id}/toggle-active", dependencies=[Depends(require_staff)])
async def toggle_active(
    user_id: uuid.UUID,
    users: UserService = Depends(get_user_service),
) -> dict:
    user = await users.toggle_active(user_id)
    state = "activated" if user.is_active else "deactivated"
    return envelope(message=f"User {state} successfully")


@router.delete("/{user_id}", dependencies=[Depends(require_staff)])
async def delete_user(
    user_id: uuid.UUID,
    users: UserService = Depends(get_user_service),
) -> dict:
    await users.delete(user_id)
    return envelope(message="User deleted successfully")
