"""
Authentication Endpoints.

Self-registration of an owner together with their business, password login
returning a bearer token, and the profile of the authenticated caller.
Registered accounts stay inactive until an administrator activates them.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from haccp_journal.core.database.entities.businesses import Business
from haccp_journal.core.database.entities.users import User
from haccp_journal.core.database.repositories import UserRepository
from haccp_journal.core.errors import ApiError, conflict, unauthorized
from haccp_journal.core.logging_config import get_logger
from haccp_journal.core.models.domain.enums import UserRole
from haccp_journal.core.models.io.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserRead,
)
from haccp_journal.core.models.io.businesses import BusinessRead
from haccp_journal.core.security import create_access_token, hash_password, verify_password
from haccp_journal.server.core.config import settings
from haccp_journal.server.services.deps import CurrentUser, SessionDep

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Owner",
    description="Create an inactive owner account together with its business profile.",
    response_description="The created account and business.",
    responses={
        201: {"description": "Account and business created"},
        400: {"description": "Missing or invalid field"},
        409: {"description": "Email already registered"},
    },
)
async def register(payload: RegisterRequest, session: SessionDep) -> RegisterResponse:
    """
    Register a new owner.

    The account and its business are written in one transaction. Equipment
    counts start at zero; a supplied EIK is kept on the business as free text.

    - **email**: Login email, stored lower-cased.
    - **password**: At least 6 characters.
    - **manager_name**: Name of the responsible manager.
    - **business_***: Name, type, city, address, phone and email of the business.
    """
    users = UserRepository(session)
    if await users.get_by_email(payload.email):
        raise conflict("EMAIL_EXISTS", "Email already registered")

    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=UserRole.user.value,
        manager_name=payload.manager_name,
        profile_image_url=payload.profile_image_url,
        is_active=False,
    )
    session.add(user)
    await session.flush()

    eik = (payload.eik or "").strip()
    business = Business(
        user_id=user.id,
        name=payload.business_name,
        type=payload.business_type,
        city=payload.city,
        address=payload.address,
        phone=payload.phone,
        email=payload.business_email,
        other_equipment=f"ЕИК: {eik}" if eik else None,
    )
    session.add(business)
    await session.commit()
    await session.refresh(user)
    await session.refresh(business)

    logger.info(f"Registered user {user.id} with business {business.id}", extra={"user_id": user.id})
    return RegisterResponse(
        message="Registration successful. Your account is waiting for administrator approval.",
        user=UserRead.model_validate(user),
        business=BusinessRead.model_validate(business),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
    description="Exchange email and password for a bearer token.",
    response_description="Access token and the account.",
    responses={
        200: {"description": "Authenticated"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account not activated"},
    },
)
async def login(payload: LoginRequest, session: SessionDep) -> TokenResponse:
    """
    Authenticate with email and password.

    - **email**: Login email (case-insensitive).
    - **password**: Account password.
    """
    user = await UserRepository(session).get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", "Invalid email or password")
    if not user.is_active:
        raise ApiError(
            status.HTTP_403_FORBIDDEN,
            "ACCOUNT_NOT_ACTIVATED",
            "Account is not activated yet. Please wait for administrator approval.",
        )

    auth = settings.auth
    token = create_access_token(
        user.id,
        user.email,
        user.role,
        secret=auth.jwt_secret,
        expire_days=auth.jwt_expire_days,
        algorithm=auth.jwt_algorithm,
    )
    logger.info(f"User {user.id} logged in")
    return TokenResponse(token=token, user=UserRead.model_validate(user))


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Profile of the account the bearer token belongs to.",
    response_description="The authenticated account.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def me(current_user: CurrentUser, session: SessionDep) -> UserRead:
    """Return the authenticated account."""
    user = await session.get(User, current_user.id)
    if user is None:
        raise unauthorized()
    return UserRead.model_validate(user)
