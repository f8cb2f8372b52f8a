import logging

from fastapi import APIRouter, Request, status
from sqlmodel import select

from app.api.deps import CurrentUser
from app.core.config import settings
from app.core.errors import ValidationError, operation_guard
from app.core.limiter import limiter
from app.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from app.db import SessionDep
from app.models import User
from app.schemas import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def register_user(request: Request, payload: UserCreate, session: SessionDep) -> AuthResponse:
    email = payload.email.lower()
    with operation_guard("Server error"):
        existing = session.exec(select(User).where(User.email == email)).one_or_none()
        if existing:
            raise ValidationError("User already exists")

        user = User(
            name=payload.name,
            email=email,
            hashed_password=get_password_hash(payload.password),
            time_zone=payload.time_zone or settings.DEFAULT_TIME_ZONE,
        )
        session.add(user)
        session.commit()
        session.refresh(user)

    logger.info("Registered user %s", user.id)
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and obtain a token",
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def login(request: Request, payload: UserLogin, session: SessionDep) -> AuthResponse:
    email = payload.email.lower()
    with operation_guard("Server error"):
        user = session.exec(select(User).where(User.email == email)).one_or_none()
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.info("Failed login for %s", email)
        raise ValidationError("Invalid credentials")

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Current user profile",
)
def read_profile(current_user: CurrentUser) -> ProfileResponse:
    return ProfileResponse(
        message="Welcome to your profile!",
        user=UserRead.model_validate(current_user),
    )
