"""Sign-up, sign-in, session and password endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coachhub.api.deps import get_current_user
from coachhub.core.config import get_settings
from coachhub.core.security import (
    InvalidTokenError,
    create_access_token,
    create_reset_token,
    decode_reset_token,
    hash_password,
    password_fingerprint,
    verify_password,
)
from coachhub.db.session import get_db
from coachhub.models.user import User
from coachhub.schemas.auth import (
    AuthSession,
    ConfirmResetRequest,
    PasswordStrengthRead,
    PasswordStrengthRequest,
    ResetPasswordAccepted,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    UpdatePasswordRequest,
)
from coachhub.schemas.user import UserRead
from coachhub.services.passwords import password_strength

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password. Please try again."
EMAIL_TAKEN = "An account with this email already exists."
RESET_ACCEPTED = "If an account exists for this email, a reset link has been sent."


def _session_for(user: User) -> AuthSession:
    return AuthSession(access_token=create_access_token(user.id), user=UserRead.model_validate(user))


@router.post("/sign-up", response_model=AuthSession, status_code=201)
async def sign_up(payload: SignUpRequest, db: AsyncSession = Depends(get_db)):
    """Create an account and sign it in. The unique email index decides duplicates."""
    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        name=payload.name,
        user_type=payload.user_type,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        raise HTTPException(status_code=409, detail=EMAIL_TAKEN) from e
    await db.refresh(user)
    logger.info("New %s account %s", user.user_type.value, user.id)
    return _session_for(user)


@router.post("/sign-in", response_model=AuthSession)
async def sign_in(payload: SignInRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == payload.email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed sign-in for %s", payload.email)
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    return _session_for(user)


@router.post("/sign-out", status_code=204)
async def sign_out(user: User = Depends(get_current_user)):
    """Tokens are stateless; the client drops its copy."""
    logger.info("User %s signed out", user.id)
    return Response(status_code=204)


@router.get("/session", response_model=UserRead)
async def get_session(user: User = Depends(get_current_user)):
    """The user behind the bearer token."""
    return user


@router.post("/reset-password", response_model=ResetPasswordAccepted, status_code=202)
async def request_password_reset(payload: ResetPasswordRequest, db: AsyncSession = Depends(get_db)):
    """Issue a reset token. The answer is the same whether or not the email is registered."""
    result = await db.execute(select(User).where(User.email == payload.email))
    user = result.scalar_one_or_none()
    token = None
    if user:
        token = create_reset_token(user.id, user.password_hash)
        logger.info("Password reset requested for user %s", user.id)
    debug = get_settings().debug
    return ResetPasswordAccepted(message=RESET_ACCEPTED, reset_token=token if debug else None)


@router.post("/reset-password/confirm", status_code=204)
async def confirm_password_reset(payload: ConfirmResetRequest, db: AsyncSession = Depends(get_db)):
    try:
        user_id, fingerprint = decode_reset_token(payload.token)
    except InvalidTokenError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user or fingerprint != password_fingerprint(user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid token")
    user.password_hash = hash_password(payload.new_password)
    await db.flush()
    logger.info("Password reset completed for user %s", user.id)
    return Response(status_code=204)


@router.post("/update-password", status_code=204)
async def update_password(
    payload: UpdatePasswordRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user.password_hash = hash_password(payload.new_password)
    await db.flush()
    logger.info("Password updated for user %s", user.id)
    return Response(status_code=204)


@router.post("/password-strength", response_model=PasswordStrengthRead)
async def check_password_strength(payload: PasswordStrengthRequest):
    """Score a candidate password for the strength meter."""
    strength = password_strength(payload.password)
    return PasswordStrengthRead(score=strength.score, feedback=strength.feedback, color=strength.color)
