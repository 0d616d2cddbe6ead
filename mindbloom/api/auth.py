"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from mindbloom.api.dependencies import (
    CurrentUserId,
    DbSession,
    get_current_user,
    get_token_payload,
)
from mindbloom.models.user import User
from mindbloom.schemas.auth import AuthResponse, GoogleLogin, UserLogin, UserRegister
from mindbloom.schemas.user import UserResponse
from mindbloom.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_or_create_federated_user,
    get_user_by_email,
)
from mindbloom.services.google_auth import (
    FederatedAuthNotConfigured,
    GoogleTokenVerifier,
    InvalidFederatedToken,
    get_google_verifier,
)
from mindbloom.services.token_denylist import revoke_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def issue_auth_response(user: User) -> AuthResponse:
    """Mint a token for a verified identity."""
    return AuthResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: DbSession,
):
    """Register a new user."""
    conflict = HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Email already registered",
    )

    # Check if user already exists
    if get_user_by_email(db, user_data.email):
        raise conflict

    try:
        user = create_user(db, user_data.email, user_data.password, user_data.name)
    except IntegrityError:
        # A concurrent registration for the same email landed first
        db.rollback()
        logger.info("Duplicate registration rejected by unique email index")
        raise conflict from None
    logger.info(f"Registered user {user.id}")

    return issue_auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: DbSession,
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return issue_auth_response(user)


@router.post("/google", response_model=AuthResponse)
async def google_login(
    body: GoogleLogin,
    db: DbSession,
    verifier: Annotated[GoogleTokenVerifier, Depends(get_google_verifier)],
):
    """Sign in with a Google ID token, creating the account on first use."""
    try:
        identity = await verifier.verify(body.id_token)
    except FederatedAuthNotConfigured:
        logger.error("Google sign-in attempted but GOOGLE_CLIENT_ID is not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Google sign-in is not configured",
        ) from None
    except InvalidFederatedToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Google token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    user = get_or_create_federated_user(db, identity.email, identity.name, identity.picture)
    return issue_auth_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout")
async def logout(
    payload: Annotated[dict, Depends(get_token_payload)],
    current_user_id: CurrentUserId,
):
    """Logout: revoke the presented token. The client should discard it too."""
    revoked = revoke_token(payload["jti"], payload["exp"])
    logger.info(f"User {current_user_id} logged out")
    return {"message": "Logged out successfully", "revoked": revoked}
