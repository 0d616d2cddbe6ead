"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from mindbloom.database import get_db
from mindbloom.models.user import User
from mindbloom.services.auth import decode_access_token, get_user_by_id
from mindbloom.services.companion import CompanionService
from mindbloom.services.mood_analysis import MoodAnalysisService
from mindbloom.services.token_denylist import is_token_revoked

# Read the raw header: clients send both "Bearer <token>" and a bare token
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def credentials_exception() -> HTTPException:
    """The single 401 every authentication failure is reported as."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token(authorization: str | None) -> str | None:
    """Pull the token out of an Authorization header value."""
    if not authorization:
        return None
    parts = authorization.strip().split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_token_payload(
    authorization: Annotated[str | None, Depends(authorization_header)],
) -> dict:
    """Verify the presented token and return its claims."""
    token = extract_token(authorization)
    if token is None:
        raise credentials_exception()

    payload = decode_access_token(token)
    if payload is None or is_token_revoked(payload["jti"]):
        raise credentials_exception()

    return payload


def get_current_user_id(
    payload: Annotated[dict, Depends(get_token_payload)],
    db: Annotated[Session, Depends(get_db)],
) -> str:
    """Resolve the caller's user id from a verified token."""
    user_id = payload["sub"]
    exists = db.query(User.id).filter(User.id == user_id).first()
    if exists is None:
        raise credentials_exception()
    return user_id


def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user."""
    user = get_user_by_id(db, user_id)
    if user is None:
        raise credentials_exception()
    return user


def get_optional_user_id(
    authorization: Annotated[str | None, Depends(authorization_header)],
    db: Annotated[Session, Depends(get_db)],
) -> str | None:
    """Resolve the caller on public endpoints; anonymous when no valid token is sent."""
    token = extract_token(authorization)
    if token is None:
        return None
    payload = decode_access_token(token)
    if payload is None or is_token_revoked(payload["jti"]):
        return None
    user_id = payload["sub"]
    if db.query(User.id).filter(User.id == user_id).first() is None:
        return None
    return user_id


def get_mood_analysis_service() -> MoodAnalysisService:
    """Get mood analysis service instance."""
    return MoodAnalysisService()


def get_companion_service() -> CompanionService:
    """Get companion service instance."""
    return CompanionService()


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
OptionalUserId = Annotated[str | None, Depends(get_optional_user_id)]
DbSession = Annotated[Session, Depends(get_db)]
