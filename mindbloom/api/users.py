"""User profile API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from mindbloom.api.dependencies import DbSession, get_current_user, get_token_payload
from mindbloom.models.user import User
from mindbloom.schemas.user import UserProfileUpdate, UserResponse
from mindbloom.services.token_denylist import revoke_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
def update_profile(
    profile_data: UserProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: DbSession,
):
    """Update the caller's own profile."""
    for field, value in profile_data.model_dump(mode="json", exclude_unset=True).items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    current_user: Annotated[User, Depends(get_current_user)],
    payload: Annotated[dict, Depends(get_token_payload)],
    db: DbSession,
):
    """Delete the caller's account and everything they own."""
    user_id = current_user.id
    db.delete(current_user)
    db.commit()
    revoke_token(payload["jti"], payload["exp"])
    logger.info(f"Deleted account {user_id}")
