"""Owner-scoped lookups shared by the resource routers.

Every lookup filters on the resource id AND the caller's id in the same
query, so another user's row is indistinguishable from a missing one.
"""

from typing import Any, TypeVar

from fastapi import HTTPException, status
from sqlalchemy.orm import Query, Session

ModelT = TypeVar("ModelT")


def owned_query(db: Session, model: type[ModelT], user_id: str) -> Query:
    """Query over the rows of ``model`` owned by ``user_id``."""
    return db.query(model).filter(model.user_id == user_id)


def get_owned(
    db: Session,
    model: type[ModelT],
    resource_id: str,
    user_id: str,
    detail: str = "Not found",
    **parent_filters: Any,
) -> ModelT:
    """Get one row owned by the caller or raise 404.

    ``parent_filters`` pin nested resources to their parent, e.g.
    ``post_id=...`` for a comment.
    """
    query = owned_query(db, model, user_id).filter(model.id == resource_id)
    for column, value in parent_filters.items():
        query = query.filter(getattr(model, column) == value)

    obj = query.first()
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj
