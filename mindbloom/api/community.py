"""Community feed API endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from mindbloom.api.dependencies import CurrentUserId, DbSession, OptionalUserId
from mindbloom.api.ownership import get_owned
from mindbloom.models.community import CommunityPost, PostComment, PostLike
from mindbloom.schemas.community import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/community", tags=["community"])


def get_post(db: Session, post_id: str) -> CommunityPost:
    """Get any post (posts are publicly readable)."""
    post = db.query(CommunityPost).filter(CommunityPost.id == post_id).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def count_likes(db: Session, post_id: str) -> int:
    return db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar() or 0


def build_post_responses(
    db: Session, posts: list[CommunityPost], caller_id: str | None
) -> list[PostResponse]:
    """Attach like/comment counts and the caller's own like flag.

    Counts are aggregated from the child tables at read time.
    """
    post_ids = [post.id for post in posts]
    like_counts: dict[str, int] = {}
    comment_counts: dict[str, int] = {}
    liked_by_caller: set[str] = set()

    if post_ids:
        like_counts = dict(
            db.query(PostLike.post_id, func.count(PostLike.id))
            .filter(PostLike.post_id.in_(post_ids))
            .group_by(PostLike.post_id)
            .all()
        )
        comment_counts = dict(
            db.query(PostComment.post_id, func.count(PostComment.id))
            .filter(PostComment.post_id.in_(post_ids))
            .group_by(PostComment.post_id)
            .all()
        )
        if caller_id is not None:
            liked_by_caller = {
                post_id
                for (post_id,) in db.query(PostLike.post_id).filter(
                    PostLike.post_id.in_(post_ids),
                    PostLike.user_id == caller_id,
                )
            }

    result = []
    for post in posts:
        post_response = PostResponse.model_validate(post)
        post_response.likes_count = like_counts.get(post.id, 0)
        post_response.comments_count = comment_counts.get(post.id, 0)
        post_response.user_liked = post.id in liked_by_caller
        result.append(post_response)
    return result


@router.get("/posts", response_model=list[PostResponse])
def get_posts(
    caller_id: OptionalUserId,
    db: DbSession,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
):
    """Get the public feed, newest first."""
    posts = (
        db.query(CommunityPost)
        .options(joinedload(CommunityPost.author))
        .order_by(CommunityPost.created_at.desc(), CommunityPost.id)
        .limit(limit)
        .offset(offset)
        .all()
    )
    return build_post_responses(db, posts, caller_id)


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Create a post."""
    post = CommunityPost(
        user_id=current_user_id,
        content=post_data.content,
        # An inline capture wins over a linked image
        image_url=post_data.image_base64 or post_data.image_url,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return build_post_responses(db, [post], current_user_id)[0]


@router.patch("/posts/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Edit one of the caller's posts."""
    post = get_owned(db, CommunityPost, post_id, current_user_id, "Post not found")
    post.content = post_data.content
    db.commit()
    db.refresh(post)
    return build_post_responses(db, [post], current_user_id)[0]


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Delete one of the caller's posts with its likes and comments."""
    post = get_owned(db, CommunityPost, post_id, current_user_id, "Post not found")
    db.delete(post)
    db.commit()


@router.post("/posts/{post_id}/like", response_model=LikeResponse)
def like_post(
    post_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Like a post. Liking again is a no-op."""
    get_post(db, post_id)

    existing = (
        db.query(PostLike)
        .filter(PostLike.post_id == post_id, PostLike.user_id == current_user_id)
        .first()
    )
    if existing is None:
        db.add(PostLike(post_id=post_id, user_id=current_user_id))
        try:
            db.commit()
        except IntegrityError:
            # A concurrent like from the same user landed first
            db.rollback()
            logger.info(f"Duplicate like on post {post_id} ignored")

    return LikeResponse(post_id=post_id, liked=True, likes_count=count_likes(db, post_id))


@router.delete("/posts/{post_id}/like", response_model=LikeResponse)
def unlike_post(
    post_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Remove the caller's like. Unliking a post that was never liked is a no-op."""
    get_post(db, post_id)

    db.query(PostLike).filter(
        PostLike.post_id == post_id,
        PostLike.user_id == current_user_id,
    ).delete(synchronize_session=False)
    db.commit()

    return LikeResponse(post_id=post_id, liked=False, likes_count=count_likes(db, post_id))


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
def get_comments(
    post_id: str,
    db: DbSession,
):
    """Get a post's comments, oldest first."""
    get_post(db, post_id)
    return (
        db.query(PostComment)
        .options(joinedload(PostComment.author))
        .filter(PostComment.post_id == post_id)
        .order_by(PostComment.created_at, PostComment.id)
        .all()
    )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Comment on a post."""
    get_post(db, post_id)

    comment = PostComment(post_id=post_id, user_id=current_user_id, content=comment_data.content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.delete(
    "/posts/{post_id}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_comment(
    post_id: str,
    comment_id: str,
    current_user_id: CurrentUserId,
    db: DbSession,
):
    """Delete one of the caller's own comments."""
    comment = get_owned(
        db, PostComment, comment_id, current_user_id, "Comment not found", post_id=post_id
    )
    db.delete(comment)
    db.commit()
