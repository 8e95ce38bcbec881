"""
Comment service — threaded comments on posts.

Comment ids and timestamps are assigned here, before the insert, so the
caller knows the id as soon as the call returns and can reuse it when
retrying. Threads are stored flat: each comment optionally points at a
parent, and readers rebuild the tree from ``parent_id``.

Deleting a comment does not touch its replies; they stay in the thread
with a ``parent_id`` that no longer resolves. Edits and deletes perform
no ownership check.

Cached threads are dropped only after the write commits, so a concurrent
read cannot put the pre-commit thread back into the cache.
"""
import logging
import uuid
from datetime import datetime, timezone

from forum.cache import cache
from forum.config import settings
from forum.exceptions import NotFoundError
from forum.models import Comment
from forum.repositories.base import CommentStore
from forum.schemas import CommentCreate

logger = logging.getLogger(__name__)


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "id": str(comment.id),
        "post_id": str(comment.post_id),
        "user_id": comment.user_id,
        "content": comment.content,
        "timestamp": comment.timestamp.isoformat(),
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
    }


async def create_comment(
    store: CommentStore,
    post_id: uuid.UUID,
    data: CommentCreate,
) -> uuid.UUID:
    """Insert a new comment under *post_id* and return its generated id."""
    comment = Comment(
        id=uuid.uuid4(),
        post_id=post_id,
        user_id=data.user_id,
        content=data.content,
        timestamp=datetime.now(timezone.utc),
        parent_id=data.parent_id,
    )
    await store.insert_comment(comment)
    store.after_commit(lambda: cache.invalidate_post_comments(post_id))
    logger.info("Created comment %s on post %s", comment.id, post_id)
    return comment.id


async def get_comments_by_post(store: CommentStore, post_id: uuid.UUID) -> list[dict]:
    """Return every comment on *post_id*, oldest first."""
    cache_key = cache.post_comments_key(post_id)
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    comments = [_comment_to_dict(c) for c in await store.select_comments_by_post_id(post_id)]
    await cache.set(cache_key, comments, ttl=settings.CACHE_TTL_COMMENTS)
    return comments


async def update_comment(store: CommentStore, comment_id: uuid.UUID, content: str) -> uuid.UUID:
    """Replace the content of *comment_id*; id and timestamp are unchanged."""
    affected = await store.update_comment_content(comment_id, content)
    if affected == 0:
        raise NotFoundError("Comment not found", detail={"comment_id": str(comment_id)})
    store.after_commit(cache.invalidate_post_comments)
    logger.info("Updated comment %s", comment_id)
    return comment_id


async def delete_comment(store: CommentStore, comment_id: uuid.UUID) -> None:
    affected = await store.delete_comment_by_id(comment_id)
    if affected == 0:
        raise NotFoundError("Comment not found", detail={"comment_id": str(comment_id)})
    store.after_commit(cache.invalidate_post_comments)
    logger.info("Deleted comment %s", comment_id)
