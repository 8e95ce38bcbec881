from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from forum.database import get_db
from forum.models import Comment, User
from forum.schemas import MetricsResponse
from forum.cache import cache

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])

@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):

    total_users = (await db.execute(select(func.count()).select_from(User))).scalar_one()

    total_moderators = (
        await db.execute(select(func.count()).select_from(User).where(User.is_moderator.is_(True)))
    ).scalar_one()

    total_comments = (await db.execute(select(func.count()).select_from(Comment))).scalar_one()

    return MetricsResponse(
        total_users=total_users,
        total_moderators=total_moderators,
        total_comments=total_comments,
        cache_info=cache.stats,
    )
