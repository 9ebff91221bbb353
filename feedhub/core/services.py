import logging
import re
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.core.board import FeedbackCard, Tag
from feedhub.core.statuses import Status, parse_status
from feedhub.db.models import Feedback, Project
from feedhub.db.models.project import utcnow

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


# --- Background job helpers --- #
async def redis_notify_status_change(redis, feedback_id: str, status: str):
    await redis.enqueue_job("notify_status_change", feedback_id, status)

async def redis_notify_changelog_published(redis, changelog_id: str):
    await redis.enqueue_job("notify_changelog_published", changelog_id)


def slugify(text: str) -> str:
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


async def get_project_or_404(db: AsyncSession, slug: str) -> Project:
    result = await db.execute(select(Project).where(Project.slug == slug))
    project = result.scalar_one_or_none()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def get_feedback_or_404(db: AsyncSession, project: Project, feedback_id: str) -> Feedback:
    result = await db.execute(
        select(Feedback).where(Feedback.id == feedback_id, Feedback.project_id == project.id)
    )
    feedback = result.scalar_one_or_none()
    if not feedback:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return feedback


def require_status(label: Optional[str]) -> Status:
    status = parse_status(label)
    if status is None:
        raise HTTPException(status_code=400, detail=f"Unknown status: {label}")
    return status


def has_upvoted(feedback: Feedback, viewer: Optional[str]) -> bool:
    if not viewer:
        return False
    return any(u.profile_id == viewer for u in feedback.upvoters)


def serialize_feedback(feedback: Feedback, viewer: Optional[str] = None) -> dict:
    return {
        "id": feedback.id,
        "title": feedback.title,
        "description": feedback.description,
        "status": feedback.status,
        "upvotes": feedback.upvotes,
        "has_upvoted": has_upvoted(feedback, viewer),
        "comment_count": feedback.comment_count,
        "user_id": feedback.user_id,
        "tags": [{"name": t.name, "color": t.color} for t in feedback.tags],
        "created_at": feedback.created_at,
    }


def to_card(feedback: Feedback, viewer: Optional[str] = None) -> FeedbackCard:
    return FeedbackCard(
        id=feedback.id,
        title=feedback.title,
        status=feedback.status,
        upvotes=feedback.upvotes,
        has_upvoted=has_upvoted(feedback, viewer),
        tags=tuple(Tag(name=t.name, color=t.color) for t in feedback.tags),
    )


async def record_status_change(db: AsyncSession, redis, feedback_id: str, status: Status) -> bool:
    """Persist a feedback status change and queue the integrations.

    Returns False when the feedback no longer exists. A failure to enqueue
    the notification is logged; the stored status stands.
    """
    feedback = await db.get(Feedback, feedback_id)
    if not feedback:
        logger.warning(f"Feedback {feedback_id} vanished before status change to {status.key}")
        return False

    feedback.status = status.key
    feedback.moved_at = utcnow()
    await db.commit()
    logger.info(f"Feedback {feedback_id} moved to {status.key}")

    try:
        await redis_notify_status_change(redis, feedback_id, status.key)
    except Exception as e:
        logger.error(f"Failed to enqueue status notification for {feedback_id}: {e}", exc_info=True)
    return True


def apply_update(target, data, required=()) -> None:
    """Copy the fields a client sent onto a model; null is a 400 for required fields."""
    changes = data.model_dump(exclude_unset=True)
    nulled = sorted(f for f in required if f in changes and changes[f] is None)
    if nulled:
        raise HTTPException(status_code=400, detail=f"Fields cannot be null: {', '.join(nulled)}")

    for field, value in changes.items():
        setattr(target, field, value)
