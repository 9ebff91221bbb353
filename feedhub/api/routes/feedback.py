import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.db.models import Feedback, FeedbackTag, FeedbackUpvoter, Project
from feedhub.schemas.feedback import FeedbackCreate, FeedbackRead, FeedbackUpdate, UpvoteToggle
from feedhub.core.filters import SORT_OPTIONS, filter_feedback, sort_feedback
from feedhub.core.services import (
    get_feedback_or_404,
    get_project_or_404,
    record_status_change,
    require_status,
    serialize_feedback,
)
from feedhub.core.statuses import Status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{slug}/feedback", tags=["feedback"])


async def resolve_tags(db: AsyncSession, project: Project, names: List[str]) -> List[FeedbackTag]:
    """Look up project tags by name, ignoring case. Unknown names are a 400."""
    wanted = {n.strip().lower() for n in names if n.strip()}
    if not wanted:
        return []

    result = await db.execute(
        select(FeedbackTag).where(
            FeedbackTag.project_id == project.id,
            func.lower(FeedbackTag.name).in_(wanted),
        )
    )
    tags = list(result.scalars().all())

    missing = wanted - {t.name.lower() for t in tags}
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown tags: {', '.join(sorted(missing))}")
    return tags


@router.post("/", response_model=FeedbackRead, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    slug: str,
    data: FeedbackCreate,
    db: AsyncSession = Depends(get_db),
):
    if not data.title or not data.title.strip():
        raise HTTPException(status_code=400, detail="title is required when creating feedback.")

    project = await get_project_or_404(db, slug)
    feedback_status = require_status(data.status) if data.status else Status.OPEN
    tags = await resolve_tags(db, project, data.tags)

    feedback = Feedback(
        project_id=project.id,
        user_id=data.user_id,
        title=data.title.strip(),
        description=data.description,
        status=feedback_status.key,
        tags=tags,
        upvoters=[],
    )
    db.add(feedback)
    await db.commit()
    await db.refresh(feedback)

    logger.info(f"New feedback {feedback.id} on project {slug}")
    return serialize_feedback(feedback, data.user_id)


@router.get("/", response_model=List[FeedbackRead])
async def list_feedback(
    slug: str,
    search: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma separated tag names"),
    status: Optional[str] = None,
    sort: str = Query("newest", description=f"One of {', '.join(SORT_OPTIONS)}"),
    viewer: Optional[str] = Query(None, description="Profile id used for has_upvoted"),
    db: AsyncSession = Depends(get_db),
):
    """List project feedback filtered by the dashboard query string."""
    if sort not in SORT_OPTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown sort: {sort}")

    project = await get_project_or_404(db, slug)
    result = await db.execute(select(Feedback).where(Feedback.project_id == project.id))

    feedback = filter_feedback(result.scalars().all(), search=search, tags=tags, status=status)
    return [serialize_feedback(f, viewer) for f in sort_feedback(feedback, sort)]


@router.get("/{feedback_id}", response_model=FeedbackRead)
async def get_feedback(
    slug: str,
    feedback_id: str,
    viewer: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    feedback = await get_feedback_or_404(db, project, feedback_id)
    return serialize_feedback(feedback, viewer)


@router.patch("/{feedback_id}", response_model=FeedbackRead)
async def update_feedback(
    request: Request,
    slug: str,
    feedback_id: str,
    data: FeedbackUpdate,
    viewer: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    feedback = await get_feedback_or_404(db, project, feedback_id)

    if data.title is not None:
        if not data.title.strip():
            raise HTTPException(status_code=400, detail="Title cannot be empty")
        feedback.title = data.title.strip()
    if data.description is not None:
        feedback.description = data.description
    if data.tags is not None:
        feedback.tags = await resolve_tags(db, project, data.tags)

    new_status = require_status(data.status) if data.status is not None else None
    if new_status is not None and new_status.key != feedback.status:
        await record_status_change(db, request.app.state.redis, feedback.id, new_status)
    else:
        await db.commit()

    await db.refresh(feedback)
    return serialize_feedback(feedback, viewer)


@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback(
    slug: str,
    feedback_id: str,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    feedback = await get_feedback_or_404(db, project, feedback_id)

    await db.delete(feedback)
    await db.commit()
    logger.info(f"Deleted feedback {feedback_id}")


@router.post("/{feedback_id}/upvotes", response_model=FeedbackRead)
async def toggle_upvote(
    slug: str,
    feedback_id: str,
    data: UpvoteToggle,
    db: AsyncSession = Depends(get_db),
):
    """Upvote the feedback for a profile, or take the upvote back."""
    project = await get_project_or_404(db, slug)
    feedback = await get_feedback_or_404(db, project, feedback_id)

    existing = next((u for u in feedback.upvoters if u.profile_id == data.profile_id), None)
    if existing:
        feedback.upvoters.remove(existing)
        feedback.upvotes = max(feedback.upvotes - 1, 0)
    else:
        feedback.upvoters.append(FeedbackUpvoter(profile_id=data.profile_id))
        feedback.upvotes = feedback.upvotes + 1

    await db.commit()
    return serialize_feedback(feedback, data.profile_id)


@router.get("/{feedback_id}/upvoters", response_model=List[str])
async def list_upvoters(
    slug: str,
    feedback_id: str,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    feedback = await get_feedback_or_404(db, project, feedback_id)
    return [u.profile_id for u in sorted(feedback.upvoters, key=lambda u: u.created_at)]
