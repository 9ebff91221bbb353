from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.db.models import FeedbackTag, feedback_tag_links
from feedhub.schemas.tag import TagCreate, TagRead
from feedhub.core.services import get_project_or_404

router = APIRouter(prefix="/api/v1/projects/{slug}/tags", tags=["tags"])


@router.get("/", response_model=List[TagRead])
async def list_tags(slug: str, db: AsyncSession = Depends(get_db)):
    project = await get_project_or_404(db, slug)
    result = await db.execute(
        select(FeedbackTag).where(FeedbackTag.project_id == project.id).order_by(FeedbackTag.name)
    )
    return result.scalars().all()


@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    slug: str,
    data: TagCreate,
    db: AsyncSession = Depends(get_db),
):
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Tag name is required")

    project = await get_project_or_404(db, slug)
    existing = await db.execute(
        select(FeedbackTag).where(
            FeedbackTag.project_id == project.id,
            func.lower(FeedbackTag.name) == name.lower(),
        )
    )
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Tag already exists")

    tag = FeedbackTag(project_id=project.id, name=name, color=data.color)
    db.add(tag)
    await db.commit()
    await db.refresh(tag)
    return tag


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    slug: str,
    name: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a tag and detach it from all feedback."""
    project = await get_project_or_404(db, slug)
    result = await db.execute(
        select(FeedbackTag).where(
            FeedbackTag.project_id == project.id,
            func.lower(FeedbackTag.name) == name.lower(),
        )
    )
    tag = result.scalar_one_or_none()
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")

    await db.execute(delete(feedback_tag_links).where(feedback_tag_links.c.tag_id == tag.id))
    await db.delete(tag)
    await db.commit()
