import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.db.models import Changelog, Project
from feedhub.schemas.changelog import ChangelogCreate, ChangelogRead, ChangelogUpdate
from feedhub.core.services import (
    apply_update,
    get_project_or_404,
    redis_notify_changelog_published,
    slugify,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{slug}/changelogs", tags=["changelogs"])


async def get_changelog_or_404(db: AsyncSession, project: Project, changelog_id: str) -> Changelog:
    result = await db.execute(
        select(Changelog).where(Changelog.id == changelog_id, Changelog.project_id == project.id)
    )
    changelog = result.scalar_one_or_none()
    if not changelog:
        raise HTTPException(status_code=404, detail="Changelog not found")
    return changelog


async def announce(request: Request, changelog: Changelog):
    """Queue the publish notification; the changelog must already be committed."""
    try:
        await redis_notify_changelog_published(request.app.state.redis, changelog.id)
    except Exception as e:
        logger.error(f"Failed to enqueue changelog notification for {changelog.id}: {e}", exc_info=True)


@router.get("/", response_model=List[ChangelogRead])
async def list_changelogs(
    slug: str,
    published: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
):
    """List changelogs, newest publish date first; drafts sort last."""
    project = await get_project_or_404(db, slug)
    query = select(Changelog).where(Changelog.project_id == project.id)
    if published is not None:
        query = query.where(Changelog.published == published)

    result = await db.execute(query)
    changelogs = result.scalars().all()
    return sorted(
        changelogs,
        key=lambda c: (c.publish_date is not None, c.publish_date or datetime.min),
        reverse=True,
    )


@router.post("/", response_model=ChangelogRead, status_code=status.HTTP_201_CREATED)
async def create_changelog(
    request: Request,
    slug: str,
    data: ChangelogCreate,
    db: AsyncSession = Depends(get_db),
):
    if not data.title.strip():
        raise HTTPException(status_code=400, detail="title is required when creating a changelog.")

    project = await get_project_or_404(db, slug)
    changelog_slug = slugify(data.slug or data.title)

    existing = await db.execute(
        select(Changelog).where(Changelog.project_id == project.id, Changelog.slug == changelog_slug)
    )
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Changelog slug already taken")

    changelog = Changelog(
        project_id=project.id,
        slug=changelog_slug,
        **data.model_dump(exclude={"slug"}),
    )
    if changelog.published and changelog.publish_date is None:
        changelog.publish_date = datetime.now(timezone.utc)
    db.add(changelog)
    await db.commit()
    await db.refresh(changelog)

    if changelog.published:
        await announce(request, changelog)
    return changelog


@router.get("/{changelog_id}", response_model=ChangelogRead)
async def get_changelog(slug: str, changelog_id: str, db: AsyncSession = Depends(get_db)):
    project = await get_project_or_404(db, slug)
    return await get_changelog_or_404(db, project, changelog_id)


@router.patch("/{changelog_id}", response_model=ChangelogRead)
async def update_changelog(
    request: Request,
    slug: str,
    changelog_id: str,
    data: ChangelogUpdate,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    changelog = await get_changelog_or_404(db, project, changelog_id)
    was_published = changelog.published

    apply_update(changelog, data, required=("title", "published"))
    if changelog.title is not None and not changelog.title.strip():
        raise HTTPException(status_code=400, detail="Title cannot be empty")

    newly_published = changelog.published and not was_published
    if newly_published and changelog.publish_date is None:
        changelog.publish_date = datetime.now(timezone.utc)

    await db.commit()
    await db.refresh(changelog)

    if newly_published:
        await announce(request, changelog)
    return changelog


@router.delete("/{changelog_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_changelog(slug: str, changelog_id: str, db: AsyncSession = Depends(get_db)):
    project = await get_project_or_404(db, slug)
    changelog = await get_changelog_or_404(db, project, changelog_id)
    await db.delete(changelog)
    await db.commit()
