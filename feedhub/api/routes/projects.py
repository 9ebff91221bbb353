import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.db.models import Project, ProjectConfig
from feedhub.schemas.project import (
    ProjectConfigRead,
    ProjectConfigUpdate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from feedhub.core.services import apply_update, get_project_or_404, slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a project along with its default config."""
    if not data.name.strip():
        raise HTTPException(status_code=400, detail="name is required when creating a project.")

    slug = slugify(data.slug or data.name)
    if not slug:
        raise HTTPException(status_code=400, detail="Project slug is empty")

    existing = await db.execute(select(Project).where(Project.slug == slug))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Project slug already taken")

    project = Project(name=data.name.strip(), slug=slug, icon=data.icon)
    project.config = ProjectConfig()
    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info(f"Created project {slug}")
    return project


@router.get("/", response_model=list[ProjectRead])
async def list_projects(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Project).order_by(Project.created_at.desc()))
    return result.scalars().all()


@router.get("/{slug}", response_model=ProjectRead)
async def get_project(slug: str, db: AsyncSession = Depends(get_db)):
    return await get_project_or_404(db, slug)


@router.patch("/{slug}", response_model=ProjectRead)
async def update_project(
    slug: str,
    data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)

    if data.name is not None:
        if not data.name.strip():
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        project.name = data.name.strip()
    if data.icon is not None:
        project.icon = data.icon

    await db.commit()
    await db.refresh(project)
    return project


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(slug: str, db: AsyncSession = Depends(get_db)):
    """Delete a project along with its feedback, tags and changelogs."""
    project = await get_project_or_404(db, slug)
    await db.delete(project)
    await db.commit()
    logger.info(f"Deleted project {slug}")


@router.get("/{slug}/config", response_model=ProjectConfigRead)
async def get_project_config(slug: str, db: AsyncSession = Depends(get_db)):
    project = await get_project_or_404(db, slug)
    return project.config


@router.patch("/{slug}/config", response_model=ProjectConfigRead)
async def update_project_config(
    slug: str,
    data: ProjectConfigUpdate,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    config = project.config

    apply_update(
        config, data, required=("changelog_preview_style", "integration_discord_status"),
    )

    await db.commit()
    await db.refresh(config)
    return config
