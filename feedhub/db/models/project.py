import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from feedhub.db.base import Base

def new_id() -> str:
    return str(uuid.uuid4())

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    config = relationship(
        "ProjectConfig", back_populates="project", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    feedback = relationship("Feedback", back_populates="project", cascade="all, delete-orphan")
    tags = relationship("FeedbackTag", back_populates="project", cascade="all, delete-orphan")
    changelogs = relationship("Changelog", back_populates="project", cascade="all, delete-orphan")


class ProjectConfig(Base):
    __tablename__ = "project_configs"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, unique=True)
    changelog_preview_style = Column(String, nullable=False, default="summary")
    changelog_twitter_handle = Column(String, nullable=True)
    integration_discord_status = Column(Boolean, nullable=False, default=False)
    integration_discord_webhook = Column(String, nullable=True)
    integration_discord_role_id = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    project = relationship("Project", back_populates="config")
