from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from feedhub.db.base import Base
from feedhub.db.models.project import new_id

class Changelog(Base):
    __tablename__ = "changelogs"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String, nullable=True)
    title = Column(String, nullable=False, default="")
    slug = Column(String, nullable=False)
    summary = Column(String, nullable=True)
    content = Column(String, nullable=True)
    image = Column(String, nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    publish_date = Column(DateTime(timezone=True), nullable=True)

    project = relationship("Project", back_populates="changelogs")

    __table_args__ = (
        UniqueConstraint("project_id", "slug", name="uq_project_changelog_slug"),
    )
