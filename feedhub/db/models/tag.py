from sqlalchemy import Column, String, DateTime, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from feedhub.db.base import Base
from feedhub.db.models.project import new_id, utcnow

feedback_tag_links = Table(
    "feedback_tag_links",
    Base.metadata,
    Column("feedback_id", String(36), ForeignKey("feedback.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("feedback_tags.id", ondelete="CASCADE"), primary_key=True),
)

class FeedbackTag(Base):
    __tablename__ = "feedback_tags"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    project = relationship("Project", back_populates="tags")

    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_project_tag_name"),
    )
