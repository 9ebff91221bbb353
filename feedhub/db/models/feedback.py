from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from feedhub.db.base import Base
from feedhub.db.models.project import new_id, utcnow
from feedhub.db.models.tag import FeedbackTag, feedback_tag_links

class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, nullable=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="open")  # lower-cased status label
    upvotes = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    moved_at = Column(DateTime(timezone=True), nullable=True)  # last status change

    project = relationship("Project", back_populates="feedback")
    tags = relationship(
        "FeedbackTag", secondary=feedback_tag_links, order_by=FeedbackTag.name, lazy="selectin",
    )
    upvoters = relationship(
        "FeedbackUpvoter", back_populates="feedback", cascade="all, delete-orphan", lazy="selectin",
    )


class FeedbackUpvoter(Base):
    __tablename__ = "feedback_upvoters"

    id = Column(String(36), primary_key=True, default=new_id)
    feedback_id = Column(String(36), ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False)
    profile_id = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    feedback = relationship("Feedback", back_populates="upvoters")

    __table_args__ = (
        UniqueConstraint("feedback_id", "profile_id", name="uq_feedback_upvoter"),
    )
