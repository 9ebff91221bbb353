from feedhub.db.models.project import Project, ProjectConfig
from feedhub.db.models.tag import FeedbackTag, feedback_tag_links
from feedhub.db.models.feedback import Feedback, FeedbackUpvoter
from feedhub.db.models.changelog import Changelog

__all__ = [
    "Project",
    "ProjectConfig",
    "FeedbackTag",
    "feedback_tag_links",
    "Feedback",
    "FeedbackUpvoter",
    "Changelog",
]
