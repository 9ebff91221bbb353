from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from feedhub.schemas.tag import TagRead

class FeedbackCreate(BaseModel):
    title: Optional[str] = None
    description: str = ""
    status: Optional[str] = None
    tags: List[str] = []
    user_id: Optional[str] = None

class FeedbackUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None

class UpvoteToggle(BaseModel):
    profile_id: str

class FeedbackRead(BaseModel):
    id: str
    title: str
    description: str
    status: str
    upvotes: int
    has_upvoted: bool = False
    comment_count: int = 0
    user_id: Optional[str] = None
    tags: List[TagRead] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
