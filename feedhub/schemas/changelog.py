from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class ChangelogCreate(BaseModel):
    title: str
    slug: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    author_id: Optional[str] = None
    published: bool = False
    publish_date: Optional[datetime] = None

class ChangelogUpdate(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    published: Optional[bool] = None
    publish_date: Optional[datetime] = None

class ChangelogRead(BaseModel):
    id: str
    title: str
    slug: str
    summary: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    author_id: Optional[str] = None
    published: bool
    publish_date: Optional[datetime] = None

    class Config:
        from_attributes = True
