from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class ProjectCreate(BaseModel):
    name: str
    slug: Optional[str] = None
    icon: Optional[str] = None

class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    icon: Optional[str] = None

class ProjectRead(BaseModel):
    id: str
    name: str
    slug: str
    icon: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProjectConfigUpdate(BaseModel):
    changelog_preview_style: Optional[str] = None
    changelog_twitter_handle: Optional[str] = None
    integration_discord_status: Optional[bool] = None
    integration_discord_webhook: Optional[str] = None
    integration_discord_role_id: Optional[str] = None

class ProjectConfigRead(BaseModel):
    changelog_preview_style: str
    changelog_twitter_handle: Optional[str] = None
    integration_discord_status: bool
    integration_discord_webhook: Optional[str] = None
    integration_discord_role_id: Optional[str] = None

    class Config:
        from_attributes = True
