from typing import List
from pydantic import BaseModel

from feedhub.schemas.tag import TagRead

class StatusOption(BaseModel):
    key: str
    label: str
    icon: str
    color: str

class RoadmapCard(BaseModel):
    id: str
    title: str
    status: str
    upvotes: int
    has_upvoted: bool
    tags: List[TagRead]

    class Config:
        from_attributes = True

class RoadmapColumn(StatusOption):
    items: List[RoadmapCard]

class RoadmapMove(BaseModel):
    item_id: str
    target: str

class RoadmapRead(BaseModel):
    columns: List[RoadmapColumn]
    moved: bool = False
