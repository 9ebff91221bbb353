from pydantic import BaseModel

class SystemStats(BaseModel):
    projects: int
    feedback: int
    upvotes: int
    changelogs: int
