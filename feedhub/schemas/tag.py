from pydantic import BaseModel

class TagCreate(BaseModel):
    name: str
    color: str = "#a1a1aa"

class TagRead(BaseModel):
    name: str
    color: str

    class Config:
        from_attributes = True
