from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TodoCreate(BaseModel):
    title: str


class TodoResponse(BaseModel):
    id: str
    user_id: str
    title: str
    completed: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
