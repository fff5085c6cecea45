from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class PhotoRename(BaseModel):
    name: str


class PhotoResponse(BaseModel):
    id: str
    user_id: str
    name: str
    url: str
    storage_path: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
