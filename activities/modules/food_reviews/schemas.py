from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List


class FoodPhotoRename(BaseModel):
    name: str


class FoodPhotoResponse(BaseModel):
    id: str
    user_id: str
    name: str
    url: str
    storage_path: str
    owner_email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FoodReviewResponse(BaseModel):
    id: str
    user_id: str
    food_photo_id: str
    review: str
    rating: int
    reviewer_email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FoodReviewThread(BaseModel):
    food_photo_id: str
    reviews: List[FoodReviewResponse]
    draft_review: str = ""
    draft_rating: int = 5
