from pydantic import BaseModel, Field
from typing import Iterable, Optional, Tuple

DEFAULT_RATING = 5


class ReviewSave(BaseModel):
    review: str
    rating: int = Field(DEFAULT_RATING, ge=1, le=5)


def draft_for(reviews: Iterable, user_id: Optional[str]) -> Tuple[str, int]:
    """Text and rating to pre-fill the review form: the caller's existing review, else blank / 5 stars."""
    if user_id:
        for review in reviews:
            if review.user_id == user_id:
                return review.review, review.rating
    return "", DEFAULT_RATING
