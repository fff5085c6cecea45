from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List


class PokemonResponse(BaseModel):
    id: int
    name: str
    sprite_url: str


class PokemonReviewResponse(BaseModel):
    id: str
    user_id: str
    pokemon_id: int
    pokemon_name: str
    review: str
    rating: int
    reviewer_email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PokemonReviewThread(BaseModel):
    pokemon: PokemonResponse
    reviews: List[PokemonReviewResponse]
    draft_review: str = ""
    draft_rating: int = 5
