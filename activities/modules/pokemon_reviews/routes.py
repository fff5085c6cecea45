from fastapi import APIRouter, Depends
from activities.core.listing import SortBy
from activities.core.reviews import ReviewSave
from activities.modules.pokemon_reviews.schemas import PokemonReviewResponse, PokemonReviewThread
from activities.modules.pokemon_reviews.service import PokemonReviewService
from activities.core.dependencies import get_current_user_id, get_optional_user, get_user_supabase
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/pokemon", tags=["pokemon-reviews"])


def get_pokemon_review_service(supabase: Client = Depends(get_user_supabase)) -> PokemonReviewService:
    return PokemonReviewService(supabase)


@router.get("/reviews", response_model=List[PokemonReviewResponse])
async def list_pokemon_reviews(
    sort: SortBy = "date",
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: PokemonReviewService = Depends(get_pokemon_review_service)
):
    """All Pokemon reviews. sort=name orders by Pokemon name."""
    return service.list_all_reviews(user_data["id"] if user_data else None, sort_by=sort)


@router.delete("/reviews/{review_id}", status_code=204)
async def delete_pokemon_review(
    review_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PokemonReviewService = Depends(get_pokemon_review_service)
):
    service.delete_review(review_id, user_data)
    return None


@router.get("/{identifier}", response_model=PokemonReviewThread)
async def get_pokemon(
    identifier: str,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: PokemonReviewService = Depends(get_pokemon_review_service)
):
    """Search a Pokemon by name or id and return its reviews"""
    return service.get_thread(identifier, user_data["id"] if user_data else None)


@router.put("/{identifier}/review", response_model=PokemonReviewThread)
async def save_pokemon_review(
    identifier: str,
    review_data: ReviewSave,
    user_data: Dict = Depends(get_current_user_id),
    service: PokemonReviewService = Depends(get_pokemon_review_service)
):
    """Create or replace the caller's review of a Pokemon"""
    return service.save_review(identifier, review_data, user_data)
