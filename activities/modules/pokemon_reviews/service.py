from supabase import Client
from activities.core.dependencies import check_row_owner
from activities.core.listing import SortBy, order_for
from activities.core.reviews import ReviewSave, draft_for
from activities.modules.pokemon_reviews import pokeapi
from activities.modules.pokemon_reviews.schemas import (
    PokemonResponse, PokemonReviewResponse, PokemonReviewThread
)
from typing import List, Optional, Dict, Union
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PokemonReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def lookup(self, identifier: Union[str, int]) -> PokemonResponse:
        pokemon = pokeapi.fetch_pokemon(identifier)
        if pokemon is None:
            raise HTTPException(status_code=404, detail="Pokemon not found")
        return pokemon

    def list_all_reviews(self, user_id: Optional[str], sort_by: SortBy = "date") -> List[PokemonReviewResponse]:
        """All users' reviews, by Pokemon name A-Z or newest first"""
        if not user_id:
            return []
        column, desc = order_for(sort_by, name_column="pokemon_name")
        try:
            result = self.supabase.table("pokemon_reviews")\
                .select("*")\
                .order(column, desc=desc)\
                .execute()
            return [PokemonReviewResponse(**r) for r in result.data or []]
        except Exception as e:
            logger.error(f"Failed to fetch pokemon reviews: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _reviews_for(self, pokemon_id: int) -> List[PokemonReviewResponse]:
        try:
            result = self.supabase.table("pokemon_reviews")\
                .select("*")\
                .eq("pokemon_id", pokemon_id)\
                .order("created_at", desc=True)\
                .execute()
            return [PokemonReviewResponse(**r) for r in result.data or []]
        except Exception as e:
            logger.error(f"Failed to fetch reviews for pokemon {pokemon_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_thread(self, identifier: Union[str, int], user_id: Optional[str]) -> PokemonReviewThread:
        """Look up a Pokemon and attach its reviews plus the caller's draft"""
        pokemon = self.lookup(identifier)
        reviews = self._reviews_for(pokemon.id) if user_id else []
        draft_review, draft_rating = draft_for(reviews, user_id)
        return PokemonReviewThread(
            pokemon=pokemon,
            reviews=reviews,
            draft_review=draft_review,
            draft_rating=draft_rating
        )

    def save_review(self, identifier: Union[str, int], review_data: ReviewSave, user_data: Dict) -> PokemonReviewThread:
        """Insert or overwrite the caller's review of a Pokemon"""
        text = review_data.review.strip()
        if not text:
            raise HTTPException(status_code=400, detail="Review is required")
        pokemon = self.lookup(identifier)
        try:
            self.supabase.table("pokemon_reviews").upsert(
                {
                    "user_id": user_data["id"],
                    "pokemon_id": pokemon.id,
                    "pokemon_name": pokemon.name,
                    "review": text,
                    "rating": review_data.rating,
                    "reviewer_email": user_data.get("email")
                },
                on_conflict="pokemon_id,user_id"
            ).execute()
        except Exception as e:
            logger.error(f"Failed to save review for pokemon {pokemon.id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        reviews = self._reviews_for(pokemon.id)
        draft_review, draft_rating = draft_for(reviews, user_data["id"])
        return PokemonReviewThread(
            pokemon=pokemon,
            reviews=reviews,
            draft_review=draft_review,
            draft_rating=draft_rating
        )

    def delete_review(self, review_id: str, user_data: Dict) -> bool:
        try:
            result = self.supabase.table("pokemon_reviews")\
                .select("*")\
                .eq("id", review_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch pokemon review {review_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Review not found")
        check_row_owner(result.data, user_data, "reviews")
        try:
            deleted = self.supabase.table("pokemon_reviews")\
                .delete()\
                .eq("id", review_id)\
                .execute()
            return len(deleted.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete pokemon review {review_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
