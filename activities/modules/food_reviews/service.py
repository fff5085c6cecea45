from supabase import Client
from activities.config import settings
from activities.core.dependencies import check_row_owner
from activities.core.listing import SortBy, order_for
from activities.core.reviews import ReviewSave, draft_for
from activities.database.storage import SupabaseStorage, build_object_key
from activities.modules.food_reviews.schemas import (
    FoodPhotoRename, FoodPhotoResponse, FoodReviewResponse, FoodReviewThread
)
from typing import List, Optional, Dict
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class FoodReviewService:
    """Shared food photo feed plus one review per user per photo."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.storage = SupabaseStorage(supabase, settings.food_photos_bucket)

    def list_photos(self, user_id: Optional[str], sort_by: SortBy = "date") -> List[FoodPhotoResponse]:
        """List every user's food photos"""
        if not user_id:
            return []
        column, desc = order_for(sort_by)
        try:
            result = self.supabase.table("food_photos")\
                .select("*")\
                .order(column, desc=desc)\
                .execute()
            return [FoodPhotoResponse(**p) for p in result.data or []]
        except Exception as e:
            logger.error(f"Failed to fetch food photos: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_photo(self, photo_id: str) -> FoodPhotoResponse:
        try:
            result = self.supabase.table("food_photos")\
                .select("*")\
                .eq("id", photo_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Food photo not found")
            return FoodPhotoResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch food photo {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def upload_photo(
        self,
        file_content: bytes,
        filename: Optional[str],
        content_type: Optional[str],
        user_data: Dict
    ) -> FoodPhotoResponse:
        storage_path = build_object_key(user_data["id"], filename)
        try:
            self.storage.upload_file(file_content, storage_path, content_type)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to upload food photo: {str(e)}")

        public_url = self.storage.get_public_url(storage_path)
        try:
            result = self.supabase.table("food_photos").insert({
                "user_id": user_data["id"],
                "name": (filename or "").strip() or "Untitled Food Photo",
                "url": public_url,
                "storage_path": storage_path,
                "owner_email": user_data.get("email")
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save food photo metadata")
            logger.info(f"Uploaded food photo {storage_path}")
            return FoodPhotoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to save food photo metadata for {storage_path}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save food photo metadata: {str(e)}")

    def rename_photo(self, photo_id: str, rename_data: FoodPhotoRename, user_data: Dict) -> FoodPhotoResponse:
        name = rename_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        photo = self.get_photo(photo_id)
        check_row_owner(photo.model_dump(), user_data, "food photos")
        try:
            result = self.supabase.table("food_photos")\
                .update({"name": name})\
                .eq("id", photo_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Food photo not found")
            return FoodPhotoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to rename food photo {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_photo(self, photo_id: str, user_data: Dict) -> bool:
        """Remove the stored object, then the row. The row is kept if the object could not be removed."""
        photo = self.get_photo(photo_id)
        check_row_owner(photo.model_dump(), user_data, "food photos")
        if not self.storage.delete_file(photo.storage_path):
            raise HTTPException(status_code=500, detail="Failed to delete food photo from storage")
        try:
            result = self.supabase.table("food_photos")\
                .delete()\
                .eq("id", photo_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete food photo {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_reviews(self, photo_id: str, user_id: Optional[str]) -> FoodReviewThread:
        """Reviews for one photo, newest first, with the caller's draft"""
        if not user_id:
            return FoodReviewThread(food_photo_id=photo_id, reviews=[])
        self.get_photo(photo_id)
        try:
            result = self.supabase.table("food_reviews")\
                .select("*")\
                .eq("food_photo_id", photo_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch food reviews for {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        reviews = [FoodReviewResponse(**r) for r in result.data or []]
        draft_review, draft_rating = draft_for(reviews, user_id)
        return FoodReviewThread(
            food_photo_id=photo_id,
            reviews=reviews,
            draft_review=draft_review,
            draft_rating=draft_rating
        )

    def save_review(self, photo_id: str, review_data: ReviewSave, user_data: Dict) -> FoodReviewThread:
        """Insert or overwrite the caller's review of a photo"""
        text = review_data.review.strip()
        if not text:
            raise HTTPException(status_code=400, detail="Review is required")
        self.get_photo(photo_id)
        try:
            self.supabase.table("food_reviews").upsert(
                {
                    "user_id": user_data["id"],
                    "food_photo_id": photo_id,
                    "review": text,
                    "rating": review_data.rating,
                    "reviewer_email": user_data.get("email")
                },
                on_conflict="food_photo_id,user_id"
            ).execute()
        except Exception as e:
            logger.error(f"Failed to save food review for {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return self.list_reviews(photo_id, user_data["id"])

    def delete_review(self, review_id: str, user_data: Dict) -> bool:
        try:
            result = self.supabase.table("food_reviews")\
                .select("*")\
                .eq("id", review_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch food review {review_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Review not found")
        check_row_owner(result.data, user_data, "reviews")
        try:
            deleted = self.supabase.table("food_reviews")\
                .delete()\
                .eq("id", review_id)\
                .execute()
            return len(deleted.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete food review {review_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
