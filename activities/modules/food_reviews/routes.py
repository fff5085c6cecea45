from fastapi import APIRouter, Depends, UploadFile, File
from activities.core.listing import SortBy
from activities.core.reviews import ReviewSave
from activities.modules.food_reviews.schemas import FoodPhotoRename, FoodPhotoResponse, FoodReviewThread
from activities.modules.food_reviews.service import FoodReviewService
from activities.core.dependencies import get_current_user_id, get_optional_user, get_user_supabase
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/food-photos", tags=["food-reviews"])


def get_food_review_service(supabase: Client = Depends(get_user_supabase)) -> FoodReviewService:
    return FoodReviewService(supabase)


@router.get("", response_model=List[FoodPhotoResponse])
async def list_food_photos(
    sort: SortBy = "date",
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: FoodReviewService = Depends(get_food_review_service)
):
    """List food photos from all users"""
    return service.list_photos(user_data["id"] if user_data else None, sort_by=sort)


@router.post("", response_model=FoodPhotoResponse, status_code=201)
async def upload_food_photo(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: FoodReviewService = Depends(get_food_review_service)
):
    content = await file.read()
    return service.upload_photo(content, file.filename, file.content_type, user_data)


@router.put("/{photo_id}", response_model=FoodPhotoResponse)
async def rename_food_photo(
    photo_id: str,
    rename_data: FoodPhotoRename,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodReviewService = Depends(get_food_review_service)
):
    """Rename a food photo (uploader only)"""
    return service.rename_photo(photo_id, rename_data, user_data)


@router.delete("/{photo_id}", status_code=204)
async def delete_food_photo(
    photo_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodReviewService = Depends(get_food_review_service)
):
    """Delete a food photo and its stored image (uploader only)"""
    service.delete_photo(photo_id, user_data)
    return None


@router.get("/{photo_id}/reviews", response_model=FoodReviewThread)
async def list_food_reviews(
    photo_id: str,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: FoodReviewService = Depends(get_food_review_service)
):
    """Reviews for a photo, with the caller's own review pre-filled as the draft"""
    return service.list_reviews(photo_id, user_data["id"] if user_data else None)


@router.put("/{photo_id}/reviews", response_model=FoodReviewThread)
async def save_food_review(
    photo_id: str,
    review_data: ReviewSave,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodReviewService = Depends(get_food_review_service)
):
    """Create or replace the caller's review of a photo"""
    return service.save_review(photo_id, review_data, user_data)


@router.delete("/reviews/{review_id}", status_code=204)
async def delete_food_review(
    review_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodReviewService = Depends(get_food_review_service)
):
    service.delete_review(review_id, user_data)
    return None
