from fastapi import APIRouter, Depends, UploadFile, File
from activities.core.listing import SortBy
from activities.modules.photos.schemas import PhotoRename, PhotoResponse
from activities.modules.photos.service import PhotoService
from activities.core.dependencies import get_current_user_id, get_optional_user, get_user_supabase
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/photos", tags=["photos"])


def get_photo_service(supabase: Client = Depends(get_user_supabase)) -> PhotoService:
    return PhotoService(supabase)


@router.get("", response_model=List[PhotoResponse])
async def list_photos(
    sort: SortBy = "date",
    search: Optional[str] = None,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: PhotoService = Depends(get_photo_service)
):
    """List the caller's photos. sort=name is A-Z, sort=date is newest first."""
    return service.list_photos(user_data["id"] if user_data else None, sort_by=sort, search=search)


@router.post("", response_model=PhotoResponse, status_code=201)
async def upload_photo(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: PhotoService = Depends(get_photo_service)
):
    """Upload an image to storage and record it"""
    content = await file.read()
    return service.upload_photo(content, file.filename, file.content_type, user_data["id"])


@router.put("/{photo_id}", response_model=PhotoResponse)
async def rename_photo(
    photo_id: str,
    rename_data: PhotoRename,
    user_data: Dict = Depends(get_current_user_id),
    service: PhotoService = Depends(get_photo_service)
):
    return service.rename_photo(photo_id, rename_data, user_data["id"])


@router.delete("/{photo_id}", status_code=204)
async def delete_photo(
    photo_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PhotoService = Depends(get_photo_service)
):
    service.delete_photo(photo_id, user_data["id"])
    return None
