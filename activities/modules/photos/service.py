from supabase import Client
from activities.config import settings
from activities.core.listing import SortBy, order_for, matches_search
from activities.database.storage import SupabaseStorage, build_object_key
from activities.modules.photos.schemas import PhotoRename, PhotoResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PhotoService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.storage = SupabaseStorage(supabase, settings.photos_bucket)

    def list_photos(
        self,
        user_id: Optional[str],
        sort_by: SortBy = "date",
        search: Optional[str] = None
    ) -> List[PhotoResponse]:
        """List the user's photos sorted by name or date, optionally filtered by name"""
        if not user_id:
            return []
        column, desc = order_for(sort_by)
        try:
            result = self.supabase.table("photos")\
                .select("*")\
                .eq("user_id", user_id)\
                .order(column, desc=desc)\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch photos: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        photos = [PhotoResponse(**p) for p in result.data or []]
        if search:
            photos = [p for p in photos if matches_search(p.name, search)]
        return photos

    def get_photo(self, photo_id: str, user_id: str) -> PhotoResponse:
        try:
            result = self.supabase.table("photos")\
                .select("*")\
                .eq("id", photo_id)\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Photo not found")
            return PhotoResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch photo {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def upload_photo(
        self,
        file_content: bytes,
        filename: Optional[str],
        content_type: Optional[str],
        user_id: str
    ) -> PhotoResponse:
        """Store the file, then record its metadata. A failed insert leaves the stored object behind."""
        storage_path = build_object_key(user_id, filename)
        try:
            self.storage.upload_file(file_content, storage_path, content_type)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to upload photo: {str(e)}")

        public_url = self.storage.get_public_url(storage_path)
        try:
            result = self.supabase.table("photos").insert({
                "user_id": user_id,
                "name": (filename or "").strip() or "Untitled Photo",
                "url": public_url,
                "storage_path": storage_path
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save photo metadata")
            logger.info(f"Uploaded photo {storage_path}")
            return PhotoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to save photo metadata for {storage_path}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to save photo metadata: {str(e)}")

    def rename_photo(self, photo_id: str, rename_data: PhotoRename, user_id: str) -> PhotoResponse:
        name = rename_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        try:
            result = self.supabase.table("photos")\
                .update({"name": name})\
                .eq("id", photo_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Photo not found")
            return PhotoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to rename photo {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_photo(self, photo_id: str, user_id: str) -> bool:
        """Remove the stored object, then the row. The row is kept if the object could not be removed."""
        photo = self.get_photo(photo_id, user_id)
        if not self.storage.delete_file(photo.storage_path):
            raise HTTPException(status_code=500, detail="Failed to delete photo from storage")
        try:
            result = self.supabase.table("photos")\
                .delete()\
                .eq("id", photo_id)\
                .eq("user_id", user_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete photo record {photo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
