import os
import uuid
import logging
from typing import Optional

from supabase import Client

logger = logging.getLogger(__name__)


def build_object_key(user_id: str, filename: Optional[str]) -> str:
    """Return `{user_id}/{uuid}.{ext}`, or `{user_id}/{uuid}` when the upload has no extension."""
    file_extension = os.path.splitext(filename or "")[1].lstrip(".")
    file_name = f"{uuid.uuid4()}.{file_extension}" if file_extension else str(uuid.uuid4())
    return f"{user_id}/{file_name}"


class SupabaseStorage:
    """Thin wrapper over one Supabase Storage bucket."""

    def __init__(self, supabase: Client, bucket_name: str):
        self.supabase = supabase
        self.bucket_name = bucket_name

    def _bucket(self):
        return self.supabase.storage.from_(self.bucket_name)

    def upload_file(self, file_content: bytes, key: str, content_type: Optional[str] = None) -> str:
        """Upload file to the bucket and return its storage path"""
        file_options = {"content-type": content_type} if content_type else None
        try:
            if file_options:
                self._bucket().upload(key, file_content, file_options=file_options)
            else:
                self._bucket().upload(key, file_content)
            return key
        except Exception as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {str(e)}")
            raise

    def get_public_url(self, key: str) -> str:
        return self._bucket().get_public_url(key)

    def delete_file(self, key: str) -> bool:
        """Delete file from the bucket"""
        try:
            self._bucket().remove([key])
            return True
        except Exception as e:
            logger.error(f"Failed to delete {key} from bucket {self.bucket_name}: {str(e)}")
            return False
