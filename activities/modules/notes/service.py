from supabase import Client
from activities.modules.notes.schemas import NoteCreate, NoteUpdate, NoteResponse
from typing import List, Optional, Union
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _require_title_and_content(note_data: Union[NoteCreate, NoteUpdate]) -> None:
    if not note_data.title.strip() or not note_data.content.strip():
        raise HTTPException(status_code=400, detail="Title and content are required")


class NoteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_notes(self, user_id: Optional[str]) -> List[NoteResponse]:
        """List the user's notes, most recently edited first"""
        if not user_id:
            return []
        try:
            result = self.supabase.table("notes")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("updated_at", desc=True)\
                .execute()
            return [NoteResponse(**n) for n in result.data or []]
        except Exception as e:
            logger.error(f"Failed to fetch notes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_note(self, note_data: NoteCreate, user_id: str) -> NoteResponse:
        _require_title_and_content(note_data)
        try:
            result = self.supabase.table("notes").insert({
                "user_id": user_id,
                "title": note_data.title,
                "content": note_data.content
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create note")
            return NoteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to create note: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_note(self, note_id: str, note_data: NoteUpdate, user_id: str) -> NoteResponse:
        _require_title_and_content(note_data)
        try:
            result = self.supabase.table("notes")\
                .update({
                    "title": note_data.title,
                    "content": note_data.content,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", note_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Note not found")
            return NoteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to update note {note_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_note(self, note_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("notes")\
                .delete()\
                .eq("id", note_id)\
                .eq("user_id", user_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete note {note_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
