from fastapi import APIRouter, Depends, HTTPException
from activities.modules.notes.schemas import NoteCreate, NoteUpdate, NoteResponse
from activities.modules.notes.service import NoteService
from activities.core.dependencies import get_current_user_id, get_optional_user, get_user_supabase
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_service(supabase: Client = Depends(get_user_supabase)) -> NoteService:
    return NoteService(supabase)


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: NoteService = Depends(get_note_service)
):
    return service.list_notes(user_data["id"] if user_data else None)


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    note_data: NoteCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service)
):
    return service.create_note(note_data, user_data["id"])


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    note_data: NoteUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service)
):
    """Replace a note's title and content"""
    return service.update_note(note_id, note_data, user_data["id"])


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NoteService = Depends(get_note_service)
):
    if not service.delete_note(note_id, user_data["id"]):
        raise HTTPException(status_code=404, detail="Note not found")
    return None
