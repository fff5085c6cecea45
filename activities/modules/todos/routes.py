from fastapi import APIRouter, Depends, HTTPException
from activities.modules.todos.schemas import TodoCreate, TodoResponse
from activities.modules.todos.service import TodoService
from activities.core.dependencies import get_current_user_id, get_optional_user, get_user_supabase
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/todos", tags=["todos"])


def get_todo_service(supabase: Client = Depends(get_user_supabase)) -> TodoService:
    return TodoService(supabase)


@router.get("", response_model=List[TodoResponse])
async def list_todos(
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: TodoService = Depends(get_todo_service)
):
    """List the caller's todos (empty when signed out)"""
    return service.list_todos(user_data["id"] if user_data else None)


@router.post("", response_model=TodoResponse, status_code=201)
async def create_todo(
    todo_data: TodoCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service)
):
    return service.create_todo(todo_data, user_data["id"])


@router.post("/{todo_id}/toggle", response_model=TodoResponse)
async def toggle_todo(
    todo_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service)
):
    """Mark a todo done, or undone"""
    return service.toggle_todo(todo_id, user_data["id"])


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(
    todo_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TodoService = Depends(get_todo_service)
):
    if not service.delete_todo(todo_id, user_data["id"]):
        raise HTTPException(status_code=404, detail="Todo not found")
    return None
