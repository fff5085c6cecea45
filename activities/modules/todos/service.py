from supabase import Client
from activities.modules.todos.schemas import TodoCreate, TodoResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_todos(self, user_id: Optional[str]) -> List[TodoResponse]:
        """List the user's todos, newest first"""
        if not user_id:
            return []
        try:
            result = self.supabase.table("todos")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [TodoResponse(**t) for t in result.data or []]
        except Exception as e:
            logger.error(f"Failed to fetch todos: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_todo(self, todo_data: TodoCreate, user_id: str) -> TodoResponse:
        title = todo_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Title is required")
        try:
            result = self.supabase.table("todos").insert({
                "title": title,
                "user_id": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create todo")

            return TodoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to create todo: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_todo(self, todo_id: str, user_id: str) -> TodoResponse:
        try:
            result = self.supabase.table("todos")\
                .select("*")\
                .eq("id", todo_id)\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Todo not found")
            return TodoResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch todo {todo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_todo(self, todo_id: str, user_id: str) -> TodoResponse:
        """Flip the completion flag"""
        todo = self.get_todo(todo_id, user_id)
        try:
            result = self.supabase.table("todos")\
                .update({"completed": not todo.completed})\
                .eq("id", todo_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Todo not found")

            return TodoResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to toggle todo {todo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_todo(self, todo_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("todos")\
                .delete()\
                .eq("id", todo_id)\
                .eq("user_id", user_id)\
                .execute()

            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Failed to delete todo {todo_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
