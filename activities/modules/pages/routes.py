"""Server-rendered pages. The session middleware has already resolved `request.state.user`."""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from supabase import Client

from activities.core.dependencies import get_auth_service, get_user_supabase
from activities.core.listing import SortBy
from activities.core.reviews import ReviewSave
from activities.core.session import set_session_cookies, clear_session_cookies
from activities.modules.auth.schemas import LoginRequest, RegisterRequest
from activities.modules.auth.service import AuthService
from activities.modules.food_reviews.schemas import FoodPhotoRename
from activities.modules.food_reviews.service import FoodReviewService
from activities.modules.notes.schemas import NoteCreate, NoteUpdate
from activities.modules.notes.service import NoteService
from activities.modules.photos.schemas import PhotoRename
from activities.modules.photos.service import PhotoService
from activities.modules.pokemon_reviews.service import PokemonReviewService
from activities.modules.todos.schemas import TodoCreate
from activities.modules.todos.service import TodoService

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter(tags=["pages"], include_in_schema=False)

ACTIVITIES = [
    {
        "title": "Todo List",
        "description": "Manage your tasks with a simple and efficient todo list",
        "href": "/todos",
    },
    {
        "title": "Google Drive Lite",
        "description": "Store and manage your photos with search and sort features",
        "href": "/photos",
    },
    {
        "title": "Food Review",
        "description": "Share food photos and write reviews",
        "href": "/food-review",
    },
    {
        "title": "Pokemon Review",
        "description": "Search for Pokemon and share your reviews",
        "href": "/pokemon-review",
    },
    {
        "title": "Markdown Notes",
        "description": "Create and manage notes with Markdown support",
        "href": "/notes",
    },
]

T = TypeVar("T")


def _session_user_id(request: Request) -> Optional[str]:
    user = getattr(request.state, "user", None)
    return user["id"] if user else None


def _load(what: str, fetch: Callable[[], T], fallback: T) -> T:
    """Run a read for a page; on failure log it and render the fallback."""
    try:
        return fetch()
    except HTTPException as e:
        logger.error(f"Failed to load {what}: {e.detail}")
        return fallback


def _session_user(request: Request) -> Dict[str, Any]:
    return request.state.user


def _submit(what: str, action: Callable[[], Any]) -> Optional[str]:
    """Run a write for a page; on failure log it and return the message to show."""
    try:
        action()
        return None
    except ValidationError as e:
        logger.warning(f"Rejected {what}: {e}")
        return "Invalid input"
    except HTTPException as e:
        logger.error(f"Failed to {what}: {e.detail}")
        return str(e.detail)


def _back(path: str, error: Optional[str] = None, **params) -> RedirectResponse:
    """Redirect (303) to the page the form was posted from, carrying any error in the query string"""
    query = {k: v for k, v in params.items() if v}
    if error:
        query["error"] = error
    return RedirectResponse(url=f"{path}?{urlencode(query)}" if query else path, status_code=303)


def _render(request: Request, name: str, context: dict, status_code: int = 200):
    context = {
        "activities": ACTIVITIES,
        "user": getattr(request.state, "user", None),
        "path": request.url.path,
        **context,
    }
    return templates.TemplateResponse(request, name, context, status_code=status_code)


@router.get("/")
async def home(request: Request):
    return _render(request, "home.html", {})


@router.get("/login")
async def login_page(request: Request):
    return _render(request, "login.html", {"error": None})


@router.post("/login")
async def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        tokens = auth_service.login(LoginRequest(email=email, password=password))
    except ValidationError:
        return _render(request, "login.html", {"error": "Enter a valid email address"}, status_code=400)
    except HTTPException as e:
        return _render(request, "login.html", {"error": e.detail}, status_code=e.status_code)
    response = RedirectResponse(url="/", status_code=303)
    set_session_cookies(response, tokens)
    return response


@router.get("/register")
async def register_page(request: Request):
    return _render(request, "register.html", {"error": None, "message": None})


@router.post("/register")
async def register_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    full_name: Optional[str] = Form(None),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        registration = RegisterRequest(email=email, password=password, full_name=full_name)
        auth_service.register(registration)
    except ValidationError:
        return _render(request, "register.html", {"error": "Enter a valid email address", "message": None}, status_code=400)
    except HTTPException as e:
        return _render(request, "register.html", {"error": e.detail, "message": None}, status_code=e.status_code)
    return _render(request, "register.html", {"error": None, "message": "Account created. You can now sign in."})


@router.post("/logout")
async def logout(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    token = getattr(request.state, "access_token", None)
    if token:
        auth_service.logout(token)
    response = RedirectResponse(url="/login", status_code=303)
    clear_session_cookies(response)
    return response


@router.get("/todos")
async def todos_page(request: Request, supabase: Client = Depends(get_user_supabase)):
    service = TodoService(supabase)
    todos = _load("todos", lambda: service.list_todos(_session_user_id(request)), [])
    return _render(request, "todos.html", {"todos": todos})


@router.get("/photos")
async def photos_page(
    request: Request,
    sort: SortBy = "date",
    search: Optional[str] = None,
    supabase: Client = Depends(get_user_supabase)
):
    service = PhotoService(supabase)
    photos = _load(
        "photos",
        lambda: service.list_photos(_session_user_id(request), sort_by=sort, search=search),
        []
    )
    return _render(request, "photos.html", {"photos": photos, "sort": sort, "search": search or ""})


@router.get("/food-review")
async def food_review_page(
    request: Request,
    sort: SortBy = "date",
    photo: Optional[str] = None,
    supabase: Client = Depends(get_user_supabase)
):
    service = FoodReviewService(supabase)
    user_id = _session_user_id(request)
    photos = _load("food photos", lambda: service.list_photos(user_id, sort_by=sort), [])
    selected = next((p for p in photos if p.id == photo), None)
    thread = None
    if selected is not None:
        thread = _load("food reviews", lambda: service.list_reviews(selected.id, user_id), None)
    return _render(request, "food_review.html", {
        "photos": photos,
        "sort": sort,
        "selected": selected,
        "thread": thread,
    })


@router.get("/pokemon-review")
async def pokemon_review_page(
    request: Request,
    sort: SortBy = "date",
    q: Optional[str] = None,
    supabase: Client = Depends(get_user_supabase)
):
    service = PokemonReviewService(supabase)
    user_id = _session_user_id(request)
    all_reviews: List = _load("pokemon reviews", lambda: service.list_all_reviews(user_id, sort_by=sort), [])
    thread = None
    if q and q.strip():
        thread = _load(f"pokemon {q}", lambda: service.get_thread(q, user_id), None)
    return _render(request, "pokemon_review.html", {
        "all_reviews": all_reviews,
        "sort": sort,
        "q": q or "",
        "thread": thread,
    })


@router.get("/notes")
async def notes_page(request: Request, supabase: Client = Depends(get_user_supabase)):
    service = NoteService(supabase)
    notes = _load("notes", lambda: service.list_notes(_session_user_id(request)), [])
    return _render(request, "notes.html", {"notes": notes})


# Form posts: each one writes through the same service as the API, then redirects back to re-read the page.

@router.post("/todos")
async def todos_create(request: Request, title: str = Form(""), supabase: Client = Depends(get_user_supabase)):
    service = TodoService(supabase)
    user = _session_user(request)
    error = _submit("create todo", lambda: service.create_todo(TodoCreate(title=title), user["id"]))
    return _back("/todos", error)


@router.post("/todos/{todo_id}/toggle")
async def todos_toggle(request: Request, todo_id: str, supabase: Client = Depends(get_user_supabase)):
    service = TodoService(supabase)
    user = _session_user(request)
    error = _submit("toggle todo", lambda: service.toggle_todo(todo_id, user["id"]))
    return _back("/todos", error)


@router.post("/todos/{todo_id}/delete")
async def todos_delete(request: Request, todo_id: str, supabase: Client = Depends(get_user_supabase)):
    service = TodoService(supabase)
    user = _session_user(request)
    error = _submit("delete todo", lambda: service.delete_todo(todo_id, user["id"]))
    return _back("/todos", error)


@router.post("/photos")
async def photos_upload(
    request: Request,
    file: UploadFile = File(...),
    supabase: Client = Depends(get_user_supabase)
):
    service = PhotoService(supabase)
    user = _session_user(request)
    content = await file.read()
    error = _submit(
        "upload photo",
        lambda: service.upload_photo(content, file.filename, file.content_type, user["id"])
    )
    return _back("/photos", error)


@router.post("/photos/{photo_id}/rename")
async def photos_rename(
    request: Request,
    photo_id: str,
    name: str = Form(""),
    supabase: Client = Depends(get_user_supabase)
):
    service = PhotoService(supabase)
    user = _session_user(request)
    error = _submit("rename photo", lambda: service.rename_photo(photo_id, PhotoRename(name=name), user["id"]))
    return _back("/photos", error)


@router.post("/photos/{photo_id}/delete")
async def photos_delete(request: Request, photo_id: str, supabase: Client = Depends(get_user_supabase)):
    service = PhotoService(supabase)
    user = _session_user(request)
    error = _submit("delete photo", lambda: service.delete_photo(photo_id, user["id"]))
    return _back("/photos", error)


@router.post("/food-review")
async def food_review_upload(
    request: Request,
    file: UploadFile = File(...),
    supabase: Client = Depends(get_user_supabase)
):
    service = FoodReviewService(supabase)
    user = _session_user(request)
    content = await file.read()
    error = _submit(
        "upload food photo",
        lambda: service.upload_photo(content, file.filename, file.content_type, user)
    )
    return _back("/food-review", error)


@router.post("/food-review/{photo_id}/rename")
async def food_review_rename(
    request: Request,
    photo_id: str,
    name: str = Form(""),
    supabase: Client = Depends(get_user_supabase)
):
    service = FoodReviewService(supabase)
    user = _session_user(request)
    error = _submit("rename food photo", lambda: service.rename_photo(photo_id, FoodPhotoRename(name=name), user))
    return _back("/food-review", error, photo=photo_id)


@router.post("/food-review/{photo_id}/delete")
async def food_review_delete(request: Request, photo_id: str, supabase: Client = Depends(get_user_supabase)):
    service = FoodReviewService(supabase)
    user = _session_user(request)
    error = _submit("delete food photo", lambda: service.delete_photo(photo_id, user))
    return _back("/food-review", error)


@router.post("/food-review/{photo_id}/review")
async def food_review_save(
    request: Request,
    photo_id: str,
    review: str = Form(""),
    rating: int = Form(5),
    supabase: Client = Depends(get_user_supabase)
):
    service = FoodReviewService(supabase)
    user = _session_user(request)
    error = _submit(
        "save food review",
        lambda: service.save_review(photo_id, ReviewSave(review=review, rating=rating), user)
    )
    return _back("/food-review", error, photo=photo_id)


@router.post("/food-review/reviews/{review_id}/delete")
async def food_review_delete_review(
    request: Request,
    review_id: str,
    photo: Optional[str] = Form(None),
    supabase: Client = Depends(get_user_supabase)
):
    service = FoodReviewService(supabase)
    user = _session_user(request)
    error = _submit("delete food review", lambda: service.delete_review(review_id, user))
    return _back("/food-review", error, photo=photo)


@router.post("/pokemon-review/{identifier}/review")
async def pokemon_review_save(
    request: Request,
    identifier: str,
    review: str = Form(""),
    rating: int = Form(5),
    supabase: Client = Depends(get_user_supabase)
):
    service = PokemonReviewService(supabase)
    user = _session_user(request)
    error = _submit(
        "save pokemon review",
        lambda: service.save_review(identifier, ReviewSave(review=review, rating=rating), user)
    )
    return _back("/pokemon-review", error, q=identifier)


@router.post("/pokemon-review/reviews/{review_id}/delete")
async def pokemon_review_delete(
    request: Request,
    review_id: str,
    q: Optional[str] = Form(None),
    supabase: Client = Depends(get_user_supabase)
):
    service = PokemonReviewService(supabase)
    user = _session_user(request)
    error = _submit("delete pokemon review", lambda: service.delete_review(review_id, user))
    return _back("/pokemon-review", error, q=q)


@router.post("/notes")
async def notes_create(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    supabase: Client = Depends(get_user_supabase)
):
    service = NoteService(supabase)
    user = _session_user(request)
    error = _submit("create note", lambda: service.create_note(NoteCreate(title=title, content=content), user["id"]))
    return _back("/notes", error)


@router.post("/notes/{note_id}")
async def notes_update(
    request: Request,
    note_id: str,
    title: str = Form(""),
    content: str = Form(""),
    supabase: Client = Depends(get_user_supabase)
):
    service = NoteService(supabase)
    user = _session_user(request)
    error = _submit(
        "update note",
        lambda: service.update_note(note_id, NoteUpdate(title=title, content=content), user["id"])
    )
    return _back("/notes", error)


@router.post("/notes/{note_id}/delete")
async def notes_delete(request: Request, note_id: str, supabase: Client = Depends(get_user_supabase)):
    service = NoteService(supabase)
    user = _session_user(request)
    error = _submit("delete note", lambda: service.delete_note(note_id, user["id"]))
    return _back("/notes", error)
