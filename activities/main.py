import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from activities.config import settings
from activities.core.session import SessionMiddleware
from activities.modules.auth import routes as auth_routes
from activities.modules.todos import routes as todos_routes
from activities.modules.photos import routes as photos_routes
from activities.modules.food_reviews import routes as food_reviews_routes
from activities.modules.pokemon_reviews import routes as pokemon_reviews_routes
from activities.modules.notes import routes as notes_routes
from activities.modules.pages import routes as pages_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit],
    enabled=settings.rate_limit_enabled,
)
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"] = list(message["headers"]) + [
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ]
            await send(message)

        await self.app(scope, receive, send_with_headers)


# Last added runs first: CORS, then security headers, then session gating, then default rate limits
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SessionMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# JSON API
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(todos_routes.router, prefix="/api/v1")
app.include_router(photos_routes.router, prefix="/api/v1")
app.include_router(food_reviews_routes.router, prefix="/api/v1")
app.include_router(pokemon_reviews_routes.router, prefix="/api/v1")
app.include_router(notes_routes.router, prefix="/api/v1")

# Pages
app.include_router(pages_routes.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready"}
