import logging
from pathlib import Path

from fastapi import FastAPI, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .api.deps import get_db
from .api.public import router as public_router
from .api.v1.api import api_router
from .content.categories import CategoryRegistry
from .content.locale import DEFAULT_LANG, SUPPORTED_LANGS
from .content.mock_data import MOCK_POSTS
from .core.exceptions import AuthRequired, BackendQueryError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# First path segments served without a language prefix
UNPREFIXED_SEGMENTS = {
    "api", "admin", "login", "storage", "health", "db-test",
    "docs", "redoc", "openapi.json", "sitemap.xml", "favicon.ico",
}

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG
)

# Immutable lookup tables, built once and injected via app.api.deps
app.state.category_registry = CategoryRegistry.default()
app.state.fallback_posts = MOCK_POSTS


@app.middleware("http")
async def locale_redirect(request: Request, call_next):
    """Send paths without a language prefix to the English version."""
    path = request.url.path
    first = path.lstrip("/").split("/", 1)[0]
    if first not in SUPPORTED_LANGS and first not in UNPREFIXED_SEGMENTS:
        target = f"/{DEFAULT_LANG}{path if path != '/' else ''}"
        if request.url.query:
            target = f"{target}?{request.url.query}"
        return RedirectResponse(url=target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return await call_next(request)


@app.exception_handler(AuthRequired)
async def auth_required_handler(request: Request, exc: AuthRequired):
    """Browsers go to the login page; API clients get a 401."""
    if "text/html" in request.headers.get("accept", ""):
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.detail},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(BackendQueryError)
async def backend_query_error_handler(request: Request, exc: BackendQueryError):
    logger.error(f"[{(exc.view or 'page').upper()}] Backend error: {exc.error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Error loading content",
            "hint": "Please try again later.",
        },
    )


# Uploaded images: /storage/<bucket>/<path>
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/storage", StaticFiles(directory=settings.UPLOAD_DIR), name="storage")


# Health check endpoint
@app.get("/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


# Database test endpoint
@app.get("/db-test")
def test_database(db: Session = Depends(get_db)):
    """Test database connection"""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "success",
            "message": "Database connection successful",
        }
    except Exception as e:
        return {
            "status": "error",
            "message": str(e)
        }


@app.get("/login")
def login_page():
    """Where unauthenticated admin browsers land."""
    return {
        "message": "Sign in to the admin console",
        "login_endpoint": "/api/v1/auth/login",
    }


app.include_router(api_router)
# Catch-all /{lang}/... routes go last
app.include_router(public_router)
