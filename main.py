import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from routers import (
    auth as auth_router,
    bookmarks as bookmarks_router,
    flashcard as flashcard_router,
    translate as translate_router,
    words as words_router,
)
from routers.auth import optional_principal, security
from core.config import settings
from core.database import Base, engine, get_db
from core.errors import register_error_handlers
from schemas.auth import Principal
from services.bookmark_services import BookmarkService
from services.catalog_services import WordCatalog, get_catalog
from models import bookmark, dailyWordSet, selectedWord, translationCache, user, userProgress, word  # noqa: F401
import uvicorn

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

WORDS_PAGE_LIMIT = 200


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Dictionary app started (database: %s)", engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(title="Bilingual Dictionary", lifespan=lifespan)
security.handle_errors(app)
register_error_handlers(app)
templates = Jinja2Templates(directory=BASE_DIR / "templates")
app.mount("/static", StaticFiles(directory=BASE_DIR / "frontend"), name="static")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)
app.include_router(translate_router.router)
app.include_router(bookmarks_router.router)
app.include_router(flashcard_router.router)
app.include_router(words_router.router)


def _login_redirect() -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=303)


@app.get("/", response_class=HTMLResponse, name="home")
async def home(request: Request, principal: Principal | None = Depends(optional_principal)):
    return templates.TemplateResponse(
        request,
        "home.html",
        {"active_page": "home", "principal": principal},
    )


@app.get("/login", response_class=HTMLResponse, name="login_page")
async def login_page(request: Request):
    return templates.TemplateResponse(request, "auth.html", {"mode": "login"})


@app.get("/signup", response_class=HTMLResponse, name="signup_page")
async def signup_page(request: Request):
    return templates.TemplateResponse(request, "auth.html", {"mode": "signup"})


@app.get("/bookmarks", response_class=HTMLResponse, name="bookmarks_page")
async def bookmarks_page(
    request: Request,
    q: str = "",
    principal: Principal | None = Depends(optional_principal),
    db: Session = Depends(get_db),
):
    if principal is None:
        return _login_redirect()
    bookmarks = BookmarkService(db).search(user_id=principal.id, query=q)
    return templates.TemplateResponse(
        request,
        "bookmarks.html",
        {"active_page": "bookmarks", "principal": principal, "bookmarks": bookmarks, "query": q},
    )


@app.get("/words", response_class=HTMLResponse, name="words_page")
async def words_page(
    request: Request,
    q: str = "",
    principal: Principal | None = Depends(optional_principal),
    catalog: WordCatalog = Depends(get_catalog),
):
    matches = catalog.search(q)
    return templates.TemplateResponse(
        request,
        "words.html",
        {
            "active_page": "words",
            "principal": principal,
            "query": q,
            "total": len(matches),
            "words": matches[:WORDS_PAGE_LIMIT],
        },
    )


@app.get("/flashcards/select", response_class=HTMLResponse, name="flashcards_select_page")
async def flashcards_select_page(request: Request, principal: Principal | None = Depends(optional_principal)):
    if principal is None:
        return _login_redirect()
    return templates.TemplateResponse(
        request,
        "flashcards_select.html",
        {"active_page": "flashcards", "principal": principal},
    )


@app.get("/flashcards/learn", response_class=HTMLResponse, name="flashcards_learn_page")
async def flashcards_learn_page(
    request: Request,
    mode: str = "daily",
    principal: Principal | None = Depends(optional_principal),
):
    if principal is None:
        return _login_redirect()
    return templates.TemplateResponse(
        request,
        "flashcards_learn.html",
        {"active_page": "flashcards", "principal": principal, "history_mode": mode == "history"},
    )


@app.get("/offline", response_class=HTMLResponse, name="offline_page")
async def offline_page(request: Request):
    return templates.TemplateResponse(request, "offline.html", {})


@app.get("/sw.js", include_in_schema=False)
async def service_worker():
    return FileResponse(BASE_DIR / "frontend" / "sw.js", media_type="application/javascript")


@app.get("/status")
async def status():
    return {"status": "ok"}

if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
