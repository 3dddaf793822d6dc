"""Inkwell FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from inkwell.config import settings
from inkwell.core.dates import format_date
from inkwell.core.models import Found, NotFound, ParseFailed
from inkwell.core.renderer import highlight_css, render_markdown_with_toc
from inkwell.core.storage import FileStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: report where posts are read from."""
    if settings.data_dir.is_dir():
        logger.info("Serving posts from %s", settings.data_dir.resolve())
    else:
        logger.warning("Content directory %s does not exist", settings.data_dir)
    yield


# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
    lifespan=lifespan,
)

# Setup templates and static files
templates_path = Path(__file__).parent / "templates"
static_path = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(templates_path))
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

templates.env.filters["format_date"] = format_date

# Initialize storage
storage = FileStorage(settings.data_dir, suffix=settings.content_suffix)


# Template context helper
def get_context(request: Request, **kwargs) -> dict:
    """Create base context for templates."""
    return {
        "request": request,
        "app_title": settings.app_title,
        **kwargs,
    }


def not_found_response(request: Request, slug: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "not_found.html",
        get_context(request, slug=slug),
        status_code=404,
    )


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, q: str = "", limit: int = Query(default=0, ge=0)):
    """Home page - list posts, newest first, optionally filtered by title."""
    posts = await storage.search_posts(q, limit=limit or settings.home_limit)

    # HTMX search box swaps just the result list
    if request.headers.get("HX-Request"):
        return templates.TemplateResponse(
            request,
            "partials/post_list.html",
            {"posts": posts, "query": q},
        )
    return templates.TemplateResponse(
        request,
        "index.html",
        get_context(request, posts=posts, query=q),
    )


@app.get("/blog/{slug}", response_class=HTMLResponse)
async def view_post(request: Request, slug: str):
    """View a single post."""
    result = await storage.get_post(slug)

    if isinstance(result, ParseFailed):
        logger.warning("Post %s is unreadable: %s", slug, result.detail)
        return not_found_response(request, slug)
    if isinstance(result, NotFound):
        return not_found_response(request, slug)

    post = result.post
    html_content, toc_html = render_markdown_with_toc(post.content)
    return templates.TemplateResponse(
        request,
        "post.html",
        get_context(
            request,
            post=post,
            html_content=html_content,
            toc_html=toc_html,
        ),
    )


@app.get("/assets/highlight.css")
async def highlight_stylesheet():
    """Pygments stylesheet for code blocks."""
    return PlainTextResponse(
        highlight_css(settings.highlight_style), media_type="text/css"
    )


# ========== JSON API ==========


@app.get("/api/posts")
async def api_posts(q: str = "", limit: int = Query(default=0, ge=0)):
    """Post metadata, newest first."""
    posts = await storage.search_posts(q, limit=limit)
    return [p.dump() for p in posts]


@app.get("/api/posts/{slug}")
async def api_post(slug: str):
    """Single post: metadata and raw markdown body."""
    result = await storage.get_post(slug)
    if isinstance(result, ParseFailed):
        raise HTTPException(status_code=422, detail=result.detail)
    if not isinstance(result, Found):
        raise HTTPException(status_code=404, detail="Post not found")
    return {"metadata": result.post.metadata.dump(), "content": result.post.content}
