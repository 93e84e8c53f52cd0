import logging
import logging.config
import os

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from blog.config import load_site_config
from blog.dependencies import limiter
from blog.errors import RouteRedirect
from blog.routers.archive import router as archive_router
from blog.routers.entry import router as entry_router
from blog.routers.home import router as home_router
from blog.routers.tags import router as tags_router
from blog.services.content import load_content
from blog.store import InMemoryRepository

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": os.environ.get("BLOG_LOG_LEVEL", "INFO"), "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

site = load_site_config(os.environ.get("BLOG_CONFIG"))

app = FastAPI(
    title=site.title,
    description="Blog engine: entries by slug, paginated home, tag and archive pages, RSS.",
    version="1.0.0",
)

app.state.site = site
app.state.repository = InMemoryRepository()
load_content(app.state.repository, site)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RouteRedirect)
async def redirect_handler(request: Request, exc: RouteRedirect) -> RedirectResponse:
    logger.info(
        "Redirecting request",
        extra={"path": request.url.path, "location": exc.location, "status": exc.status_code},
    )
    return RedirectResponse(url=exc.location, status_code=exc.status_code)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(home_router)
app.include_router(entry_router)
app.include_router(tags_router)
app.include_router(archive_router)


@app.get("/not-found", summary="Error page for unresolvable URLs")
async def not_found(err: str = Query(default="", description="Short reason code.")) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "Not found.", "reason": err})


@app.get("/health", summary="Health check")
async def health() -> dict:
    return {"message": f"Hello from {site.title}"}
