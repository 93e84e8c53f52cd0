from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import Response

from blog.config import SiteConfig
from blog.dependencies import get_repository, get_site, limiter
from blog.models.pages import ArchivePage
from blog.services.composer import compose_archive_page
from blog.services.feed import render_rss
from blog.store import Repository

router = APIRouter(tags=["Archive"])


@router.get("/entries", response_model=ArchivePage, summary="All entries by year and month")
@limiter.limit("60/minute")
def archive(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> ArchivePage:
    return compose_archive_page(repo, site)


@router.get("/entries/in/{year}", response_model=ArchivePage, summary="Entries posted in a year")
@limiter.limit("60/minute")
def archive_year(
    request: Request,
    year: int = Path(ge=1),
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> ArchivePage:
    return compose_archive_page(repo, site, year=year)


@router.get(
    "/entries/in/{year}/{month}", response_model=ArchivePage, summary="Entries posted in a month"
)
@limiter.limit("60/minute")
def archive_month(
    request: Request,
    year: int = Path(ge=1),
    month: int = Path(ge=1, le=12),
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> ArchivePage:
    return compose_archive_page(repo, site, year=year, month=month)


@router.get("/rss", summary="RSS feed of the newest entries")
@limiter.limit("30/minute")
def rss(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> Response:
    return Response(content=render_rss(repo, site), media_type="application/rss+xml")
