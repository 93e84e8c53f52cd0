from fastapi import APIRouter, Depends, Request

from blog.config import SiteConfig
from blog.dependencies import get_repository, get_site, limiter
from blog.models.pages import TagIndexPage, TagPage
from blog.models.records import TagType
from blog.services.composer import compose_tag_index_page, compose_tag_page
from blog.services.tags import aggregate_tag_by_slug
from blog.store import Repository

router = APIRouter(tags=["Tags"])


def _tag_page(repo: Repository, site: SiteConfig, tag_type: TagType, slug: str) -> TagPage:
    summary = aggregate_tag_by_slug(repo, site, tag_type, slug)
    return compose_tag_page(repo, site, summary)


@router.get("/tag/{slug}", response_model=TagPage, summary="Entries with a tag")
@limiter.limit("120/minute")
def tag_page(
    request: Request,
    slug: str,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagPage:
    return _tag_page(repo, site, TagType.general, slug)


@router.get("/category/{slug}", response_model=TagPage, summary="Entries in a category")
@limiter.limit("120/minute")
def category_page(
    request: Request,
    slug: str,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagPage:
    return _tag_page(repo, site, TagType.category, slug)


@router.get("/series/{slug}", response_model=TagPage, summary="Entries in a series")
@limiter.limit("120/minute")
def series_page(
    request: Request,
    slug: str,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagPage:
    return _tag_page(repo, site, TagType.series, slug)


@router.get("/tags", response_model=TagIndexPage, summary="All tags")
@limiter.limit("60/minute")
def tag_index_page(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagIndexPage:
    return compose_tag_index_page(repo, site, TagType.general)


@router.get("/categories", response_model=TagIndexPage, summary="All categories")
@limiter.limit("60/minute")
def category_index_page(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagIndexPage:
    return compose_tag_index_page(repo, site, TagType.category)


@router.get("/series", response_model=TagIndexPage, summary="All series")
@limiter.limit("60/minute")
def series_index_page(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> TagIndexPage:
    return compose_tag_index_page(repo, site, TagType.series)
