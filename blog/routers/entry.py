import logging

from fastapi import APIRouter, Depends, Request

from blog.config import SiteConfig
from blog.dependencies import get_repository, get_site, limiter
from blog.models.pages import EntryPage
from blog.services.composer import compose_entry_page
from blog.services.slugs import resolve_entry_id, resolve_slug
from blog.store import Repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Entries"])


@router.get(
    "/entry/id/{entry_id}",
    response_model=EntryPage,
    summary="Entry by numeric id",
    description=(
        "Redirects (301) to the entry's canonical slug URL.  Only an entry "
        "without any slug is served directly from this URL."
    ),
)
@limiter.limit("120/minute")
def entry_by_id(
    request: Request,
    entry_id: int,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> EntryPage:
    entry = resolve_entry_id(repo, entry_id)
    return compose_entry_page(repo, site, entry)


@router.get(
    "/entry/{slug}",
    response_model=EntryPage,
    summary="Entry by slug",
    description=(
        "Serves the entry whose current slug is *slug*.  Historical slugs "
        "redirect (301) to the current one; unknown slugs redirect to "
        "`/not-found`."
    ),
)
@limiter.limit("120/minute")
def entry_by_slug(
    request: Request,
    slug: str,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> EntryPage:
    logger.info("Entry request", extra={"slug": slug})
    entry = resolve_slug(repo, slug)
    return compose_entry_page(repo, site, entry)
