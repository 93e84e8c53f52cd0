from fastapi import APIRouter, Depends, Request

from blog.config import SiteConfig
from blog.dependencies import get_repository, get_site, limiter
from blog.models.pages import HomePage
from blog.services.composer import compose_home_page
from blog.services.pagination import plan_page
from blog.store import Repository

router = APIRouter(tags=["Home"])


def _home(repo: Repository, site: SiteConfig, page: int, allow_empty: bool = False) -> HomePage:
    plan = plan_page(
        repo.count_published_entries(), site.prefs.home_entries, page, allow_empty=allow_empty
    )
    return compose_home_page(repo, site, plan)


@router.get("/", response_model=HomePage, summary="Home page (newest entries)")
@limiter.limit("120/minute")
def home(
    request: Request,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> HomePage:
    # The root renders even for an empty blog; it is where out-of-range pages go.
    return _home(repo, site, 1, allow_empty=True)


@router.get(
    "/page/{page}",
    response_model=HomePage,
    summary="Paginated home listing",
    description="Pages outside `[1, max_page]` redirect to `/`.",
)
@limiter.limit("120/minute")
def home_page(
    request: Request,
    page: int,
    repo: Repository = Depends(get_repository),
    site: SiteConfig = Depends(get_site),
) -> HomePage:
    return _home(repo, site, page)
