"""Request-scoped access to the site configuration and repository."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from blog.config import SiteConfig
from blog.store import Repository

limiter = Limiter(key_func=get_remote_address)


def get_site(request: Request) -> SiteConfig:
    return request.app.state.site


def get_repository(request: Request) -> Repository:
    return request.app.state.repository
