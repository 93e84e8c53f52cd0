"""Redirect-or-error outcomes raised by the page pipeline.

Nothing in the pipeline fails with an HTTP error page.  Every terminal
outcome of a request that does not produce a view model is a redirect:
to an error page carrying a short reason code, to the canonical URL of an
entry, or to the site root.  ``blog.main`` turns these into responses.
"""

from urllib.parse import quote


class RouteRedirect(Exception):
    """Base class: the request resolves to a redirect to *location*."""

    status_code = 302

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


class NotFoundError(RouteRedirect):
    """The slug, id or tag does not resolve to anything we can serve."""

    def __init__(self, reason: str):
        super().__init__(f"/not-found?err={quote(reason)}")
        self.reason = reason


class StaleSlug(RouteRedirect):
    """The entry exists but lives at another (canonical) slug."""

    status_code = 301

    def __init__(self, slug: str):
        super().__init__(f"/entry/{slug}")
        self.slug = slug


class PageOutOfRange(RouteRedirect):
    """Requested listing page is outside ``[1, max_page]``."""

    def __init__(self, page: int, max_page: int):
        super().__init__("/")
        self.page = page
        self.max_page = max_page


class DuplicateTitle(ValueError):
    """An entry with the same title already exists."""
