"""Slug generation and slug/id resolution."""

import logging
from typing import Optional

from blog.errors import NotFoundError, StaleSlug
from blog.models.records import Entry
from blog.store import Repository

logger = logging.getLogger(__name__)


def gen_slug(words: Optional[int], text: str, fallback: str = "entry") -> str:
    """Return a URL slug built from the first *words* tokens of *text*.

    Case is folded, every non-alphanumeric character becomes a separator,
    and runs of separators collapse to a single hyphen.  ``words=None``
    keeps every token.  Text with no alphanumeric characters at all gets
    *fallback*.

    >>> gen_slug(2, "Hello, World!!!")
    'hello-world'
    """
    folded = "".join(c if c.isalnum() else "-" for c in text.casefold())
    tokens = [t for t in folded.strip("-").split("-") if t]
    if words is not None:
        tokens = tokens[:words]
    return "-".join(tokens) or fallback


def gen_slug_suffix(words: Optional[int], text: str, n: int) -> str:
    """The *n*-th candidate slug for *text*: the bare slug, then ``-1``, ``-2``..."""
    base = gen_slug(words, text)
    return base if n == 0 else f"{base}-{n}"


def unique_slug(repo: Repository, text: str, words: Optional[int], entry_key: Optional[int] = None) -> str:
    """Return the first candidate slug for *text* that is free.

    A candidate already owned by *entry_key* counts as free, so re-slugging
    an entry back to an old title reuses its old slug.
    """
    n = 0
    while True:
        candidate = gen_slug_suffix(words, text, n)
        existing = repo.find_slug(candidate)
        if existing is None or (entry_key is not None and existing.entry_key == entry_key):
            return candidate
        n += 1


def resolve_slug(repo: Repository, text: str) -> Entry:
    """Resolve a requested slug to the entry it should serve.

    Raises:
        NotFoundError: no such slug (``SlugNotFound``) or the slug points at
            an entry that no longer exists (``SlugHasNoEntry``).
        StaleSlug: the slug is a historical alias; the caller redirects to
            the entry's current slug.
    """
    normalized = gen_slug(None, text)
    slug = repo.find_slug(normalized)
    if slug is None:
        logger.warning("Slug not found", extra={"slug": text})
        raise NotFoundError("SlugNotFound")

    entry = repo.get_entry(slug.entry_key)
    if entry is None:
        logger.warning(
            "Slug has no entry", extra={"slug": slug.slug, "entry_key": slug.entry_key}
        )
        raise NotFoundError("SlugHasNoEntry")

    current = repo.get_current_slug(entry.key)
    if current is not None and current.slug != text:
        logger.info("Redirecting stale slug %s -> %s", text, current.slug)
        raise StaleSlug(current.slug)

    # No current slug at all: serve the entry rather than fail.
    return entry


def resolve_entry_id(repo: Repository, key: int) -> Entry:
    """Resolve a numeric entry id.

    An entry with a current slug is always redirected to it; only an entry
    with no slug at all is served from its id URL.
    """
    entry = repo.get_entry(key)
    if entry is None:
        logger.warning("Entry id not found", extra={"entry_key": key})
        raise NotFoundError("entryIdNotFound")

    current = repo.get_current_slug(key)
    if current is not None:
        raise StaleSlug(current.slug)

    logger.warning("Entry %d has no current slug", key)
    return entry


def entry_url(repo: Repository, entry: Entry) -> str:
    """Site-relative canonical URL of *entry*."""
    current = repo.get_current_slug(entry.key)
    if current is None:
        return f"/entry/id/{entry.key}"
    return f"/entry/{current.slug}"
