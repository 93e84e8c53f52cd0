"""Creating, retitling, tagging and removing entries.

Slugs are only ever added or superseded here.  Retitling an entry keeps
its old slug as a non-current alias so existing links keep working (they
redirect), and removing an entry leaves its slugs behind.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from blog.config import SiteConfig
from blog.errors import DuplicateTitle
from blog.models.records import Entry, RemovedEntry, Tag, TagType
from blog.services.slugs import gen_slug, unique_slug
from blog.store import Repository

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_entry(
    repo: Repository,
    site: SiteConfig,
    title: str,
    content: str,
    image: Optional[str] = None,
    posted_at: Optional[datetime] = None,
    created_at: Optional[datetime] = None,
    modified_at: Optional[datetime] = None,
    identifier: Optional[str] = None,
) -> Entry:
    """Store a new entry and give it its first (current) slug."""
    if repo.find_entry_by_title(title) is not None:
        raise DuplicateTitle(f"An entry titled {title!r} already exists.")

    entry = repo.add_entry(
        title=title,
        content=content,
        image=image,
        created_at=created_at or _now(),
        posted_at=posted_at,
        modified_at=modified_at,
        identifier=identifier,
    )
    slug = unique_slug(repo, title, site.prefs.slug_length)
    repo.add_slug(entry.key, slug, is_current=True)
    logger.info("Created entry", extra={"entry_key": entry.key, "slug": slug})
    return entry


def retitle_entry(repo: Repository, site: SiteConfig, key: int, title: str) -> Entry:
    """Change an entry's title and move its canonical slug along with it."""
    entry = repo.get_entry(key)
    if entry is None:
        raise KeyError(key)
    other = repo.find_entry_by_title(title)
    if other is not None and other.key != key:
        raise DuplicateTitle(f"An entry titled {title!r} already exists.")

    updated = entry.model_copy(update={"title": title, "modified_at": _now()})
    repo.update_entry(updated)

    slug = unique_slug(repo, title, site.prefs.slug_length, entry_key=key)
    existing = repo.find_slug(slug)
    if existing is None:
        repo.add_slug(key, slug, is_current=True)
    elif not existing.is_current:
        repo.set_slug_current(slug, True)
    logger.info("Retitled entry", extra={"entry_key": key, "slug": slug})
    return updated


def add_alias(repo: Repository, entry_key: int, slug: str) -> None:
    """Register *slug* as a historical (redirecting) slug of an entry."""
    normalized = gen_slug(None, slug, fallback="")
    if not normalized:
        return
    existing = repo.find_slug(normalized)
    if existing is not None:
        if existing.entry_key != entry_key:
            logger.warning(
                "Alias %s already belongs to entry %d", normalized, existing.entry_key
            )
        return
    repo.add_slug(entry_key, normalized, is_current=False)


def get_or_create_tag(repo: Repository, tag_type: TagType, label: str, description: Optional[str] = None) -> Tag:
    """Existing tag for *label*, or a new one.

    Labels that only differ in case or punctuation share a slug and are
    the same tag; the first spelling seen is kept.
    """
    tag = repo.get_tag(tag_type, label)
    if tag is not None:
        return tag
    slug = gen_slug(None, label, fallback="tag")
    tag = repo.get_tag_by_slug(tag_type, slug)
    if tag is not None:
        return tag
    return repo.add_tag(label, tag_type, slug, description)


def tag_entry(repo: Repository, entry_key: int, tag_type: TagType, label: str) -> Tag:
    tag = get_or_create_tag(repo, tag_type, label)
    repo.add_entry_tag(entry_key, tag.key)
    return tag


def remove_entry(repo: Repository, key: int) -> RemovedEntry:
    """Take an entry down, keeping a snapshot of it.

    The entry's slugs are left in place, so links to it resolve to a
    ``SlugHasNoEntry`` error page rather than to a different entry.
    """
    entry = repo.get_entry(key)
    if entry is None:
        raise KeyError(key)

    tags = repo.get_tags_for_entry(key)
    slugs = repo.list_slugs_for_entry(key)
    removed = RemovedEntry(
        title=entry.title,
        content=entry.content,
        created_at=entry.created_at,
        posted_at=entry.posted_at,
        modified_at=entry.modified_at,
        removed_at=_now(),
        identifier=entry.identifier,
        tag_list=",".join(t.display_label for t in tags),
        slug_list=",".join(s.slug for s in slugs),
    )
    repo.add_removed_entry(removed)
    repo.remove_entry_tags(key)
    repo.delete_entry(key)
    logger.info("Removed entry", extra={"entry_key": key, "title": entry.title})
    return removed
