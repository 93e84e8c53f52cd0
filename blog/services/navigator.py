"""Previous/next links between published entries."""

from typing import NamedTuple, Optional

from blog.models.pages import NavLink
from blog.models.records import Entry
from blog.services.slugs import entry_url
from blog.store import Repository


class Adjacent(NamedTuple):
    prev: Optional[NavLink]
    next: Optional[NavLink]


def _link(repo: Repository, entry: Optional[Entry]) -> Optional[NavLink]:
    if entry is None:
        return None
    return NavLink(title=entry.title, url=entry_url(repo, entry))


def adjacent_entries(repo: Repository, entry: Entry) -> Adjacent:
    """Chronological neighbours of *entry*, each paired with its canonical URL.

    The oldest entry has no ``prev`` and the newest no ``next``.  Drafts
    have neither.
    """
    return Adjacent(
        prev=_link(repo, repo.get_prev_entry(entry)),
        next=_link(repo, repo.get_next_entry(entry)),
    )
