"""Persistence collaborator.

:class:`Repository` names every lookup the page pipeline and the authoring
service make.  :class:`InMemoryRepository` is the implementation the app
runs on: records live in per-kind arenas keyed by integer key, with
secondary indices for the unique constraints.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import count
from typing import Iterable, Optional

from blog.models.records import Entry, EntryTag, RemovedEntry, Slug, Tag, TagType


def publication_key(entry: Entry) -> tuple:
    """Sort key for published entries: posted time, then insertion order."""
    return (entry.posted_at, entry.key)


class Repository(ABC):
    """Abstract persistence interface.

    Reads return ``None`` (or an empty list) when nothing matches; the
    caller decides whether absence is an error.
    """

    # -- reads used by the page pipeline ----------------------------------

    @abstractmethod
    def find_slug(self, text: str) -> Optional[Slug]:
        raise NotImplementedError

    @abstractmethod
    def get_entry(self, key: int) -> Optional[Entry]:
        raise NotImplementedError

    @abstractmethod
    def get_current_slug(self, entry_key: int) -> Optional[Slug]:
        raise NotImplementedError

    @abstractmethod
    def list_slugs_for_entry(self, entry_key: int) -> list[Slug]:
        raise NotImplementedError

    @abstractmethod
    def get_prev_entry(self, entry: Entry) -> Optional[Entry]:
        """Latest published entry strictly before *entry*."""
        raise NotImplementedError

    @abstractmethod
    def get_next_entry(self, entry: Entry) -> Optional[Entry]:
        """Earliest published entry strictly after *entry*."""
        raise NotImplementedError

    @abstractmethod
    def get_tags_for_entry(self, entry_key: int) -> list[Tag]:
        raise NotImplementedError

    @abstractmethod
    def count_published_entries(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def list_published_entries(
        self, descending: bool = True, limit: Optional[int] = None, offset: int = 0
    ) -> list[Entry]:
        raise NotImplementedError

    @abstractmethod
    def get_tag(self, tag_type: TagType, label: str) -> Optional[Tag]:
        raise NotImplementedError

    @abstractmethod
    def get_tag_by_slug(self, tag_type: TagType, slug: str) -> Optional[Tag]:
        raise NotImplementedError

    @abstractmethod
    def list_tags(self, tag_type: TagType) -> list[Tag]:
        raise NotImplementedError

    @abstractmethod
    def get_entries_for_tag(self, tag_key: int) -> list[Entry]:
        raise NotImplementedError

    # -- writes used by authoring -----------------------------------------

    @abstractmethod
    def add_entry(self, **fields) -> Entry:
        raise NotImplementedError

    @abstractmethod
    def update_entry(self, entry: Entry) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_entry(self, key: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_entry_by_title(self, title: str) -> Optional[Entry]:
        raise NotImplementedError

    @abstractmethod
    def add_slug(self, entry_key: int, slug: str, is_current: bool) -> Slug:
        raise NotImplementedError

    @abstractmethod
    def set_slug_current(self, slug: str, is_current: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_tag(self, label: str, tag_type: TagType, slug: str, description: Optional[str] = None) -> Tag:
        raise NotImplementedError

    @abstractmethod
    def add_entry_tag(self, entry_key: int, tag_key: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_entry_tags(self, entry_key: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_removed_entry(self, removed: RemovedEntry) -> None:
        raise NotImplementedError


class InMemoryRepository(Repository):
    """Dict-backed repository.  Not thread-safe; writes happen at load time."""

    def __init__(self) -> None:
        self._entries: dict[int, Entry] = {}
        self._slugs: dict[str, Slug] = {}
        self._tags: dict[int, Tag] = {}
        self._entry_tags: set[EntryTag] = set()
        self.removed: list[RemovedEntry] = []

        self._entry_keys = count(1)
        self._slug_keys = count(1)
        self._tag_keys = count(1)

    # -- entries ----------------------------------------------------------

    def get_entry(self, key: int) -> Optional[Entry]:
        return self._entries.get(key)

    def find_entry_by_title(self, title: str) -> Optional[Entry]:
        for entry in self._entries.values():
            if entry.title == title:
                return entry
        return None

    def add_entry(self, **fields) -> Entry:
        entry = Entry(key=next(self._entry_keys), **fields)
        self._entries[entry.key] = entry
        return entry

    def update_entry(self, entry: Entry) -> None:
        if entry.key not in self._entries:
            raise KeyError(entry.key)
        self._entries[entry.key] = entry

    def delete_entry(self, key: int) -> None:
        self._entries.pop(key, None)

    def _published(self) -> list[Entry]:
        return sorted(
            (e for e in self._entries.values() if e.is_published), key=publication_key
        )

    def count_published_entries(self) -> int:
        return sum(1 for e in self._entries.values() if e.is_published)

    def list_published_entries(
        self, descending: bool = True, limit: Optional[int] = None, offset: int = 0
    ) -> list[Entry]:
        entries = self._published()
        if descending:
            entries.reverse()
        end = None if limit is None else offset + limit
        return entries[offset:end]

    def get_prev_entry(self, entry: Entry) -> Optional[Entry]:
        if not entry.is_published:
            return None
        here = publication_key(entry)
        before = [e for e in self._published() if publication_key(e) < here]
        return before[-1] if before else None

    def get_next_entry(self, entry: Entry) -> Optional[Entry]:
        if not entry.is_published:
            return None
        here = publication_key(entry)
        after = [e for e in self._published() if publication_key(e) > here]
        return after[0] if after else None

    # -- slugs ------------------------------------------------------------

    def find_slug(self, text: str) -> Optional[Slug]:
        return self._slugs.get(text)

    def list_slugs_for_entry(self, entry_key: int) -> list[Slug]:
        slugs = [s for s in self._slugs.values() if s.entry_key == entry_key]
        return sorted(slugs, key=lambda s: (not s.is_current, s.key))

    def get_current_slug(self, entry_key: int) -> Optional[Slug]:
        for slug in self._slugs.values():
            if slug.entry_key == entry_key and slug.is_current:
                return slug
        return None

    def add_slug(self, entry_key: int, slug: str, is_current: bool) -> Slug:
        if slug in self._slugs:
            raise ValueError(f"Slug {slug!r} already exists.")
        if is_current:
            self._clear_current(entry_key)
        record = Slug(key=next(self._slug_keys), entry_key=entry_key, slug=slug, is_current=is_current)
        self._slugs[slug] = record
        return record

    def set_slug_current(self, slug: str, is_current: bool) -> None:
        record = self._slugs[slug]
        if is_current:
            self._clear_current(record.entry_key)
        self._slugs[slug] = record.model_copy(update={"is_current": is_current})

    def _clear_current(self, entry_key: int) -> None:
        for text, record in self._slugs.items():
            if record.entry_key == entry_key and record.is_current:
                self._slugs[text] = record.model_copy(update={"is_current": False})

    # -- tags -------------------------------------------------------------

    def get_tag(self, tag_type: TagType, label: str) -> Optional[Tag]:
        return self._first_tag(t for t in self._tags.values() if t.type == tag_type and t.label == label)

    def get_tag_by_slug(self, tag_type: TagType, slug: str) -> Optional[Tag]:
        return self._first_tag(t for t in self._tags.values() if t.type == tag_type and t.slug == slug)

    @staticmethod
    def _first_tag(tags: Iterable[Tag]) -> Optional[Tag]:
        return next(iter(tags), None)

    def list_tags(self, tag_type: TagType) -> list[Tag]:
        return sorted(
            (t for t in self._tags.values() if t.type == tag_type), key=lambda t: t.label.lower()
        )

    def add_tag(self, label: str, tag_type: TagType, slug: str, description: Optional[str] = None) -> Tag:
        if self.get_tag(tag_type, label) or self.get_tag_by_slug(tag_type, slug):
            raise ValueError(f"Tag {label!r} ({tag_type.value}) already exists.")
        tag = Tag(key=next(self._tag_keys), label=label, type=tag_type, slug=slug, description=description)
        self._tags[tag.key] = tag
        return tag

    def get_tags_for_entry(self, entry_key: int) -> list[Tag]:
        tags = [self._tags[et.tag_key] for et in self._entry_tags if et.entry_key == entry_key]
        return sorted(tags, key=lambda t: (list(TagType).index(t.type), t.label.lower()))

    def get_entries_for_tag(self, tag_key: int) -> list[Entry]:
        keys = sorted(et.entry_key for et in self._entry_tags if et.tag_key == tag_key)
        return [self._entries[k] for k in keys if k in self._entries]

    def add_entry_tag(self, entry_key: int, tag_key: int) -> None:
        self._entry_tags.add(EntryTag(entry_key=entry_key, tag_key=tag_key))

    def remove_entry_tags(self, entry_key: int) -> None:
        self._entry_tags = {et for et in self._entry_tags if et.entry_key != entry_key}

    # -- removals ---------------------------------------------------------

    def add_removed_entry(self, removed: RemovedEntry) -> None:
        self.removed.append(removed)
