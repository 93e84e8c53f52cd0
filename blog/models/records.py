"""Stored records.  Relations are plain integer keys, never object references."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TagType(str, Enum):
    general = "general"
    category = "category"
    series = "series"

    @property
    def prefix(self) -> str:
        """Sigil used when a tag label is displayed (``#haskell``)."""
        return _TAG_PREFIXES[self]

    @property
    def url_base(self) -> str:
        return _TAG_URL_BASES[self]

    @property
    def plural(self) -> str:
        return _TAG_PLURALS[self]


_TAG_PREFIXES = {TagType.general: "#", TagType.category: "@", TagType.series: "+"}
_TAG_URL_BASES = {TagType.general: "/tag/", TagType.category: "/category/", TagType.series: "/series/"}
_TAG_PLURALS = {TagType.general: "tags", TagType.category: "categories", TagType.series: "series"}


class Entry(BaseModel):
    """One blog post."""

    model_config = ConfigDict(frozen=True)

    key: int
    title: str
    content: str  # Markdown body
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    posted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    identifier: Optional[str] = None  # source file name, when loaded from disk

    @property
    def is_published(self) -> bool:
        return self.posted_at is not None


class Slug(BaseModel):
    key: int
    entry_key: int
    slug: str
    is_current: bool


class Tag(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: int
    label: str
    type: TagType
    description: Optional[str] = None
    slug: str

    @property
    def display_label(self) -> str:
        return self.type.prefix + self.label

    @property
    def url(self) -> str:
        return self.type.url_base + self.slug


class EntryTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry_key: int
    tag_key: int


class RemovedEntry(BaseModel):
    """Snapshot kept when an entry is taken down."""

    title: str
    content: str
    created_at: Optional[datetime] = None
    posted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    removed_at: datetime
    identifier: Optional[str] = None
    tag_list: str  # comma-joined display labels
    slug_list: str  # comma-joined slugs, current one first
