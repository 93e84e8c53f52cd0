"""View models handed to the templating layer, one per page kind."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from blog.models.records import TagType


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NavLink(_Frozen):
    title: str
    url: str


class TagLink(_Frozen):
    label: str
    type: TagType
    display_label: str  # label with its type sigil, e.g. "#haskell"
    url: str


class EntrySummary(_Frozen):
    """An entry as it appears in listings (home, tag and archive pages)."""

    title: str
    url: str
    lede: str
    posted_at: Optional[datetime] = None
    tags: List[TagLink] = []


class EntryView(_Frozen):
    title: str
    content: str  # Markdown; rendering is up to the template
    image: Optional[str] = None
    posted_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


class PageData(_Frozen):
    """Fields every page carries into the HTML head and layout."""

    kind: str
    title: Optional[str] = None  # None means "use the site title"
    description: Optional[str] = None
    image: Optional[str] = None  # social preview image
    type: Optional[str] = None  # og:type
    url: Optional[str] = None  # absolute canonical URL
    css: List[str] = []
    js: List[str] = []
    headers: List[str] = []  # extra <head> fragments


class EntryPage(PageData):
    kind: Literal["entry"] = "entry"
    entry: EntryView
    tags: List[TagLink] = []
    prev: Optional[NavLink] = None
    next: Optional[NavLink] = None


class HomePage(PageData):
    kind: Literal["home"] = "home"
    entries: List[EntrySummary]
    page_num: int
    max_page: int
    prev_page: Optional[str] = None
    next_page: Optional[str] = None


class TagInfo(_Frozen):
    label: str
    type: TagType
    display_label: str
    slug: str
    description: Optional[str] = None  # Markdown, leading title heading removed


class TagPage(PageData):
    kind: Literal["tag"] = "tag"
    tag: TagInfo
    entries: List[EntrySummary]


class MonthGroup(_Frozen):
    year: int
    month: int
    month_name: str
    url: str
    entries: List[EntrySummary]


class YearGroup(_Frozen):
    year: int
    url: str
    months: List[MonthGroup]


class ArchivePage(PageData):
    kind: Literal["archive"] = "archive"
    heading: str
    groups: List[YearGroup]


class TagCount(_Frozen):
    tag: TagLink
    count: int


class TagIndexPage(PageData):
    kind: Literal["tag_index"] = "tag_index"
    tag_type: TagType
    tags: List[TagCount]
