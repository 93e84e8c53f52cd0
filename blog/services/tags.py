"""Tag aggregation: a tag, its description and the entries carrying it."""

import logging
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from markdown_it import MarkdownIt

from blog.config import SiteConfig
from blog.errors import NotFoundError
from blog.models.records import Entry, Tag, TagType
from blog.store import Repository

logger = logging.getLogger(__name__)

_md = MarkdownIt("commonmark")


class TagSummary(NamedTuple):
    tag: Tag
    description: Optional[str]
    entries: List[Entry]  # published only, newest first


def strip_title_heading(markdown: str) -> str:
    """Drop a leading level-1 heading; the tag page supplies its own."""
    tokens = _md.parse(markdown)
    lines = markdown.splitlines()
    if tokens and tokens[0].type == "heading_open" and tokens[0].tag == "h1" and tokens[0].map:
        lines = lines[tokens[0].map[1] :]
    return "\n".join(lines).strip()


def description_path(site: SiteConfig, tag: Tag) -> Path:
    return Path(site.content.tag_desc_dir) / tag.type.plural / f"{tag.slug}.md"


def load_description(site: SiteConfig, tag: Tag) -> Optional[str]:
    """Description Markdown for *tag*, or ``None`` when there is none.

    A description file on disk wins over the stored description.
    """
    path = description_path(site, tag)
    if path.is_file():
        raw = path.read_text(encoding="utf-8")
    elif tag.description:
        raw = tag.description
    else:
        logger.debug("No description for tag %s", tag.display_label)
        return None
    return strip_title_heading(raw) or None


def _in_scope(entry: Entry, scope: str) -> bool:
    if scope == "*":
        return True
    return entry.identifier is not None and fnmatchcase(entry.identifier, scope)


def _collect(repo: Repository, site: SiteConfig, tag: Tag, scope: str) -> TagSummary:
    entries = [
        e for e in repo.get_entries_for_tag(tag.key) if _in_scope(e, scope) and e.is_published
    ]
    entries.sort(key=lambda e: (e.posted_at, e.key), reverse=True)
    return TagSummary(tag=tag, description=load_description(site, tag), entries=entries)


def aggregate_tag(
    repo: Repository, site: SiteConfig, tag_type: TagType, label: str, scope: str = "*"
) -> TagSummary:
    """Collect the tag (*tag_type*, *label*) and its published entries.

    *scope* is a glob over entry identifiers restricting which entries are
    considered; drafts are never listed.
    """
    tag = repo.get_tag(tag_type, label)
    if tag is None:
        raise NotFoundError("TagNotFound")
    return _collect(repo, site, tag, scope)


def aggregate_tag_by_slug(repo: Repository, site: SiteConfig, tag_type: TagType, slug: str) -> TagSummary:
    tag = repo.get_tag_by_slug(tag_type, slug)
    if tag is None:
        logger.warning("Tag not found", extra={"tag_type": tag_type.value, "slug": slug})
        raise NotFoundError("TagNotFound")
    return _collect(repo, site, tag, "*")


def tag_index(repo: Repository, tag_type: TagType) -> List[Tuple[Tag, int]]:
    """Every tag of *tag_type* with its number of published entries."""
    return [
        (tag, sum(1 for e in repo.get_entries_for_tag(tag.key) if e.is_published))
        for tag in repo.list_tags(tag_type)
    ]
