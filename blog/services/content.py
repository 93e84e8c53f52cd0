"""Load entries from a directory of Markdown files with YAML front matter.

Example file::

    ---
    title: Hello, World
    date: 2013-10-14 12:00:00
    tags: [haskell, functional programming]
    categories: Programming
    series: Intro
    aliases: [hello-old-slug]
    ---
    Body text...
"""

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import frontmatter
import yaml

from blog.config import SiteConfig
from blog.models.records import TagType
from blog.services.authoring import add_alias, create_entry, tag_entry
from blog.store import Repository

logger = logging.getLogger(__name__)

_TAG_FIELDS = (
    ("tags", TagType.general),
    ("categories", TagType.category),
    ("series", TagType.series),
)


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a document into its YAML front matter and body.

    Text without a (complete) front-matter block is all body.
    """
    post = frontmatter.loads(text)
    if not isinstance(post.metadata, dict):
        raise ValueError("Front matter must be a mapping.")
    return dict(post.metadata), post.content


def parse_time(value: Any) -> Optional[datetime]:
    """Coerce a front-matter date into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value).strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


def load_entry_file(repo: Repository, site: SiteConfig, path: Path) -> None:
    """Load one entry file.

    Every field is parsed before anything is written, so a bad file leaves
    no trace in *repo*.
    """
    meta, body = split_front_matter(path.read_text(encoding="utf-8"))
    title = meta.get("title")
    if not title:
        raise ValueError(f"{path.name}: missing title")

    posted_at = parse_time(meta.get("date", meta.get("posted")))
    created_at = parse_time(meta.get("created"))
    modified_at = parse_time(meta.get("modified"))
    aliases = _as_list(meta.get("aliases"))
    labels = [(tag_type, label) for field, tag_type in _TAG_FIELDS for label in _as_list(meta.get(field))]

    entry = create_entry(
        repo,
        site,
        title=str(title),
        content=body,
        image=meta.get("image"),
        posted_at=posted_at,
        created_at=created_at,
        modified_at=modified_at,
        identifier=path.name,
    )
    for alias in aliases:
        add_alias(repo, entry.key, alias)
    for tag_type, label in labels:
        tag_entry(repo, entry.key, tag_type, label)


def load_content(repo: Repository, site: SiteConfig) -> int:
    """Load every ``*.md`` file of the entries directory into *repo*.

    Files are read in name order so slug collisions resolve the same way on
    every start.  Returns the number of entries loaded.
    """
    entries_dir = Path(site.content.entries_dir)
    if not entries_dir.is_dir():
        logger.warning("Entries directory not found: %s", entries_dir)
        return 0

    loaded = 0
    for path in sorted(entries_dir.glob("*.md")):
        try:
            load_entry_file(repo, site, path)
        except (ValueError, yaml.YAMLError) as exc:
            # DuplicateTitle is a ValueError too.
            logger.error("Skipping %s: %s", path.name, exc)
            continue
        loaded += 1

    logger.info("Loaded entries", extra={"count": loaded, "entries_dir": str(entries_dir)})
    return loaded
