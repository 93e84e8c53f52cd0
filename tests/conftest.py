from datetime import datetime, timedelta, timezone

import pytest

from blog.config import SiteConfig, merge_config
from blog.models.records import TagType
from blog.services.authoring import create_entry, tag_entry
from blog.store import InMemoryRepository

START = datetime(2014, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def site(tmp_path):
    return merge_config(
        SiteConfig(),
        {
            "host": {"host": "blog.example.com", "scheme": "https"},
            "content": {
                "entries_dir": str(tmp_path / "entries"),
                "tag_desc_dir": str(tmp_path / "tags"),
            },
        },
    )


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def add_entry(repo, site):
    """Create an entry; *day* is the number of days after START it was posted."""

    def _add(title, day=None, content="Some body text.", tags=(), categories=(), **kwargs):
        posted_at = START + timedelta(days=day) if day is not None else None
        entry = create_entry(repo, site, title, content, posted_at=posted_at, **kwargs)
        for label in tags:
            tag_entry(repo, entry.key, TagType.general, label)
        for label in categories:
            tag_entry(repo, entry.key, TagType.category, label)
        return entry

    return _add
