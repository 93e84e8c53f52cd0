"""Tests for blog.services.content front-matter loading."""

from datetime import datetime, timezone
from pathlib import Path

from blog.models.records import TagType
from blog.services.content import load_content, parse_time, split_front_matter

_LENS = """---
title: "Lenses, Part 1"
date: 2014-03-02 10:30:00
tags: [haskell, optics]
categories: Haskell
series: Lenses
aliases: [lens-tutorial]
image: /img/lens.png
---

# Lenses

Getting started with lenses.
"""

_DRAFT = """---
title: Unfinished thoughts
tags: haskell
---
Not yet.
"""


def _write(site, name: str, text: str) -> None:
    path = Path(site.content.entries_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestSplitFrontMatter:
    def test_no_front_matter(self):
        assert split_front_matter("Just text") == ({}, "Just text")

    def test_meta_and_body(self):
        meta, body = split_front_matter("---\ntitle: Hi\n---\nBody\n")
        assert meta == {"title": "Hi"}
        assert body == "Body"

    def test_unterminated_block_is_body(self):
        meta, body = split_front_matter("---\ntitle: Hi\n")
        assert meta == {}
        assert "title: Hi" in body


class TestParseTime:
    def test_naive_datetime_is_utc(self):
        assert parse_time(datetime(2014, 3, 2, 10, 30)) == datetime(
            2014, 3, 2, 10, 30, tzinfo=timezone.utc
        )

    def test_iso_string_with_offset(self):
        assert parse_time("2014-03-02T12:30:00+02:00") == datetime(
            2014, 3, 2, 10, 30, tzinfo=timezone.utc
        )

    def test_missing(self):
        assert parse_time(None) is None


class TestLoadContent:
    def test_loads_entries_tags_and_aliases(self, repo, site):
        _write(site, "2014-03-02-lenses.md", _LENS)
        _write(site, "draft.md", _DRAFT)

        assert load_content(repo, site) == 2

        entry = repo.find_entry_by_title("Lenses, Part 1")
        assert entry.identifier == "2014-03-02-lenses.md"
        assert entry.image == "/img/lens.png"
        assert entry.posted_at == datetime(2014, 3, 2, 10, 30, tzinfo=timezone.utc)
        assert entry.content.startswith("# Lenses")

        assert repo.get_current_slug(entry.key).slug == "lenses-part-1"
        assert repo.find_slug("lens-tutorial").entry_key == entry.key

        labels = {(t.type, t.label) for t in repo.get_tags_for_entry(entry.key)}
        assert labels == {
            (TagType.general, "haskell"),
            (TagType.general, "optics"),
            (TagType.category, "Haskell"),
            (TagType.series, "Lenses"),
        }

        draft = repo.find_entry_by_title("Unfinished thoughts")
        assert draft.posted_at is None
        assert repo.count_published_entries() == 1

    def test_bad_files_are_skipped(self, repo, site):
        _write(site, "a.md", _LENS)
        _write(site, "b.md", "---\ndate: 2014-01-01\n---\nNo title.\n")
        _write(site, "c.md", _LENS)  # duplicate title
        assert load_content(repo, site) == 1

    def test_tag_labels_differing_in_case_are_merged(self, repo, site):
        _write(site, "a.md", "---\ntitle: First\ndate: 2014-01-01\ntags: [Haskell]\n---\nOne.\n")
        _write(site, "b.md", "---\ntitle: Second\ndate: 2014-01-02\ntags: [haskell, types]\n---\nTwo.\n")

        assert load_content(repo, site) == 2

        second = repo.find_entry_by_title("Second")
        assert {t.label for t in repo.get_tags_for_entry(second.key)} == {"Haskell", "types"}
        haskell = repo.get_tag_by_slug(TagType.general, "haskell")
        assert [e.title for e in repo.get_entries_for_tag(haskell.key)] == ["First", "Second"]

    def test_rejected_file_leaves_nothing_behind(self, repo, site):
        _write(site, "a.md", "---\ntitle: Bad date\ndate: not-a-date\ntags: [haskell]\n---\nBody.\n")

        assert load_content(repo, site) == 0
        assert repo.find_entry_by_title("Bad date") is None
        assert repo.find_slug("bad-date") is None
        assert repo.get_tag(TagType.general, "haskell") is None

    def test_missing_directory(self, repo, site):
        assert load_content(repo, site) == 0
