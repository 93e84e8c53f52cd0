"""Tests for blog.services.tags: aggregation, descriptions and scopes."""

from pathlib import Path

import pytest

from blog.errors import NotFoundError
from blog.models.records import TagType
from blog.services.authoring import tag_entry
from blog.services.tags import (
    aggregate_tag,
    aggregate_tag_by_slug,
    load_description,
    strip_title_heading,
    tag_index,
)


def _write_description(site, plural: str, slug: str, text: str) -> None:
    path = Path(site.content.tag_desc_dir) / plural / f"{slug}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestStripTitleHeading:
    def test_atx_heading_removed(self):
        assert strip_title_heading("# Haskell\n\nAll about Haskell.") == "All about Haskell."

    def test_setext_heading_removed(self):
        assert strip_title_heading("Haskell\n=======\n\nBody.") == "Body."

    def test_second_level_heading_kept(self):
        text = "## Not the title\n\nBody."
        assert strip_title_heading(text) == text

    def test_heading_later_in_text_kept(self):
        text = "Intro.\n\n# Section"
        assert strip_title_heading(text) == text

    def test_hashtag_is_not_a_heading(self):
        text = "#hashtag\n\nBody."
        assert strip_title_heading(text) == text

    def test_leading_blank_lines_before_heading(self):
        assert strip_title_heading("\n\n# Haskell\nBody.") == "Body."

    def test_heading_inside_code_block_kept(self):
        text = "```\n# comment\n```"
        assert strip_title_heading(text) == text


class TestAggregateTag:
    def test_entries_sorted_newest_first(self, repo, site, add_entry):
        add_entry("Old", day=1, tags=["haskell"])
        add_entry("New", day=9, tags=["haskell"])
        add_entry("Middle", day=5, tags=["haskell"])
        add_entry("Unrelated", day=3, tags=["python"])

        summary = aggregate_tag(repo, site, TagType.general, "haskell")
        assert [e.title for e in summary.entries] == ["New", "Middle", "Old"]
        assert summary.tag.label == "haskell"

    def test_exactly_the_tagged_entries(self, repo, site, add_entry):
        tagged = {add_entry(f"Tagged {i}", day=i, tags=["physics"]).key for i in range(4)}
        add_entry("Other", day=2, tags=["math"])
        summary = aggregate_tag(repo, site, TagType.general, "physics")
        assert {e.key for e in summary.entries} == tagged

    def test_drafts_excluded(self, repo, site, add_entry):
        add_entry("Posted", day=1, tags=["haskell"])
        add_entry("Draft", tags=["haskell"])
        summary = aggregate_tag(repo, site, TagType.general, "haskell")
        assert [e.title for e in summary.entries] == ["Posted"]

    def test_same_label_different_type_is_a_different_tag(self, repo, site, add_entry):
        add_entry("Tagged", day=1, tags=["haskell"])
        add_entry("Categorised", day=2, categories=["haskell"])
        general = aggregate_tag(repo, site, TagType.general, "haskell")
        category = aggregate_tag(repo, site, TagType.category, "haskell")
        assert [e.title for e in general.entries] == ["Tagged"]
        assert [e.title for e in category.entries] == ["Categorised"]

    def test_scope_filters_by_identifier(self, repo, site, add_entry):
        add_entry("In scope", day=1, tags=["haskell"], identifier="2014-01-lens.md")
        add_entry("Out of scope", day=2, tags=["haskell"], identifier="drafts-lens.md")
        summary = aggregate_tag(repo, site, TagType.general, "haskell", scope="2014-*")
        assert [e.title for e in summary.entries] == ["In scope"]

    def test_unknown_tag(self, repo, site):
        with pytest.raises(NotFoundError) as exc_info:
            aggregate_tag(repo, site, TagType.general, "missing")
        assert exc_info.value.reason == "TagNotFound"

    def test_lookup_by_slug(self, repo, site, add_entry):
        add_entry("Tagged", day=1, tags=["Functional Programming"])
        summary = aggregate_tag_by_slug(repo, site, TagType.general, "functional-programming")
        assert summary.tag.label == "Functional Programming"


class TestTagDescription:
    def test_missing_description_is_absent(self, repo, site, add_entry):
        add_entry("Tagged", day=1, tags=["haskell"])
        summary = aggregate_tag(repo, site, TagType.general, "haskell")
        assert summary.description is None

    def test_description_file_with_heading_stripped(self, repo, site, add_entry):
        add_entry("Tagged", day=1, tags=["haskell"])
        _write_description(site, "tags", "haskell", "# Haskell\n\nA lazy, *pure* language.\n")
        summary = aggregate_tag(repo, site, TagType.general, "haskell")
        assert summary.description == "A lazy, *pure* language."

    def test_description_files_are_per_tag_type(self, repo, site, add_entry):
        add_entry("Categorised", day=1, categories=["haskell"])
        _write_description(site, "tags", "haskell", "General tag text.")
        summary = aggregate_tag(repo, site, TagType.category, "haskell")
        assert summary.description is None

    def test_stored_description_used_when_no_file(self, repo, site, add_entry):
        entry = add_entry("Tagged", day=1)
        repo.add_tag("lenses", TagType.general, "lenses", description="# Lenses\n\nOptics.")
        tag_entry(repo, entry.key, TagType.general, "lenses")
        tag = repo.get_tag(TagType.general, "lenses")
        assert load_description(site, tag) == "Optics."

    def test_description_file_named_by_stored_slug(self, repo, site, add_entry):
        entry = add_entry("Tagged", day=1)
        repo.add_tag("Lenses", TagType.general, "optics")
        tag_entry(repo, entry.key, TagType.general, "Lenses")
        _write_description(site, "tags", "optics", "Getters and setters.")
        summary = aggregate_tag(repo, site, TagType.general, "Lenses")
        assert summary.description == "Getters and setters."


class TestTagIndex:
    def test_counts_published_entries(self, repo, add_entry):
        add_entry("One", day=1, tags=["haskell", "physics"])
        add_entry("Two", day=2, tags=["haskell"])
        add_entry("Draft", tags=["physics"])
        counts = {tag.label: n for tag, n in tag_index(repo, TagType.general)}
        assert counts == {"haskell": 2, "physics": 1}
