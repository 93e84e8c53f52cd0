"""Assemble view models from resolver, navigator, tag and pagination output.

Composition is purely structural.  Anything that can fail has already
failed upstream (a :class:`~blog.errors.RouteRedirect` propagates through
unchanged).
"""

import calendar
from itertools import groupby
from typing import List, Optional

from blog.config import SiteConfig
from blog.models.pages import (
    ArchivePage,
    EntryPage,
    EntrySummary,
    EntryView,
    HomePage,
    MonthGroup,
    TagCount,
    TagIndexPage,
    TagInfo,
    TagLink,
    TagPage,
    YearGroup,
)
from blog.models.records import Entry, Tag, TagType
from blog.services.lede import lede
from blog.services.navigator import adjacent_entries
from blog.services.pagination import PagePlan, page_url
from blog.services.slugs import entry_url
from blog.services.tags import TagSummary, tag_index
from blog.store import Repository

ENTRY_CSS = ["/css/page/entry.css", "/css/pygments.css"]
ENTRY_JS = [
    "/js/disqus.js",
    "/js/disqus_count.js",
    "/js/social.js",
    "/js/jquery/jquery.toc.js",
    "/js/page/entry.js",
]
HOME_CSS = ["/css/page/home.css", "/css/pygments.css"]
HOME_JS = ["/js/disqus_count.js"]
ARCHIVE_CSS = ["/css/page/archive.css"]
ARCHIVE_JS = ["/js/page/archive.js"]


def tag_link(tag: Tag) -> TagLink:
    return TagLink(label=tag.label, type=tag.type, display_label=tag.display_label, url=tag.url)


def summarize_entry(repo: Repository, site: SiteConfig, entry: Entry) -> EntrySummary:
    return EntrySummary(
        title=entry.title,
        url=entry_url(repo, entry),
        lede=lede(entry.content, site.prefs.lede_max),
        posted_at=entry.posted_at,
        tags=[tag_link(t) for t in repo.get_tags_for_entry(entry.key)],
    )


def compose_entry_page(repo: Repository, site: SiteConfig, entry: Entry) -> EntryPage:
    adjacent = adjacent_entries(repo, entry)
    url = entry_url(repo, entry)
    return EntryPage(
        title=entry.title,
        type="article",
        description=lede(entry.content, site.prefs.lede_max),
        image=entry.image,
        url=site.absolute_url(url),
        css=ENTRY_CSS,
        js=ENTRY_JS,
        entry=EntryView(
            title=entry.title,
            content=entry.content,
            image=entry.image,
            posted_at=entry.posted_at,
            modified_at=entry.modified_at,
        ),
        tags=[tag_link(t) for t in repo.get_tags_for_entry(entry.key)],
        prev=adjacent.prev,
        next=adjacent.next,
    )


def compose_home_page(repo: Repository, site: SiteConfig, plan: PagePlan) -> HomePage:
    entries = repo.list_published_entries(descending=True, limit=plan.limit, offset=plan.offset)
    return HomePage(
        title=None if plan.page == 1 else f"Home (Page {plan.page})",
        url=site.absolute_url(page_url(plan.page)),
        css=HOME_CSS,
        js=HOME_JS,
        entries=[summarize_entry(repo, site, e) for e in entries],
        page_num=plan.page,
        max_page=plan.max_page,
        prev_page=plan.prev_url,
        next_page=plan.next_url,
    )


def compose_tag_page(repo: Repository, site: SiteConfig, summary: TagSummary) -> TagPage:
    tag = summary.tag
    return TagPage(
        title=tag.display_label,
        description=summary.description or f"Entries tagged {tag.display_label}",
        url=site.absolute_url(tag.url),
        css=ARCHIVE_CSS,
        js=ARCHIVE_JS,
        tag=TagInfo(
            label=tag.label,
            type=tag.type,
            display_label=tag.display_label,
            slug=tag.slug,
            description=summary.description,
        ),
        entries=[summarize_entry(repo, site, e) for e in summary.entries],
    )


def archive_path(year: Optional[int] = None, month: Optional[int] = None) -> str:
    if year is None:
        return "/entries"
    if month is None:
        return f"/entries/in/{year}"
    return f"/entries/in/{year}/{month}"


def _group_by_date(repo: Repository, site: SiteConfig, entries: List[Entry]) -> List[YearGroup]:
    groups: List[YearGroup] = []
    for year, in_year in groupby(entries, key=lambda e: e.posted_at.year):
        months = [
            MonthGroup(
                year=year,
                month=month,
                month_name=calendar.month_name[month],
                url=archive_path(year, month),
                entries=[summarize_entry(repo, site, e) for e in in_month],
            )
            for month, in_month in groupby(in_year, key=lambda e: e.posted_at.month)
        ]
        groups.append(YearGroup(year=year, url=archive_path(year), months=months))
    return groups


def compose_archive_page(
    repo: Repository, site: SiteConfig, year: Optional[int] = None, month: Optional[int] = None
) -> ArchivePage:
    """All published entries, or those of one year or month, newest first."""
    entries = [
        e
        for e in repo.list_published_entries(descending=True)
        if (year is None or e.posted_at.year == year)
        and (month is None or e.posted_at.month == month)
    ]
    if year is None:
        heading = "Entries"
    elif month is None:
        heading = f"Entries from {year}"
    else:
        heading = f"Entries from {calendar.month_name[month]} {year}"

    return ArchivePage(
        title=heading,
        url=site.absolute_url(archive_path(year, month)),
        css=ARCHIVE_CSS,
        js=ARCHIVE_JS,
        heading=heading,
        groups=_group_by_date(repo, site, entries),
    )


def compose_tag_index_page(repo: Repository, site: SiteConfig, tag_type: TagType) -> TagIndexPage:
    title = tag_type.plural.capitalize()
    return TagIndexPage(
        title=title,
        url=site.absolute_url(f"/{tag_type.plural}"),
        css=ARCHIVE_CSS,
        tag_type=tag_type,
        tags=[TagCount(tag=tag_link(t), count=n) for t, n in tag_index(repo, tag_type)],
    )
