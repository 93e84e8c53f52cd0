"""RSS 2.0 feed of the newest published entries."""

from email.utils import format_datetime
from xml.etree import ElementTree

from blog.config import SiteConfig
from blog.services.lede import lede
from blog.services.slugs import entry_url
from blog.store import Repository


def _text(parent: ElementTree.Element, tag: str, text: str) -> ElementTree.Element:
    elem = ElementTree.SubElement(parent, tag)
    elem.text = text
    return elem


def render_rss(repo: Repository, site: SiteConfig) -> str:
    entries = repo.list_published_entries(descending=True, limit=site.prefs.feed_entries)

    rss = ElementTree.Element("rss", version="2.0")
    channel = ElementTree.SubElement(rss, "channel")
    _text(channel, "title", site.title)
    _text(channel, "link", site.absolute_url("/"))
    _text(channel, "description", site.description)
    _text(channel, "copyright", site.copyright)
    if entries:
        _text(channel, "lastBuildDate", format_datetime(entries[0].posted_at))

    for entry in entries:
        link = site.absolute_url(entry_url(repo, entry))
        item = ElementTree.SubElement(channel, "item")
        _text(item, "title", entry.title)
        _text(item, "link", link)
        _text(item, "guid", link).set("isPermaLink", "true")
        _text(item, "description", lede(entry.content, site.prefs.lede_max))
        _text(item, "pubDate", format_datetime(entry.posted_at))
        for tag in repo.get_tags_for_entry(entry.key):
            _text(item, "category", tag.label)

    body = ElementTree.tostring(rss, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body
