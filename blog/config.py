"""Site configuration.

The configuration is a plain value: ``blog.main`` loads it once and hands
it to every service call.  Sections:

- AuthorInfo: who writes the blog
- HostConfig: public host and port used to build absolute URLs
- DeveloperAPIs: third-party identifiers passed through to templates
- AppPrefs: slug length, page sizes, lede length
- ContentConfig: where entries and tag descriptions live on disk
- SiteConfig: root container
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SiteEnvironment(str, Enum):
    production = "production"
    development = "development"


class AuthorInfo(BaseModel):
    name: str = "Justin Le"
    email: str = ""
    rel: str = ""
    facebook: str = ""
    twitter_id: str = ""
    github: str = ""
    linkedin: str = ""


class HostConfig(BaseModel):
    host: str = "localhost"
    port: Optional[int] = None
    scheme: str = "http"

    @property
    def base_url(self) -> str:
        port = f":{self.port}" if self.port else ""
        return f"{self.scheme}://{self.host}{port}"


class DeveloperAPIs(BaseModel):
    analytics: tuple[str, str] = ("", "")
    disqus_shortname: str = ""
    facebook: str = ""
    addthis: str = ""
    feedburner: str = ""


class AppPrefs(BaseModel):
    slug_length: int = Field(default=8, ge=1, description="Title words kept in a generated slug.")
    home_entries: int = Field(default=5, ge=1, description="Entries per home page.")
    lede_max: int = Field(default=2, ge=1, description="Paragraphs used for an entry's lede.")
    feed_entries: int = Field(default=15, ge=1, description="Entries in the RSS feed.")


class ContentConfig(BaseModel):
    entries_dir: str = "copy/entries"
    tag_desc_dir: str = "copy/tags"


class SiteConfig(BaseModel):
    title: str = "in Code"
    description: str = (
        "Weblog of Justin Le, covering his various adventures in "
        "programming and explorations in the vast worlds of computation, "
        "physics, and knowledge."
    )
    copyright: str = "2013 Justin Le"
    author: AuthorInfo = Field(default_factory=AuthorInfo)
    host: HostConfig = Field(default_factory=HostConfig)
    developer_apis: DeveloperAPIs = Field(default_factory=DeveloperAPIs)
    prefs: AppPrefs = Field(default_factory=AppPrefs)
    content: ContentConfig = Field(default_factory=ContentConfig)
    environment: SiteEnvironment = SiteEnvironment.development

    def absolute_url(self, path: str) -> str:
        return self.host.base_url + path


def load_site_config(path: str | None) -> SiteConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    if not path:
        return SiteConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded site configuration", extra={"path": path})
    return merge_config(SiteConfig(), raw)


def merge_config(base: SiteConfig, raw: dict[str, Any]) -> SiteConfig:
    """Merge a raw mapping over *base*, section by section.

    Unknown top-level keys are ignored; nested sections are updated key by
    key so a YAML file only needs to name what it changes.
    """
    data = base.model_dump()
    for key, value in raw.items():
        if key not in data:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return SiteConfig.model_validate(data)
