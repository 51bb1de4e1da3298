"""Models for site configuration, front-matter and the content map."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SiteConfig(BaseModel):
    """Schema for config/site.yaml."""

    languages: List[str] = Field(
        default_factory=lambda: ["en"],
        description="Supported language codes; the first one is the default language.",
    )
    content_dir: str = Field(
        "content",
        alias="contentDir",
        description="Directory holding posts/ and projects/.",
    )
    language_names: Dict[str, str] = Field(
        default_factory=dict,
        alias="languageNames",
        description="Display names for the language switcher, keyed by code.",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("languages")
    @classmethod
    def _check_languages(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one language is required")
        seen: set[str] = set()
        for code in value:
            if not code or "/" in code:
                raise ValueError(f"invalid language code: {code!r}")
            if code in seen:
                raise ValueError(f"duplicate language code: {code}")
            seen.add(code)
        return value

    @property
    def default_language(self) -> str:
        return self.languages[0]

    def content_root(self, base: Path | None = None) -> Path:
        root = Path(self.content_dir)
        if base is not None and not root.is_absolute():
            return base / root
        return root


class FrontMatter(BaseModel):
    """Front-matter fields the site tooling understands.

    Unknown keys are kept so other renderers can still read them.
    """

    slug: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = None
    featured: bool = False

    model_config = ConfigDict(extra="allow")

    @field_validator("slug", "title", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("date", mode="before")
    @classmethod
    def _as_iso_date(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()[:10]
        return str(value)

    @field_validator("featured", mode="before")
    @classmethod
    def _as_flag(cls, value: Any) -> bool:
        return bool(value)


@dataclass(frozen=True)
class ContentKind:
    """A kind of content and where it lives on disk and in URLs."""

    name: str
    directory: Optional[str]
    url_segment: Optional[str]


POST = ContentKind(name="post", directory="posts", url_segment="posts")
PROJECT = ContentKind(name="project", directory="projects", url_segment="projects")
PAGE = ContentKind(name="page", directory=None, url_segment=None)

KINDS: Dict[str, ContentKind] = {"post": POST, "project": PROJECT, "page": PAGE}
MIGRATABLE_KINDS = (POST, PROJECT)


def get_kind(name: str | ContentKind) -> ContentKind:
    """Look up a kind by name, accepting the plural directory form too."""

    if isinstance(name, ContentKind):
        return name
    key = name.rstrip("s") if name in ("posts", "projects") else name
    try:
        return KINDS[key]
    except KeyError as exc:
        raise ValueError(f"Unknown content kind: {name}") from exc


@dataclass
class LanguageVariant:
    """One language's document for a content item in the legacy layout."""

    language: str
    body: str
    public_slug: str
    source: Path
    media: List[str] = field(default_factory=list)


@dataclass
class ContentItem:
    """A content item keyed by folder slug, holding its language variants."""

    slug: str
    variants: Dict[str, LanguageVariant] = field(default_factory=dict)

    @property
    def languages(self) -> list[str]:
        return list(self.variants)


@dataclass(frozen=True)
class MediaAsset:
    """A sidecar file or directory to materialize once per item."""

    name: str
    source: Path
    language: str


__all__ = [
    "ContentItem",
    "ContentKind",
    "FrontMatter",
    "KINDS",
    "LanguageVariant",
    "MIGRATABLE_KINDS",
    "MediaAsset",
    "PAGE",
    "POST",
    "PROJECT",
    "SiteConfig",
    "get_kind",
]
