"""Explicit per-page language context handed to renderers.

Renderers receive a ``PageContext`` as an argument instead of reading shared
module state, so rendering one page never leaks into another.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple
from urllib.parse import urlparse

from .models import PAGE, ContentKind, SiteConfig, get_kind
from .navigation import SwitcherLink, build_switcher, language_prefix, render_switcher
from .translations import TranslationTable, item_dir, page_translations, resolve_translations


@dataclass(frozen=True)
class PageContext:
    lang: str
    lang_prefix: str
    is_default: bool
    kind: ContentKind
    folder_slug: Optional[str]
    translations: Tuple[Tuple[str, str], ...]
    switcher: Tuple[SwitcherLink, ...]
    switcher_html: str
    media_dir: Optional[PurePosixPath] = None

    def media_href(self, href: str) -> str:
        """Resolve a document-relative media reference to a site-absolute href."""

        parsed = urlparse(href)
        if parsed.scheme or href.startswith("/") or href.startswith("#") or self.media_dir is None:
            return href
        return f"/{self.media_dir / href}"

    def template_vars(self) -> dict:
        return {
            "lang": self.lang,
            "langPrefix": self.lang_prefix,
            "langSwitcher": self.switcher_html,
        }


def build_page_context(
    config: SiteConfig,
    content_root: Path,
    lang: Optional[str] = None,
    kind: ContentKind | str = PAGE,
    folder_slug: Optional[str] = None,
) -> PageContext:
    kind = get_kind(kind)
    lang = lang or config.default_language
    languages = config.languages

    media_dir: Optional[PurePosixPath] = None
    if kind.directory is None or folder_slug is None:
        table: TranslationTable = page_translations(languages)
        switch_kind: ContentKind = PAGE
    else:
        table = resolve_translations(content_root, folder_slug, kind, languages)
        switch_kind = kind
        directory = item_dir(content_root, kind, folder_slug)
        media_dir = PurePosixPath(directory.relative_to(content_root).as_posix())

    links = build_switcher(lang, table, switch_kind, languages, config.language_names)
    return PageContext(
        lang=lang,
        lang_prefix=language_prefix(lang, languages),
        is_default=lang == config.default_language,
        kind=kind,
        folder_slug=folder_slug,
        translations=tuple(table.items()),
        switcher=tuple(links),
        switcher_html=render_switcher(links),
        media_dir=media_dir,
    )


__all__ = ["PageContext", "build_page_context"]
