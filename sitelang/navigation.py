"""Language switcher construction and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .models import ContentKind, get_kind

DEFAULT_LANGUAGE_NAMES = {
    "en": "English",
    "ru": "Русский",
    "de": "Deutsch",
    "zh": "中文",
    "es": "Español",
    "fr": "Français",
    "ja": "日本語",
    "ko": "한국어",
}

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class SwitcherLink:
    language: str
    is_current: bool
    target_url: str
    display_name: str


def language_prefix(lang: str, languages: Sequence[str]) -> str:
    """URL prefix for ``lang``: empty for the default (first) language."""

    if not languages or lang == languages[0]:
        return ""
    return f"/{lang}"


def content_url(lang: str, kind: ContentKind | str, public_slug: str, languages: Sequence[str]) -> str:
    kind = get_kind(kind)
    prefix = language_prefix(lang, languages)
    if kind.url_segment:
        return f"{prefix}/{kind.url_segment}/{public_slug}/"
    return f"{prefix}/"


def display_name(lang: str, language_names: Mapping[str, str] | None = None) -> str:
    if language_names and lang in language_names:
        return language_names[lang]
    return DEFAULT_LANGUAGE_NAMES.get(lang, lang.upper())


def build_switcher(
    current_language: str,
    translations: Mapping[str, str],
    kind: ContentKind | str,
    languages: Sequence[str],
    language_names: Mapping[str, str] | None = None,
) -> list[SwitcherLink]:
    """Build switcher entries, one per language in ``translations``.

    Each link uses that language's own public slug, so it always points at a
    page that exists in that language. Fewer than two translations, or fewer
    than two configured languages, produce no switcher.
    """

    if len(languages) < 2 or len(translations) < 2:
        return []

    return [
        SwitcherLink(
            language=lang,
            is_current=lang == current_language,
            target_url=content_url(lang, kind, slug, languages),
            display_name=display_name(lang, language_names),
        )
        for lang, slug in translations.items()
    ]


def template_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_switcher(links: Sequence[SwitcherLink]) -> str:
    """Render the switcher fragment; no links renders an empty string."""

    if not links:
        return ""
    template = template_env().get_template("lang_switcher.jinja")
    return template.render(links=links).strip()


__all__ = [
    "DEFAULT_LANGUAGE_NAMES",
    "SwitcherLink",
    "build_switcher",
    "content_url",
    "display_name",
    "language_prefix",
    "render_switcher",
    "template_env",
]
