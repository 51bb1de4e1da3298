"""Per-item translation lookup in the ``{kind}/{slug}/{lang}.md`` layout."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

from .frontmatter import public_slug, read_front_matter
from .io_utils import warn
from .models import ContentKind, get_kind

TranslationTable = Dict[str, str]


def item_dir(content_root: Path, kind: ContentKind | str, folder_slug: str) -> Path:
    kind = get_kind(kind)
    if kind.directory is None:
        raise ValueError(f"Content kind '{kind.name}' has no item directories")
    return content_root / kind.directory / folder_slug


def resolve_translations(
    content_root: Path,
    folder_slug: str,
    kind: ContentKind | str,
    languages: Iterable[str],
) -> TranslationTable:
    """Map each language with a document for ``folder_slug`` to its public slug.

    Read from disk on every call. A missing item directory yields ``{}``.
    Keys follow the configured language order.
    """

    directory = item_dir(content_root, kind, folder_slug)
    if not directory.is_dir():
        return {}

    translations: TranslationTable = {}
    for lang in languages:
        md_path = directory / f"{lang}.md"
        if not md_path.is_file():
            continue
        try:
            meta = read_front_matter(md_path)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            warn(f"  Warning: cannot read front-matter of {md_path}: {exc}")
            translations[lang] = folder_slug
            continue
        translations[lang] = public_slug(meta, folder_slug)
    return translations


def available_languages(
    content_root: Path,
    folder_slug: str,
    kind: ContentKind | str,
    languages: Iterable[str],
) -> List[str]:
    """Languages that have a document for ``folder_slug``, in configured order."""

    directory = item_dir(content_root, kind, folder_slug)
    if not directory.is_dir():
        return []
    return [lang for lang in languages if (directory / f"{lang}.md").is_file()]


def page_translations(languages: Iterable[str]) -> TranslationTable:
    """Bare pages exist in every configured language and carry no slug."""

    return {lang: "" for lang in languages}


__all__ = [
    "TranslationTable",
    "available_languages",
    "item_dir",
    "page_translations",
    "resolve_translations",
]
