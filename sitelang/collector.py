"""Collection of legacy content into an in-memory map keyed by folder slug."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

from .errors import MissingPrimaryDocument
from .frontmatter import parse_front_matter, public_slug
from .io_utils import warn
from .layout import PRIMARY_DOCUMENT
from .models import ContentItem, LanguageVariant, MediaAsset


@dataclass
class Collection:
    """Result of walking a legacy tree. Nothing on disk is modified."""

    items: Dict[str, ContentItem] = field(default_factory=dict)
    warnings: List[MissingPrimaryDocument] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


def _read_document(path: Path) -> str:
    # Decode without newline translation so the body stays byte-faithful.
    return path.read_bytes().decode("utf-8")


def _variant_slug(body: str, folder_slug: str, index_path: Path) -> str:
    try:
        meta = parse_front_matter(body)
    except ValueError as exc:
        warn(f"  Warning: {exc} in {index_path}; using folder slug")
        return folder_slug
    return public_slug(meta, folder_slug)


def collect_items(kind_root: Path, languages: Iterable[str]) -> Collection:
    """Build slug -> language -> variant for the given legacy language folders.

    Slug folders without ``index.md`` and unreadable documents are skipped
    and recorded as warnings.
    """

    collection = Collection()

    for lang in languages:
        lang_dir = kind_root / lang
        if not lang_dir.is_dir():
            continue

        for slug_dir in sorted(p for p in lang_dir.iterdir() if p.is_dir()):
            slug = slug_dir.name
            index_path = slug_dir / PRIMARY_DOCUMENT
            if not index_path.is_file():
                problem = MissingPrimaryDocument(slug, lang, slug_dir)
                warn(f"  Warning: No {PRIMARY_DOCUMENT} found in {slug_dir}")
                collection.warnings.append(problem)
                continue

            try:
                body = _read_document(index_path)
            except (OSError, UnicodeDecodeError) as exc:
                problem = MissingPrimaryDocument(
                    slug, lang, index_path, reason=f"Cannot read {index_path}: {exc}"
                )
                warn(f"  Warning: {problem}")
                collection.warnings.append(problem)
                continue

            media = sorted(entry.name for entry in slug_dir.iterdir() if entry.name != PRIMARY_DOCUMENT)
            item = collection.items.setdefault(slug, ContentItem(slug=slug))
            item.variants[lang] = LanguageVariant(
                language=lang,
                body=body,
                public_slug=_variant_slug(body, slug, index_path),
                source=slug_dir,
                media=media,
            )

    return collection


def media_assets(item: ContentItem) -> List[MediaAsset]:
    """Media for an item, once per name, first language in enumeration order wins."""

    assets: Dict[str, MediaAsset] = {}
    for lang, variant in item.variants.items():
        for name in variant.media:
            assets.setdefault(name, MediaAsset(name=name, source=variant.source / name, language=lang))
    return list(assets.values())


def duplicate_media(item: ContentItem) -> List[MediaAsset]:
    """Media entries shadowed by an earlier language's file of the same name."""

    seen: set[str] = set()
    duplicates: List[MediaAsset] = []
    for lang, variant in item.variants.items():
        for name in variant.media:
            if name in seen:
                duplicates.append(MediaAsset(name=name, source=variant.source / name, language=lang))
            seen.add(name)
    return duplicates


__all__ = ["Collection", "collect_items", "duplicate_media", "media_assets"]
