"""Detection of the legacy ``{lang}/{slug}/index.md`` layout."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .errors import LayoutNotFound

PRIMARY_DOCUMENT = "index.md"
STAGING_DIRNAME = "_new_structure"
BACKUP_DIRNAME = "_old_structure_backup"
MARKER_FILENAME = "_migration_state.json"


def is_reserved(name: str) -> bool:
    """Working directories and hidden entries never count as content."""

    return name.startswith("_") or name.startswith(".")


def _is_language_dir(path: Path) -> bool:
    for child in path.iterdir():
        if child.is_dir() and (child / PRIMARY_DOCUMENT).is_file():
            return True
    return False


def order_languages(detected: Iterable[str], configured: Iterable[str] = ()) -> List[str]:
    """Configured languages first in configured order, the rest alphabetically."""

    found = set(detected)
    ordered = [lang for lang in configured if lang in found]
    ordered.extend(sorted(found - set(ordered)))
    return ordered


def detect_legacy_languages(kind_root: Path, configured: Iterable[str] = ()) -> List[str]:
    """Return language folders of the legacy layout under ``kind_root``.

    An empty list means the tree is already in the current layout.
    """

    if not kind_root.is_dir():
        raise LayoutNotFound(kind_root)

    detected = [
        entry.name
        for entry in kind_root.iterdir()
        if entry.is_dir() and not is_reserved(entry.name) and _is_language_dir(entry)
    ]
    return order_languages(detected, configured)


__all__ = [
    "BACKUP_DIRNAME",
    "MARKER_FILENAME",
    "PRIMARY_DOCUMENT",
    "STAGING_DIRNAME",
    "detect_legacy_languages",
    "is_reserved",
    "order_languages",
]
