from pathlib import Path

import pytest

from sitelang.errors import LayoutNotFound
from sitelang.layout import detect_legacy_languages, order_languages


def _touch(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_missing_root_raises(tmp_path: Path):
    with pytest.raises(LayoutNotFound) as excinfo:
        detect_legacy_languages(tmp_path / "posts")
    assert excinfo.value.path == tmp_path / "posts"


def test_language_folder_needs_a_slug_with_index(tmp_path: Path):
    posts = tmp_path / "posts"
    _touch(posts / "en" / "hello" / "index.md")
    _touch(posts / "ru" / "privet" / "notes.txt")
    _touch(posts / "de" / "README.md")

    assert detect_legacy_languages(posts) == ["en"]


def test_reserved_and_current_layout_folders_are_ignored(tmp_path: Path):
    posts = tmp_path / "posts"
    _touch(posts / "_old_structure_backup" / "en" / "hello" / "index.md")
    _touch(posts / "_new_structure" / "x" / "index.md")
    _touch(posts / "hello" / "en.md")
    _touch(posts / "hello" / "ru.md")

    assert detect_legacy_languages(posts) == []


def test_configured_languages_come_first():
    assert order_languages({"fr", "ru", "en", "de"}, ["ru", "en"]) == ["ru", "en", "de", "fr"]


def test_detected_order_follows_config(tmp_path: Path):
    posts = tmp_path / "posts"
    for lang in ("en", "ru", "de"):
        _touch(posts / lang / "hello" / "index.md")

    assert detect_legacy_languages(posts, ["ru", "en"]) == ["ru", "en", "de"]
