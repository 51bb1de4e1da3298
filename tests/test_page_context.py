from pathlib import Path

from sitelang.models import SiteConfig
from sitelang.page_context import build_page_context


def _config() -> SiteConfig:
    return SiteConfig(languages=["en", "ru"], language_names={"en": "EN", "ru": "RU"})


def _doc(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_post_context_carries_switcher_and_media_dir(tmp_path: Path):
    _doc(tmp_path / "posts" / "setup-ssh" / "en.md", "---\ntitle: SSH\n---\n")
    _doc(tmp_path / "posts" / "setup-ssh" / "ru.md", "---\nslug: nastroyka-ssh\n---\n")

    ctx = build_page_context(_config(), tmp_path, "ru", "post", "setup-ssh")

    assert ctx.lang_prefix == "/ru"
    assert not ctx.is_default
    assert dict(ctx.translations) == {"en": "setup-ssh", "ru": "nastroyka-ssh"}
    assert 'href="/posts/setup-ssh/"' in ctx.switcher_html
    assert ctx.media_href("diagram.png") == "/posts/setup-ssh/diagram.png"
    assert ctx.media_href("https://example.com/x.png") == "https://example.com/x.png"
    assert ctx.media_href("/static/logo.svg") == "/static/logo.svg"
    assert ctx.template_vars()["langSwitcher"] == ctx.switcher_html


def test_single_language_post_has_empty_switcher(tmp_path: Path):
    _doc(tmp_path / "posts" / "solo" / "en.md", "---\ntitle: Solo\n---\n")

    ctx = build_page_context(_config(), tmp_path, "en", "post", "solo")

    assert ctx.switcher == ()
    assert ctx.switcher_html == ""
    assert ctx.is_default
    assert ctx.template_vars()["langPrefix"] == ""


def test_page_context_defaults_to_default_language(tmp_path: Path):
    ctx = build_page_context(_config(), tmp_path)

    assert ctx.lang == "en"
    assert [link.target_url for link in ctx.switcher] == ["/", "/ru/"]
    assert ctx.media_href("img.png") == "img.png"


def test_contexts_are_independent(tmp_path: Path):
    _doc(tmp_path / "posts" / "a" / "en.md", "x")
    _doc(tmp_path / "projects" / "b" / "en.md", "x")

    first = build_page_context(_config(), tmp_path, "en", "post", "a")
    second = build_page_context(_config(), tmp_path, "en", "project", "b")

    assert first.media_href("pic.png") == "/posts/a/pic.png"
    assert second.media_href("pic.png") == "/projects/b/pic.png"
