"""View models for the post list and the project grid of one language."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .frontmatter import public_slug, read_front_matter
from .io_utils import warn
from .layout import is_reserved
from .models import POST, PROJECT, FrontMatter
from .navigation import content_url, template_env

DEFAULT_DATE = "1970-01-01"
COVER_RE = re.compile(r"^cover\.(png|jpe?g|gif|svg|webp)$", re.IGNORECASE)
FALLBACK_COVER_RE = re.compile(r"image1\.(png|jpe?g|gif|svg|webp)$", re.IGNORECASE)
VIDEO_FILENAME = "video.mp4"


@dataclass
class PostEntry:
    folder_slug: str
    slug: str
    title: str
    date: str
    url: str


@dataclass
class ProjectEntry(PostEntry):
    featured: bool = False
    cover: Optional[str] = None
    has_video: bool = False

    @property
    def cover_href(self) -> str:
        # Media lives once per item, so the cover path never carries a language prefix.
        if not self.cover:
            return ""
        return f"/{PROJECT.directory}/{self.folder_slug}/{self.cover}"


@dataclass
class ProjectsView:
    featured: Optional[ProjectEntry] = None
    grid: List[ProjectEntry] = field(default_factory=list)


def _sort_key(date_text: str) -> dt.date:
    try:
        return dt.date.fromisoformat(date_text[:10])
    except ValueError:
        return dt.date.min


def _folder_slugs(root: Path) -> List[str]:
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir() and not is_reserved(p.name))


def _load_meta(md_path: Path) -> Optional[FrontMatter]:
    if not md_path.is_file():
        return None
    try:
        return read_front_matter(md_path)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        warn(f"  Warning: skipping {md_path}: {exc}")
        return None


def list_posts(content_root: Path, lang: str, languages: Sequence[str]) -> List[PostEntry]:
    """Posts that have a document in ``lang``, newest first."""

    posts_root = content_root / POST.directory
    entries: List[PostEntry] = []
    for folder_slug in _folder_slugs(posts_root):
        meta = _load_meta(posts_root / folder_slug / f"{lang}.md")
        if meta is None:
            continue
        slug = public_slug(meta, folder_slug)
        entries.append(
            PostEntry(
                folder_slug=folder_slug,
                slug=slug,
                title=meta.title or folder_slug,
                date=meta.date or DEFAULT_DATE,
                url=content_url(lang, POST, slug, languages),
            )
        )
    entries.sort(key=lambda entry: _sort_key(entry.date), reverse=True)
    return entries


def _find_cover(item_dir: Path) -> Optional[str]:
    names = sorted(p.name for p in item_dir.iterdir() if p.is_file())
    for pattern in (COVER_RE, FALLBACK_COVER_RE):
        for name in names:
            if pattern.search(name):
                return name
    return None


def list_projects(content_root: Path, lang: str, languages: Sequence[str]) -> ProjectsView:
    """Projects in ``lang``: the featured one (or newest) and the rest."""

    projects_root = content_root / PROJECT.directory
    entries: List[ProjectEntry] = []
    for folder_slug in _folder_slugs(projects_root):
        item_dir = projects_root / folder_slug
        meta = _load_meta(item_dir / f"{lang}.md")
        if meta is None:
            continue
        slug = public_slug(meta, folder_slug)
        entries.append(
            ProjectEntry(
                folder_slug=folder_slug,
                slug=slug,
                title=meta.title or folder_slug,
                date=meta.date or DEFAULT_DATE,
                url=content_url(lang, PROJECT, slug, languages),
                featured=meta.featured,
                cover=_find_cover(item_dir),
                has_video=(item_dir / VIDEO_FILENAME).is_file(),
            )
        )
    entries.sort(key=lambda entry: _sort_key(entry.date), reverse=True)

    if not entries:
        return ProjectsView()
    featured = next((entry for entry in entries if entry.featured), entries[0])
    return ProjectsView(featured=featured, grid=[entry for entry in entries if entry is not featured])


def render_posts_list(entries: Sequence[PostEntry]) -> str:
    template = template_env().get_template("posts_list.jinja")
    return template.render(entries=entries).strip()


def render_projects(view: ProjectsView) -> dict:
    """Return ``{"featured": html, "grid": html}`` for the projects section."""

    template = template_env().get_template("project_item.jinja")

    def _anchor(entry: ProjectEntry) -> str:
        return template.render(entry=entry, full=entry is view.featured).strip()

    return {
        "featured": _anchor(view.featured) if view.featured else "",
        "grid": "\n\n".join(_anchor(entry) for entry in view.grid),
    }


__all__ = [
    "PostEntry",
    "ProjectEntry",
    "ProjectsView",
    "list_posts",
    "list_projects",
    "render_posts_list",
    "render_projects",
]
