"""Front-matter parsing for markdown documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple

import yaml
from pydantic import ValidationError

from .models import FrontMatter

DELIMITER = "---"


def split_front_matter(text: str) -> Tuple[dict, str]:
    """Return (front_matter_dict, body).

    Documents without a leading ``---`` block have empty front-matter and are
    returned unchanged as the body. Raises ``ValueError`` on malformed YAML.
    """

    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            closing_index = idx
            break
    else:
        return {}, text

    fm_text = "".join(lines[1:closing_index])
    body = "".join(lines[closing_index + 1 :])
    if not fm_text.strip():
        return {}, body

    try:
        data: Any = yaml.safe_load(fm_text) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid front-matter YAML: {exc}") from exc
    if not isinstance(data, dict):
        data = {}
    return data, body


def parse_front_matter(text: str) -> FrontMatter:
    data, _ = split_front_matter(text)
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid front-matter fields: {exc}") from exc


def read_front_matter(path: Path) -> FrontMatter:
    """Read a markdown file and return its validated front-matter."""

    return parse_front_matter(path.read_text(encoding="utf-8"))


def public_slug(meta: FrontMatter, folder_slug: str) -> str:
    """Front-matter slug override, falling back to the folder slug."""

    return meta.slug or folder_slug


__all__ = ["parse_front_matter", "public_slug", "read_front_matter", "split_front_matter"]
