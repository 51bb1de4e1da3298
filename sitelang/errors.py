"""Error taxonomy for layout detection, migration and configuration."""

from __future__ import annotations

from pathlib import Path


class SitelangError(Exception):
    """Base class for all errors raised by sitelang."""


class ConfigError(SitelangError):
    """site.yaml is missing required data or fails validation."""


class LayoutNotFound(SitelangError):
    """The content root for a kind does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Content directory not found: {path}")


class MissingPrimaryDocument(SitelangError):
    """A legacy slug folder has no index document.

    Recoverable: the collector records it as a warning and skips the slug.
    """

    def __init__(self, slug: str, language: str, path: Path, reason: str | None = None) -> None:
        self.slug = slug
        self.language = language
        self.path = path
        self.reason = reason
        message = reason or f"No index.md found in {path}"
        super().__init__(f"[{language}/{slug}] {message}")


class StagingFailure(SitelangError):
    """An I/O error while building the staging area.

    Raised before anything destructive happens, so the legacy tree is intact.
    """

    def __init__(
        self,
        message: str,
        *,
        slug: str | None = None,
        language: str | None = None,
        path: Path | None = None,
    ) -> None:
        self.slug = slug
        self.language = language
        self.path = path
        context = ", ".join(
            f"{name}={value}"
            for name, value in (("slug", slug), ("lang", language), ("path", path))
            if value is not None
        )
        super().__init__(f"{message} ({context})" if context else message)


class DestructivePhaseFailure(SitelangError):
    """An I/O error while relocating the legacy tree or promoting staged items.

    The content root may be partially migrated; the phase marker file
    describes which moves already happened.
    """

    def __init__(self, message: str, *, step: str, path: Path | None = None, marker: Path | None = None) -> None:
        self.step = step
        self.path = path
        self.marker = marker
        detail = f"{message} during {step}"
        if path is not None:
            detail += f" ({path})"
        if marker is not None:
            detail += f"; see {marker} to recover"
        super().__init__(detail)


__all__ = [
    "ConfigError",
    "DestructivePhaseFailure",
    "LayoutNotFound",
    "MissingPrimaryDocument",
    "SitelangError",
    "StagingFailure",
]
