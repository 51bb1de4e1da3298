"""Migration from the per-language layout to the per-item layout.

Old structure: ``{kind}/{lang}/{slug}/index.md``
New structure: ``{kind}/{slug}/{lang}.md``

The migration stages the complete new tree in ``_new_structure`` first. Only
when every item has been staged and checked are the legacy language folders
moved into ``_old_structure_backup`` and the staged items promoted. Nothing is
deleted in place; the backup is left for a human to remove.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .collector import Collection, collect_items, duplicate_media, media_assets
from .errors import DestructivePhaseFailure, MissingPrimaryDocument, StagingFailure
from .io_utils import info, read_json, warn, write_json_stable
from .layout import (
    BACKUP_DIRNAME,
    MARKER_FILENAME,
    PRIMARY_DOCUMENT,
    STAGING_DIRNAME,
    detect_legacy_languages,
    is_reserved,
)
from .models import POST, ContentItem, ContentKind
from .util_fs import copy_entry, ensure_dir, move_path, remove_tree, write_bytes

Logger = Callable[[str], None]


@dataclass(frozen=True)
class StageOperation:
    """A single write into the staging area."""

    action: str  # "document" or "media"
    slug: str
    language: str
    target: Path
    source: Path
    body: Optional[bytes] = None


@dataclass
class MigrationReport:
    """What a migration did (or, in dry-run, would do)."""

    kind: ContentKind
    dry_run: bool
    languages: List[str]
    item_count: int = 0
    plan: List[str] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    warnings: List[MissingPrimaryDocument] = field(default_factory=list)
    backup_dir: Optional[Path] = None

    @property
    def noop(self) -> bool:
        return not self.languages

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name,
            "mode": "dry-run" if self.dry_run else "live",
            "languages": self.languages,
            "items": self.item_count,
            "plan": self.plan,
            "warnings": [str(problem) for problem in self.warnings],
            "backupDir": str(self.backup_dir) if self.backup_dir else None,
        }


def _timestamp() -> str:
    return dt.datetime.now().strftime("%Y%m%d%H%M%S")


def check_no_pending_migration(kind_root: Path) -> None:
    """Refuse to run while a previous destructive phase is unfinished."""

    marker = kind_root / MARKER_FILENAME
    if not marker.exists():
        return
    try:
        state = read_json(marker)
        phase = state.get("phase", "unknown")
    except (OSError, ValueError):
        phase = "unknown"
    raise DestructivePhaseFailure(
        f"A previous migration stopped in phase '{phase}'",
        step="preflight",
        path=kind_root,
        marker=marker,
    )


class StructureMigrator:
    """Stage, then promote, the per-item layout for one content kind."""

    def __init__(
        self,
        kind_root: Path,
        kind: ContentKind = POST,
        *,
        dry_run: bool = False,
        log: Logger = info,
        timestamp: Callable[[], str] = _timestamp,
        configured_languages: Iterable[str] = (),
    ) -> None:
        self.kind_root = kind_root
        self.kind = kind
        self.dry_run = dry_run
        self._log = log
        self._timestamp = timestamp
        self.configured_languages = list(configured_languages)
        self.staging_dir = kind_root / STAGING_DIRNAME
        self.marker_path = kind_root / MARKER_FILENAME

    def _emit(self, report: MigrationReport, line: str, *, plan: bool = False) -> None:
        report.lines.append(line)
        if plan:
            report.plan.append(line)
        self._log(line)

    # -- planning -------------------------------------------------------

    def _plan_item(self, item: ContentItem) -> List[StageOperation]:
        item_dir = self.staging_dir / item.slug
        ops: List[StageOperation] = []
        for lang, variant in item.variants.items():
            ops.append(
                StageOperation(
                    action="document",
                    slug=item.slug,
                    language=lang,
                    target=item_dir / f"{lang}.md",
                    source=variant.source / PRIMARY_DOCUMENT,
                    body=variant.body.encode("utf-8"),
                )
            )
        for asset in media_assets(item):
            ops.append(
                StageOperation(
                    action="media",
                    slug=item.slug,
                    language=asset.language,
                    target=item_dir / asset.name,
                    source=asset.source,
                )
            )
        return ops

    def _check_collisions(self, collection: Collection, languages: List[str]) -> None:
        # Languages configured but absent from the legacy tree still own their {lang}.md name.
        document_names = {f"{lang}.md" for lang in [*languages, *self.configured_languages]}
        for slug, item in collection.items.items():
            if is_reserved(slug):
                raise StagingFailure(
                    "Slug folder name is reserved for migration working entries",
                    slug=slug,
                    language=next(iter(item.variants), None),
                    path=next(iter(item.variants.values())).source,
                )
            target = self.kind_root / slug
            if target.exists() and slug not in languages:
                raise StagingFailure(
                    "Target already exists in the content root",
                    slug=slug,
                    path=target,
                )
            for lang, variant in item.variants.items():
                for name in variant.media:
                    if name in document_names:
                        raise StagingFailure(
                            f"Media file would shadow the {name} language document",
                            slug=slug,
                            language=lang,
                            path=variant.source / name,
                        )

    # -- staging --------------------------------------------------------

    def _apply(self, op: StageOperation) -> None:
        if op.action == "document":
            write_bytes(op.target, op.body or b"")
        else:
            copy_entry(op.source, op.target)

    def _verify(self, op: StageOperation) -> None:
        if op.action == "document":
            if op.target.read_bytes() != op.body:
                raise StagingFailure(
                    "Staged document does not match its source",
                    slug=op.slug,
                    language=op.language,
                    path=op.target,
                )
        elif not op.target.exists():
            raise StagingFailure(
                "Staged media is missing", slug=op.slug, language=op.language, path=op.target
            )

    def _discard_staging(self) -> None:
        try:
            remove_tree(self.staging_dir)
        except OSError as exc:
            warn(f"  Warning: could not remove staging area {self.staging_dir}: {exc}")

    def stage(self, collection: Collection, languages: List[str], report: MigrationReport) -> None:
        """Steps 1-3: build the new layout in the staging area (or only log it)."""

        self._check_collisions(collection, languages)

        if not self.dry_run:
            if self.staging_dir.exists():
                warn(f"  Warning: removing stale staging area {self.staging_dir}")
                self._discard_staging()
            try:
                ensure_dir(self.staging_dir)
            except OSError as exc:
                raise StagingFailure(f"Could not create staging area: {exc}", path=self.staging_dir) from exc

        staged: List[StageOperation] = []
        label = self.kind.name.capitalize()
        for item in collection.items.values():
            self._emit(report, f"{label}: {item.slug}", plan=True)
            shadowed = {(asset.name, asset.language) for asset in duplicate_media(item)}
            for op in self._plan_item(item):
                if op.action == "document":
                    line = f"  {op.language}: {op.source} -> {op.slug}/{op.language}.md"
                else:
                    line = f"  media: {op.target.name}"
                self._emit(report, line, plan=True)
                if self.dry_run:
                    continue
                try:
                    self._apply(op)
                except OSError as exc:
                    self._discard_staging()
                    raise StagingFailure(
                        f"Could not stage {op.action} from {op.source}: {exc}",
                        slug=op.slug,
                        language=op.language,
                        path=op.target,
                    ) from exc
                staged.append(op)
            for name, lang in sorted(shadowed):
                self._emit(report, f"  media: {name} ({lang} copy skipped, already staged)", plan=True)

        if self.dry_run:
            return
        try:
            for op in staged:
                self._verify(op)
        except StagingFailure:
            self._discard_staging()
            raise
        except OSError as exc:
            self._discard_staging()
            raise StagingFailure(f"Could not verify staging area: {exc}", path=self.staging_dir) from exc

    # -- destructive phase ---------------------------------------------

    def _backup_dir(self) -> Path:
        backup = self.kind_root / BACKUP_DIRNAME
        if backup.exists():
            backup = self.kind_root / f"{BACKUP_DIRNAME}-{self._timestamp()}"
        return backup

    def _write_marker(
        self,
        phase: str,
        backup_dir: Path,
        languages: List[str],
        backed_up: List[str],
        promoted: List[str],
    ) -> None:
        state: Dict[str, object] = {
            "phase": phase,
            "kind": self.kind.name,
            "backupDir": str(backup_dir),
            "stagingDir": str(self.staging_dir),
            "languages": languages,
            "backedUp": backed_up,
            "promoted": promoted,
        }
        write_json_stable(self.marker_path, state)

    def promote(self, languages: List[str], slugs: List[str]) -> Path:
        """Step 4: move legacy folders to the backup, then staged items into place."""

        backup_dir = self._backup_dir()
        backed_up: List[str] = []
        promoted: List[str] = []

        step = "backup"
        current: Path | None = None
        try:
            self._write_marker(step, backup_dir, languages, backed_up, promoted)
            for lang in languages:
                current = self.kind_root / lang
                if current.exists():
                    move_path(current, backup_dir / lang)
                    backed_up.append(lang)
                    self._write_marker(step, backup_dir, languages, backed_up, promoted)

            step = "promote"
            self._write_marker(step, backup_dir, languages, backed_up, promoted)
            for slug in slugs:
                current = self.staging_dir / slug
                move_path(current, self.kind_root / slug)
                promoted.append(slug)
                self._write_marker(step, backup_dir, languages, backed_up, promoted)

            step = "cleanup"
            current = self.staging_dir
            self.staging_dir.rmdir()
            current = self.marker_path
            self.marker_path.unlink()
        except OSError as exc:
            raise DestructivePhaseFailure(
                str(exc), step=step, path=current, marker=self.marker_path
            ) from exc
        return backup_dir

    # -- entry point ----------------------------------------------------

    def migrate(self, collection: Collection, languages: List[str]) -> MigrationReport:
        report = MigrationReport(
            kind=self.kind,
            dry_run=self.dry_run,
            languages=list(languages),
            item_count=len(collection),
            warnings=list(collection.warnings),
        )
        self._emit(report, f"Migrating {len(collection)} {self.kind.directory}...")
        self._emit(report, f"Languages: {', '.join(languages)}")
        self._emit(report, f"Mode: {'DRY RUN' if self.dry_run else 'LIVE'}")

        self.stage(collection, languages, report)

        if self.dry_run:
            self._emit(report, "--- DRY RUN COMPLETE ---")
            self._emit(report, "No changes were made. Run without --dry-run to apply changes.")
            return report

        report.backup_dir = self.promote(languages, list(collection.items))
        self._emit(report, "--- MIGRATION COMPLETE ---")
        self._emit(report, f"Backup of old structure: {report.backup_dir}")
        self._emit(
            report,
            "Please verify the new structure and then delete the backup if everything is correct.",
        )
        return report


def migrate(
    collection: Collection,
    kind_root: Path,
    languages: List[str],
    *,
    kind: ContentKind = POST,
    dry_run: bool = False,
    log: Logger = info,
    configured_languages: Iterable[str] = (),
) -> MigrationReport:
    """Stage and (unless ``dry_run``) promote the collected items."""

    migrator = StructureMigrator(
        kind_root, kind, dry_run=dry_run, log=log, configured_languages=configured_languages
    )
    return migrator.migrate(collection, languages)


def run_migration(
    kind_root: Path,
    *,
    kind: ContentKind = POST,
    configured_languages: List[str] | None = None,
    dry_run: bool = False,
    log: Logger = info,
) -> MigrationReport:
    """Detect, collect and migrate one content kind.

    Returns a report with no languages when the tree is already migrated.
    """

    check_no_pending_migration(kind_root)
    languages = detect_legacy_languages(kind_root, configured_languages or ())
    if not languages:
        log("No language directories found. The structure may already be migrated.")
        log(f"Expected old structure: {kind.directory}/{{lang}}/{{slug}}/{PRIMARY_DOCUMENT}")
        return MigrationReport(kind=kind, dry_run=dry_run, languages=[])

    log(f"Detected languages: {', '.join(languages)}")
    collection = collect_items(kind_root, languages)
    log(f"Found {len(collection)} unique {kind.directory}")
    return migrate(
        collection,
        kind_root,
        languages,
        kind=kind,
        dry_run=dry_run,
        log=log,
        configured_languages=configured_languages or (),
    )


__all__ = [
    "MigrationReport",
    "StageOperation",
    "StructureMigrator",
    "check_no_pending_migration",
    "migrate",
    "run_migration",
]
