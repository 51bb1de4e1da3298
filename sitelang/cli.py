"""Command-line interface for sitelang."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import load_site_config
from .errors import LayoutNotFound, SitelangError
from .io_utils import stable_json_dumps, warn
from .listing import list_posts, list_projects, render_posts_list, render_projects
from .migrator import MigrationReport, run_migration
from .models import MIGRATABLE_KINDS, SiteConfig, get_kind
from .navigation import build_switcher, render_switcher
from .translations import resolve_translations


def _content_root(args: argparse.Namespace, config: SiteConfig) -> Path:
    if args.content_dir:
        return Path(args.content_dir)
    return config.content_root()


def _selected_kinds(name: str):
    if name == "all":
        return list(MIGRATABLE_KINDS)
    return [get_kind(name)]


def _handle_migrate(args: argparse.Namespace) -> None:
    config = load_site_config(Path(args.config) if args.config else None)
    content_root = _content_root(args, config)
    print("=== Content Migration ===")
    print(f"Content directory: {content_root.resolve()}")

    reports: list[MigrationReport] = []
    for kind in _selected_kinds(args.kind):
        kind_root = content_root / kind.directory
        print(f"\n--- {kind.directory} ---")
        try:
            report = run_migration(
                kind_root,
                kind=kind,
                configured_languages=config.languages,
                dry_run=args.dry_run,
            )
        except LayoutNotFound as exc:
            if args.kind != "all":
                raise
            warn(f"Skipping {kind.directory}: {exc}")
            continue
        reports.append(report)

    if args.json:
        print(stable_json_dumps([report.to_dict() for report in reports]), end="")


def _handle_translations(args: argparse.Namespace) -> None:
    config = load_site_config(Path(args.config) if args.config else None)
    table = resolve_translations(_content_root(args, config), args.slug, args.kind, config.languages)
    print(stable_json_dumps(table), end="")


def _handle_switcher(args: argparse.Namespace) -> None:
    config = load_site_config(Path(args.config) if args.config else None)
    lang = args.lang or config.default_language
    table = resolve_translations(_content_root(args, config), args.slug, args.kind, config.languages)
    links = build_switcher(lang, table, args.kind, config.languages, config.language_names)
    html = render_switcher(links)
    if html:
        print(html)


def _handle_list(args: argparse.Namespace) -> None:
    config = load_site_config(Path(args.config) if args.config else None)
    lang = args.lang or config.default_language
    content_root = _content_root(args, config)
    if get_kind(args.kind).name == "post":
        print(render_posts_list(list_posts(content_root, lang, config.languages)))
        return
    markup = render_projects(list_projects(content_root, lang, config.languages))
    print(markup["featured"])
    if markup["grid"]:
        print()
        print(markup["grid"])


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to site.yaml (default: config/site.yaml when present).",
    )
    parser.add_argument(
        "--content-dir",
        dest="content_dir",
        default=None,
        help="Content directory holding posts/ and projects/ (default from config).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Multilingual content tooling for the site.")
    subparsers = parser.add_subparsers(dest="command")

    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Convert {lang}/{slug}/index.md content to {slug}/{lang}.md.",
        description=(
            "Stage the per-item layout, then move the legacy language folders "
            "into _old_structure_backup and promote the staged items."
        ),
    )
    _add_common(migrate_parser)
    migrate_parser.add_argument(
        "--kind",
        choices=["post", "project", "all"],
        default="all",
        help="Content kind to migrate.",
    )
    migrate_parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Show what would be done without making changes.",
    )
    migrate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON summary of every migration report.",
    )
    migrate_parser.set_defaults(func=_handle_migrate)

    translations_parser = subparsers.add_parser(
        "translations",
        help="Print the language -> public slug table for an item.",
    )
    _add_common(translations_parser)
    translations_parser.add_argument("slug", help="Folder slug of the item.")
    translations_parser.add_argument("--kind", choices=["post", "project"], default="post")
    translations_parser.set_defaults(func=_handle_translations)

    switcher_parser = subparsers.add_parser(
        "switcher",
        help="Render the language switcher for an item.",
    )
    _add_common(switcher_parser)
    switcher_parser.add_argument("slug", help="Folder slug of the item.")
    switcher_parser.add_argument("--kind", choices=["post", "project"], default="post")
    switcher_parser.add_argument("--lang", default=None, help="Current language (default language if omitted).")
    switcher_parser.set_defaults(func=_handle_switcher)

    list_parser = subparsers.add_parser(
        "list",
        help="Render the post list or project grid for a language.",
    )
    _add_common(list_parser)
    list_parser.add_argument("--kind", choices=["post", "project"], default="post")
    list_parser.add_argument("--lang", default=None, help="Language to list (default language if omitted).")
    list_parser.set_defaults(func=_handle_list)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except SitelangError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
