import json
import subprocess
import sys
from pathlib import Path

import pytest

from sitelang.cli import main

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _site(tmp_path: Path) -> Path:
    config = tmp_path / "site.yaml"
    _write(config, "languages: [en, ru]\ncontentDir: content\n")
    content = tmp_path / "content"
    _write(content / "posts" / "en" / "setup-ssh" / "index.md", "---\ntitle: SSH\n---\n")
    _write(content / "posts" / "ru" / "setup-ssh" / "index.md", "---\nslug: nastroyka-ssh\n---\n")
    return config


def test_migrate_dry_run_then_live(tmp_path: Path, capsys):
    config = _site(tmp_path)
    content = tmp_path / "content"

    main(["migrate", "--config", str(config), "--content-dir", str(content), "--kind", "post", "--dry-run"])
    out = capsys.readouterr().out
    assert "Mode: DRY RUN" in out
    assert "--- DRY RUN COMPLETE ---" in out
    assert (content / "posts" / "en" / "setup-ssh" / "index.md").exists()

    main(["migrate", "--config", str(config), "--content-dir", str(content), "--json"])
    captured = capsys.readouterr()
    assert "Skipping projects" in captured.err
    summary = json.loads(captured.out[captured.out.index("[\n"):])
    assert summary[0]["kind"] == "post"
    assert summary[0]["mode"] == "live"
    assert (content / "posts" / "setup-ssh" / "ru.md").exists()


def test_translations_and_switcher_commands(tmp_path: Path, capsys):
    config = _site(tmp_path)
    content = tmp_path / "content"
    main(["migrate", "--config", str(config), "--content-dir", str(content), "--kind", "post"])
    capsys.readouterr()

    main(["translations", "setup-ssh", "--config", str(config), "--content-dir", str(content)])
    assert json.loads(capsys.readouterr().out) == {"en": "setup-ssh", "ru": "nastroyka-ssh"}

    main(["switcher", "setup-ssh", "--lang", "ru", "--config", str(config), "--content-dir", str(content)])
    html = capsys.readouterr().out
    assert 'href="/posts/setup-ssh/"' in html
    assert '<span class="lang-current">' in html


def test_missing_content_dir_exits_with_error(tmp_path: Path, capsys):
    config = _site(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["migrate", "--config", str(config), "--content-dir", str(tmp_path / "nowhere"), "--kind", "post"])

    assert excinfo.value.code == 1
    assert "Content directory not found" in capsys.readouterr().err


def test_module_entrypoint_lists_posts(tmp_path: Path):
    config = _site(tmp_path)
    content = tmp_path / "content"
    _write(content / "posts" / "en" / "hello" / "index.md", "---\ntitle: Hello\n---\n")

    subprocess.run(
        [sys.executable, "-m", "sitelang.cli", "migrate", "--config", str(config), "--content-dir", str(content)],
        check=True,
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
    )
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "sitelang.cli",
            "list",
            "--lang",
            "ru",
            "--config",
            str(config),
            "--content-dir",
            str(content),
        ],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
    assert '<a href="/ru/posts/nastroyka-ssh/">setup-ssh</a>' in result.stdout
    assert "hello" not in result.stdout
