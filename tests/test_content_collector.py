from pathlib import Path

from sitelang.collector import collect_items, duplicate_media, media_assets


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def _tree(tmp_path: Path) -> Path:
    posts = tmp_path / "posts"
    _write(posts / "en" / "setup-ssh" / "index.md", b"---\ntitle: SSH\n---\nbody\n")
    _write(posts / "en" / "setup-ssh" / "diagram.png", b"en")
    _write(posts / "ru" / "setup-ssh" / "index.md", "---\nslug: nastroyka-ssh\n---\nтело\n".encode("utf-8"))
    _write(posts / "ru" / "setup-ssh" / "diagram.png", b"ru")
    _write(posts / "ru" / "setup-ssh" / "photo.jpg", b"jpg")
    _write(posts / "ru" / "broken" / "index.md", b"\xff\xfe not utf-8")
    (posts / "en" / "empty").mkdir(parents=True)
    return posts


def test_collects_variants_per_slug(tmp_path: Path):
    posts = _tree(tmp_path)

    collection = collect_items(posts, ["en", "ru"])

    assert list(collection.items) == ["setup-ssh"]
    item = collection.items["setup-ssh"]
    assert item.languages == ["en", "ru"]
    assert item.variants["en"].public_slug == "setup-ssh"
    assert item.variants["ru"].public_slug == "nastroyka-ssh"
    assert item.variants["ru"].media == ["diagram.png", "photo.jpg"]
    assert item.variants["ru"].source == posts / "ru" / "setup-ssh"
    assert item.variants["ru"].body == "---\nslug: nastroyka-ssh\n---\nтело\n"


def test_missing_or_unreadable_documents_are_warnings(tmp_path: Path, capsys):
    posts = _tree(tmp_path)

    collection = collect_items(posts, ["en", "ru"])

    problems = {(problem.language, problem.slug) for problem in collection.warnings}
    assert problems == {("en", "empty"), ("ru", "broken")}
    assert "No index.md found" in capsys.readouterr().err


def test_media_dedup_keeps_first_language(tmp_path: Path):
    posts = _tree(tmp_path)
    item = collect_items(posts, ["en", "ru"]).items["setup-ssh"]

    assets = {asset.name: asset for asset in media_assets(item)}

    assert set(assets) == {"diagram.png", "photo.jpg"}
    assert assets["diagram.png"].language == "en"
    assert assets["photo.jpg"].source == posts / "ru" / "setup-ssh" / "photo.jpg"
    assert [(asset.name, asset.language) for asset in duplicate_media(item)] == [("diagram.png", "ru")]


def test_collection_is_read_only(tmp_path: Path):
    posts = _tree(tmp_path)
    before = sorted(str(p) for p in tmp_path.rglob("*"))

    collect_items(posts, ["en", "ru", "de"])

    assert sorted(str(p) for p in tmp_path.rglob("*")) == before
