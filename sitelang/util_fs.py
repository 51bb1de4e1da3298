"""Filesystem utilities for sitelang."""

import shutil
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def ensure_dir(path: PathLike) -> Path:
    """Ensure that a directory exists and return the Path object."""

    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def write_bytes(path: PathLike, content: bytes) -> Path:
    """Write raw bytes to a file, creating parent directories as needed."""

    file_path = Path(path)
    if file_path.parent != Path(""):
        file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(content)
    return file_path


def copy_entry(source: PathLike, destination: PathLike) -> Path:
    """Copy a file (with metadata) or a whole directory tree."""

    src = Path(source)
    dest = Path(destination)
    dest.parent.mkdir(parents=True, exist_ok=True)
    if src.is_dir():
        shutil.copytree(src, dest)
    else:
        shutil.copy2(src, dest)
    return dest


def move_path(source: PathLike, destination: PathLike) -> Path:
    """Relocate a file or directory, refusing to overwrite an existing target."""

    src = Path(source)
    dest = Path(destination)
    if dest.exists():
        raise FileExistsError(f"Refusing to overwrite existing path: {dest}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    src.rename(dest)
    return dest


def remove_tree(path: PathLike) -> None:
    directory = Path(path)
    if directory.exists():
        shutil.rmtree(directory)


__all__ = ["copy_entry", "ensure_dir", "move_path", "remove_tree", "write_bytes"]
