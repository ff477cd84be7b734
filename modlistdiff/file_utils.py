from __future__ import annotations

import shutil
from pathlib import Path

from .logging_utils import log_info


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_text_file(path: Path) -> str:
    """Read an export or snapshot; launcher exports sometimes start with a BOM."""

    if not path.exists():
        raise FileNotFoundError(f"Cannot read missing file: {path}")
    with path.open("r", encoding="utf-8-sig", errors="ignore") as handle:
        return handle.read()


def backup_file(source: Path, backup_dir: Path) -> Path:
    if not source.exists():
        raise FileNotFoundError(f"Cannot backup missing file: {source}")
    ensure_directory(backup_dir)
    destination = backup_dir / (source.name + ".bak")
    if not destination.exists():
        shutil.copy2(source, destination)
        log_info(f"Created backup: {destination}")
    else:
        log_info(f"Backup already exists: {destination}")
    return destination


def write_text_file(path: Path, text: str, backup_dir: Path | None = None) -> Path:
    """Write text to ``path``, first backing up an existing file when asked to."""

    if backup_dir is not None and path.exists():
        backup_file(path, backup_dir)
    ensure_directory(path.parent)
    with path.open("w", encoding="utf-8", newline="") as writer:
        writer.write(text)
    return path
