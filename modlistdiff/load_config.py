from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import toml

from .logging_utils import log_warn
from .models import DEFAULT_CHAT_LIMIT, DEFAULT_SECTIONS, DiffSection, OutputFormat, SortOrder


@dataclass(slots=True)
class ProgramConfig:
    style: OutputFormat = OutputFormat.PLAIN
    include_links: bool = False
    chat_limit: int = DEFAULT_CHAT_LIMIT
    sections: List[DiffSection] = field(default_factory=lambda: list(DEFAULT_SECTIONS))
    sort: SortOrder = SortOrder.DEFAULT
    labels: Dict[DiffSection, str] = field(default_factory=dict)


def _load_toml(path: Path, description: str) -> Dict[str, Any]:
    raw_text = path.read_text(encoding="utf-8")
    try:
        return toml.loads(raw_text)
    except toml.TomlDecodeError as exc:
        raise ValueError(f"Invalid TOML in {description}: {path}") from exc


def load_program_config(config_path: Path) -> ProgramConfig:
    """Load formatter defaults from a TOML file.

    Expected layout::

        [format]
        style = "chat"          # plain | chat | html-links
        include_links = true
        chat_limit = 2000
        sections = ["only_in_a", "only_in_b"]
        sort = "a-z"

        [labels]
        only_in_a = "Removed"
        only_in_b = "Added"

    A missing file yields the defaults.
    """

    config = ProgramConfig()
    if not config_path.exists():
        log_warn(f"Config file {config_path} not found. Proceeding with defaults.")
        return config

    raw = _load_toml(config_path, "config file")
    format_table = raw.get("format", {})
    try:
        if "style" in format_table:
            config.style = OutputFormat(format_table["style"])
        if "include_links" in format_table:
            config.include_links = bool(format_table["include_links"])
        if "chat_limit" in format_table:
            config.chat_limit = int(format_table["chat_limit"])
        if "sections" in format_table:
            config.sections = [DiffSection(section) for section in format_table["sections"]]
        if "sort" in format_table:
            config.sort = SortOrder(format_table["sort"])
        for key, label in raw.get("labels", {}).items():
            config.labels[DiffSection(key)] = str(label)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value in config file {config_path}: {exc}") from exc
    return config


def load_size_table(sizes_path: Path) -> Dict[str, int]:
    """Load a Steam id to byte count table from the ``[sizes]`` table of a TOML file."""

    if not sizes_path.exists():
        log_warn(f"Size table {sizes_path} not found. Sizes will not be shown.")
        return {}

    raw = _load_toml(sizes_path, "size table")
    sizes: Dict[str, int] = {}
    for steam_id, num_bytes in raw.get("sizes", {}).items():
        if not isinstance(num_bytes, int) or isinstance(num_bytes, bool) or num_bytes < 0:
            raise ValueError(f"Size for mod {steam_id} in {sizes_path} must be a non-negative integer.")
        sizes[str(steam_id)] = num_bytes
    return sizes
