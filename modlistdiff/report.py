from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Sequence

from openpyxl import Workbook

from .logging_utils import log_diff, log_info, log_ok
from .models import DiffResult, DiffSection, ModEntry
from .sizes import compute_modlist_total, entry_size, format_bytes

ENTRY_HEADER = ["display name", "source", "steam id", "url", "size bytes", "size"]


def print_diff_details(diff: DiffResult, name_a: str = "A", name_b: str = "B") -> None:
    if diff.only_in_a:
        log_diff(f"Mods only in {name_a}:")
        for entry in diff.only_in_a:
            log_diff(f"{entry.display_name} ({entry.source_label})", indent=2)
    else:
        log_ok(f"No mods are missing from {name_b}.")
    if diff.only_in_b:
        log_diff(f"Mods only in {name_b}:")
        for entry in diff.only_in_b:
            log_diff(f"{entry.display_name} ({entry.source_label})", indent=2)
    else:
        log_ok(f"No mods are missing from {name_a}.")
    log_info(f"Mods in both lists: {len(diff.common)}")
    if diff.duplicates_a or diff.duplicates_b:
        log_info(
            f"Ignored duplicate entries: {diff.duplicates_a} in {name_a}, {diff.duplicates_b} in {name_b}"
        )


def _build_entry_rows(entries: Sequence[ModEntry], sizes: Mapping[str, int] | None) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for entry in entries:
        size = entry_size(entry, sizes)
        rows.append(
            [
                entry.display_name,
                entry.source_label,
                entry.external_id,
                entry.external_url,
                size,
                format_bytes(size) if size is not None else None,
            ]
        )
    return rows


def _build_summary_rows(
    diff: DiffResult,
    name_a: str,
    name_b: str,
    sizes: Mapping[str, int] | None,
) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for section, label in (
        (DiffSection.ONLY_IN_A, f"only in {name_a}"),
        (DiffSection.ONLY_IN_B, f"only in {name_b}"),
        (DiffSection.COMMON, "common"),
    ):
        entries = diff.section(section)
        total = compute_modlist_total(entries, sizes) if sizes else None
        rows.append([label, len(entries), total])
    rows.append([f"duplicates dropped in {name_a}", diff.duplicates_a, None])
    rows.append([f"duplicates dropped in {name_b}", diff.duplicates_b, None])
    return rows


def export_report(
    output_path: Path,
    diff: DiffResult,
    name_a: str = "A",
    name_b: str = "B",
    sizes: Mapping[str, int] | None = None,
) -> None:
    """Write an Excel workbook with a summary sheet and one sheet per diff section."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()

    summary_sheet = workbook.active
    if not summary_sheet:
        summary_sheet = workbook.create_sheet("summary")
    else:
        summary_sheet.title = "summary"
    summary_sheet.append(["section", "mods", "known size bytes"])
    for row in _build_summary_rows(diff, name_a, name_b, sizes):
        summary_sheet.append(row)

    for section in DiffSection:
        sheet = workbook.create_sheet(section.value)
        sheet.append(ENTRY_HEADER)
        for row in _build_entry_rows(diff.section(section), sizes):
            sheet.append(row)

    workbook.save(output_path)
    workbook.close()


__all__ = ["print_diff_details", "export_report"]
