from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence

from .models import ModEntry, ModList, SizeContext, SortOrder

BYTE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(num_bytes: int | float) -> str:
    """Render a byte count with binary units, e.g. 1536 -> '1.5 KB'."""

    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(num_bytes)} B"
    rendered = f"{value:.1f}"
    if rendered.endswith(".0"):
        rendered = rendered[:-2]
    return f"{rendered} {BYTE_UNITS[unit_index]}"


def entry_size(entry: ModEntry, sizes: Mapping[str, int] | None) -> int | None:
    if not sizes or not entry.external_id:
        return None
    return sizes.get(entry.external_id)


def compute_modlist_total(entries: Iterable[ModEntry], sizes: Mapping[str, int]) -> int:
    """Sum the known sizes; entries without a known size count as nothing."""

    total = 0
    for entry in entries:
        size = entry_size(entry, sizes)
        if size is not None:
            total += size
    return total


def build_size_context(
    list_a: ModList | None,
    list_b: ModList | None,
    sizes: Mapping[str, int],
) -> SizeContext:
    return SizeContext(
        sizes=dict(sizes),
        total_a=compute_modlist_total(list_a.entries, sizes) if list_a else None,
        total_b=compute_modlist_total(list_b.entries, sizes) if list_b else None,
    )


def size_footer(context: SizeContext, current_slot: str) -> str:
    """Describe the download change when moving from the current list to the other one."""

    if current_slot.upper() == "A":
        current, other = context.total_a, context.total_b
    else:
        current, other = context.total_b, context.total_a
    return f"{format_bytes(current or 0)} -> {format_bytes(other or 0)}"


def sort_entries(
    entries: Sequence[ModEntry],
    order: SortOrder,
    sizes: Mapping[str, int] | None = None,
) -> List[ModEntry]:
    if order is SortOrder.DEFAULT:
        return list(entries)
    if order in (SortOrder.NAME_ASC, SortOrder.NAME_DESC):
        return sorted(
            entries,
            key=lambda entry: entry.display_name.casefold(),
            reverse=order is SortOrder.NAME_DESC,
        )
    return sorted(
        entries,
        key=lambda entry: entry_size(entry, sizes) or 0,
        reverse=order is SortOrder.SIZE_DESC,
    )


__all__ = [
    "build_size_context",
    "compute_modlist_total",
    "entry_size",
    "format_bytes",
    "size_footer",
    "sort_entries",
]
