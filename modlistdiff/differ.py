from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from .models import DiffResult, ModEntry, ModList

IdentityFn = Callable[[ModEntry], str]


def default_identity(entry: ModEntry) -> str:
    """Steam id when the entry has one, otherwise the lower-cased display name."""

    if entry.external_id:
        return f"external:{entry.external_id}"
    return f"name:{entry.normalized_name}"


def index_by_identity(
    entries: Iterable[ModEntry],
    identity_fn: IdentityFn = default_identity,
) -> tuple[Dict[str, ModEntry], int]:
    """Map identity to the first entry seen with it and count the later repeats."""

    indexed: Dict[str, ModEntry] = {}
    duplicates = 0
    for entry in entries:
        identity = identity_fn(entry)
        if not identity:
            continue
        if identity in indexed:
            duplicates += 1
            continue
        indexed[identity] = entry
    return indexed, duplicates


def dedupe_entries(
    entries: Iterable[ModEntry],
    identity_fn: IdentityFn = default_identity,
) -> tuple[List[ModEntry], int]:
    indexed, duplicates = index_by_identity(entries, identity_fn)
    return list(indexed.values()), duplicates


def diff_mod_lists(
    list_a: ModList,
    list_b: ModList,
    identity_fn: IdentityFn | None = None,
) -> DiffResult:
    identity_fn = identity_fn or default_identity
    a_by_identity, duplicates_a = index_by_identity(list_a.entries, identity_fn)
    b_by_identity, duplicates_b = index_by_identity(list_b.entries, identity_fn)

    only_in_a: List[ModEntry] = []
    common: List[ModEntry] = []
    for identity, entry in a_by_identity.items():
        if identity in b_by_identity:
            common.append(entry)
        else:
            only_in_a.append(entry)

    only_in_b = [entry for identity, entry in b_by_identity.items() if identity not in a_by_identity]

    return DiffResult(
        only_in_a=tuple(only_in_a),
        only_in_b=tuple(only_in_b),
        common=tuple(common),
        duplicates_a=duplicates_a,
        duplicates_b=duplicates_b,
    )


__all__ = [
    "IdentityFn",
    "default_identity",
    "dedupe_entries",
    "diff_mod_lists",
    "index_by_identity",
]
