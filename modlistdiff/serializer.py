from __future__ import annotations

import json
from typing import Any, Dict, List

from .exceptions import SchemaError
from .models import ModEntry, ModList, ModListKind, ModSource

SCHEMA_VERSION = 1


def _entry_to_dict(entry: ModEntry) -> Dict[str, Any]:
    return {
        "displayName": entry.display_name,
        "externalId": entry.external_id,
        "externalUrl": entry.external_url,
        "source": entry.source.value,
    }


def serialize_mod_list(mod_list: ModList) -> str:
    payload = {
        "version": SCHEMA_VERSION,
        "list": {
            "name": mod_list.name,
            "kind": mod_list.kind.value,
            "entries": [_entry_to_dict(entry) for entry in mod_list.entries],
        },
    }
    return json.dumps(payload, ensure_ascii=False)


def _require_str_or_none(raw: Dict[str, Any], key: str, path: str) -> str | None:
    # The key must be present; only its value may be null.
    if key not in raw:
        raise SchemaError(f"{path} must be a string or null.")
    value = raw[key]
    if value is not None and not isinstance(value, str):
        raise SchemaError(f"{path} must be a string or null.")
    return value


def _load_entry(raw: Any, index: int) -> ModEntry:
    path = f"entries[{index}]"
    if not isinstance(raw, dict):
        raise SchemaError(f"{path} must be an object.")

    display_name = raw.get("displayName")
    if not isinstance(display_name, str) or not display_name.strip():
        raise SchemaError(f"{path}.displayName must be a non-empty string.")

    external_id = _require_str_or_none(raw, "externalId", f"{path}.externalId")
    external_url = _require_str_or_none(raw, "externalUrl", f"{path}.externalUrl")

    try:
        source = ModSource(raw.get("source"))
    except ValueError as exc:
        raise SchemaError(f'{path}.source must be "external" or "local".') from exc

    return ModEntry(
        display_name=display_name,
        external_id=external_id,
        external_url=external_url,
        source=source,
    )


def _load_list(raw: Any) -> ModList:
    if not isinstance(raw, dict):
        raise SchemaError("list must be an object.")

    name = _require_str_or_none(raw, "name", "list.name")

    try:
        kind = ModListKind(raw.get("kind"))
    except ValueError as exc:
        raise SchemaError('list.kind must be "collection" or "list".') from exc

    raw_entries = raw.get("entries")
    if not isinstance(raw_entries, list):
        raise SchemaError("list.entries must be an array.")

    entries: List[ModEntry] = [_load_entry(item, index) for index, item in enumerate(raw_entries)]
    return ModList(kind=kind, entries=tuple(entries), name=name)


def deserialize_mod_list(text: str) -> ModList:
    """Load a snapshot written by :func:`serialize_mod_list`.

    Only schema version 1 is understood; there is no migration of other
    versions. A version written as ``1.0`` is the same number and is accepted.
    """

    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SchemaError("Invalid JSON.") from exc

    if not isinstance(payload, dict):
        raise SchemaError("Serialized payload must be an object.")

    version = payload.get("version")
    if isinstance(version, bool) or not isinstance(version, (int, float)) or version != SCHEMA_VERSION:
        raise SchemaError(f"Unsupported schema version. Expected version {SCHEMA_VERSION}.")

    return _load_list(payload.get("list"))


__all__ = ["SCHEMA_VERSION", "serialize_mod_list", "deserialize_mod_list"]
