from __future__ import annotations

import re
from typing import List, Protocol

from .exceptions import ParseError
from .models import ModEntry, ModList, ModListKind, ModSource
from .text_utils import decode_entities, normalize_whitespace, strip_tags

MOD_CONTAINER_PATTERN = re.compile(
    r"<tr[^>]*data-type\s*=\s*[\"']ModContainer[\"'][^>]*>(.*?)</tr>",
    re.IGNORECASE | re.DOTALL,
)
DISPLAY_NAME_PATTERN = re.compile(
    r"<td[^>]*data-type\s*=\s*[\"']DisplayName[\"'][^>]*>(.*?)</td>",
    re.IGNORECASE | re.DOTALL,
)
LINK_TAG_PATTERN = re.compile(r"<a[^>]*data-type\s*=\s*[\"']Link[\"'][^>]*>", re.IGNORECASE)
STEAM_ID_PATTERN = re.compile(r"[?&]id=(\d+)", re.IGNORECASE)
LOCAL_CLASS_PATTERN = re.compile(r"class\s*=\s*[\"'][^\"']*\bfrom-local\b[^\"']*[\"']", re.IGNORECASE)
STEAM_CLASS_PATTERN = re.compile(r"class\s*=\s*[\"'][^\"']*\bfrom-steam\b[^\"']*[\"']", re.IGNORECASE)

TYPE_META = "arma:Type"
PRESET_NAME_META = "arma:PresetName"

# Values of the arma:Type declaration.
KIND_TAGS = {
    "preset": ModListKind.COLLECTION,
    "list": ModListKind.LIST,
}


class ModListParser(Protocol):
    def parse(self, raw_text: str) -> ModList:
        ...


def _read_attribute(tag: str, attribute: str) -> str | None:
    pattern = re.compile(rf"\b{re.escape(attribute)}\s*=\s*([\"'])(.*?)\1", re.IGNORECASE)
    match = pattern.search(tag)
    if not match:
        return None
    return decode_entities(match.group(2)).strip()


def _meta_content(raw_text: str, meta_name: str) -> str | None:
    pattern = re.compile(
        rf"<meta[^>]*name\s*=\s*[\"']{re.escape(meta_name)}[\"'][^>]*>",
        re.IGNORECASE,
    )
    match = pattern.search(raw_text)
    if not match:
        return None
    return _read_attribute(match.group(0), "content")


def _parse_steam_id(url: str | None) -> str | None:
    if not url:
        return None
    match = STEAM_ID_PATTERN.search(url)
    return match.group(1) if match else None


def _infer_source(row_html: str, steam_id: str | None) -> ModSource:
    if LOCAL_CLASS_PATTERN.search(row_html):
        return ModSource.LOCAL
    if STEAM_CLASS_PATTERN.search(row_html):
        return ModSource.EXTERNAL
    return ModSource.EXTERNAL if steam_id else ModSource.LOCAL


def parse_mod_row(row_html: str) -> ModEntry | None:
    """Parse the inside of one ModContainer row; None when the name is blank."""

    name_match = DISPLAY_NAME_PATTERN.search(row_html)
    raw_name = name_match.group(1) if name_match else ""
    display_name = normalize_whitespace(decode_entities(strip_tags(raw_name)))
    if not display_name:
        return None

    link_match = LINK_TAG_PATTERN.search(row_html)
    url = _read_attribute(link_match.group(0), "href") if link_match else None
    # An empty href carries no link.
    url = url or None
    steam_id = _parse_steam_id(url)
    return ModEntry(
        display_name=display_name,
        external_id=steam_id,
        external_url=url,
        source=_infer_source(row_html, steam_id),
    )


class ArmaHtmlParser:
    """Parser for the HTML preset/modlist exports written by the Arma 3 Launcher."""

    def parse(self, raw_text: str) -> ModList:
        if not raw_text.strip():
            raise ParseError("Input HTML is empty.")

        type_tag = _meta_content(raw_text, TYPE_META)
        kind = KIND_TAGS.get(type_tag or "")
        if kind is None:
            raise ParseError(
                f"Input is not a supported Arma preset/modlist export (missing {TYPE_META})."
                if type_tag is None
                else f"Unsupported {TYPE_META} value: {type_tag!r}. Expected 'preset' or 'list'."
            )

        entries: List[ModEntry] = []
        for match in MOD_CONTAINER_PATTERN.finditer(raw_text):
            entry = parse_mod_row(match.group(1))
            if entry is not None:
                entries.append(entry)

        return ModList(
            kind=kind,
            entries=tuple(entries),
            name=_meta_content(raw_text, PRESET_NAME_META),
        )


DEFAULT_PARSER = ArmaHtmlParser()


def parse_mod_list(raw_text: str, parser: ModListParser | None = None) -> ModList:
    if parser is None:
        parser = DEFAULT_PARSER
    return parser.parse(raw_text)


__all__ = [
    "ArmaHtmlParser",
    "DEFAULT_PARSER",
    "ModListParser",
    "parse_mod_list",
    "parse_mod_row",
]
