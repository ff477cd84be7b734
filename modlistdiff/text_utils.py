from __future__ import annotations

import re

WHITESPACE_PATTERN = re.compile(r"\s+")
TAG_PATTERN = re.compile(r"<[^>]*>")
ENTITY_PATTERN = re.compile(r"&(#x[0-9a-f]+|#\d+|[a-z]+);", re.IGNORECASE)

NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
}


def normalize_whitespace(raw: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", raw).strip()


def normalize_name(raw: str) -> str:
    return raw.strip().lower()


def strip_tags(raw: str) -> str:
    return TAG_PATTERN.sub("", raw)


def _decode_entity(match: re.Match[str]) -> str:
    token = match.group(1)
    try:
        if token[:2].lower() == "#x":
            return chr(int(token[2:], 16))
        if token.startswith("#"):
            return chr(int(token[1:], 10))
    except (ValueError, OverflowError):
        return match.group(0)
    return NAMED_ENTITIES.get(token.lower(), match.group(0))


def decode_entities(raw: str) -> str:
    """Decode the standard named entities and numeric character references.

    Anything unrecognized (or out of the Unicode range) is left untouched.
    """

    return ENTITY_PATTERN.sub(_decode_entity, raw)


def escape_html(raw: str) -> str:
    return (
        raw.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
