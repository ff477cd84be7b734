from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Sequence

from .exceptions import ValidationError
from .models import (
    DiffResult,
    DiffSection,
    FormatOptions,
    FormatResult,
    ModEntry,
    OutputFormat,
    SortOrder,
)
from .sizes import compute_modlist_total, format_bytes, sort_entries
from .text_utils import escape_html

DEFAULT_NAME_A = "File A"
DEFAULT_NAME_B = "File B"
COMMON_LABEL = "Common Mods"


def directional_labels(current_slot: str | None, name_a: str | None = None, name_b: str | None = None) -> Dict[DiffSection, str]:
    """Section labels seen from the list the user currently runs.

    With slot "A" the mods only in A are the ones that get added when switching
    from B, and the other way round for slot "B". Without a slot the labels
    simply name the two files.
    """

    slot = (current_slot or "").upper()
    if slot == "A":
        return {
            DiffSection.ONLY_IN_A: "Added",
            DiffSection.ONLY_IN_B: "Removed",
            DiffSection.COMMON: COMMON_LABEL,
        }
    if slot == "B":
        return {
            DiffSection.ONLY_IN_A: "Removed",
            DiffSection.ONLY_IN_B: "Added",
            DiffSection.COMMON: COMMON_LABEL,
        }
    return {
        DiffSection.ONLY_IN_A: f"Only in {name_a or DEFAULT_NAME_A}",
        DiffSection.ONLY_IN_B: f"Only in {name_b or DEFAULT_NAME_B}",
        DiffSection.COMMON: COMMON_LABEL,
    }


def _size_suffix(num_bytes: int | None) -> str:
    if num_bytes is None:
        return ""
    return f" [{format_bytes(num_bytes)}]"


def render_entry(entry: ModEntry, options: FormatOptions) -> str:
    size = options.size_context.size_of(entry) if options.size_context else None
    suffix = _size_suffix(size)
    url = entry.external_url
    if not options.include_links or not url:
        if options.format is OutputFormat.HTML_LINKS:
            return f"{escape_html(entry.display_name)}{suffix}"
        return f"{entry.display_name}{suffix}"
    if options.format is OutputFormat.CHAT:
        return f"[{entry.display_name}]({url}){suffix}"
    if options.format is OutputFormat.HTML_LINKS:
        return f'<a href="{escape_html(url)}">{escape_html(entry.display_name)}</a>{suffix}'
    return f"{entry.display_name} ({url}){suffix}"


def section_title(section: DiffSection, entries: Sequence[ModEntry], options: FormatOptions) -> str:
    label = options.section_labels.get(section) if options.section_labels else None
    if not label:
        label = directional_labels(None, options.name_a, options.name_b)[section]
    title = f"{label} ({len(entries)})"
    if options.size_context is not None:
        section_total = compute_modlist_total(entries, options.size_context.sizes)
        if section_total > 0:
            title += _size_suffix(section_total)
    return title


def _modlist_total(section: DiffSection, options: FormatOptions) -> int | None:
    context = options.size_context
    if context is None:
        return None
    if section is DiffSection.ONLY_IN_A:
        return context.total_a
    if section is DiffSection.ONLY_IN_B:
        return context.total_b
    return None


def render_section(section: DiffSection, diff: DiffResult, options: FormatOptions) -> str:
    sizes = options.size_context.sizes if options.size_context else None
    entries = sort_entries(diff.section(section), options.sort, sizes)
    title = section_title(section, entries, options)
    rendered = [render_entry(entry, options) for entry in entries]

    if options.format is OutputFormat.CHAT:
        lines = [f"**{title}**", *(f"- {item}" for item in rendered)]
    elif options.format is OutputFormat.HTML_LINKS:
        lines = [f"<h3>{escape_html(title)}</h3>", "<ul>", *(f"  <li>{item}</li>" for item in rendered), "</ul>"]
    else:
        lines = [f"=== {title} ===", *rendered]

    modlist_total = _modlist_total(section, options)
    if modlist_total is not None:
        total_line = f"[{format_bytes(modlist_total)}]"
        if options.format is OutputFormat.HTML_LINKS:
            total_line = f"<p>{total_line}</p>"
        lines.append(total_line)
    return "\n".join(lines)


def _pack_lines(text: str, limit: int) -> List[str]:
    parts: List[str] = []
    current = ""
    for line in text.split("\n"):
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) <= limit:
            current = candidate
            continue
        if current:
            parts.append(current)
            current = ""
        if len(line) <= limit:
            current = line
            continue
        for start in range(0, len(line), limit):
            parts.append(line[start:start + limit])
    if current:
        parts.append(current)
    return parts


def _part_header(index: int, count: int) -> str:
    return f"Part {index}/{count}\n"


def split_chat_parts(text: str, limit: int) -> List[str]:
    """Split text into whole-line chunks of at most ``limit`` characters.

    A single line longer than the limit is cut at the character level. When
    more than one chunk is produced each one is prefixed with a
    ``Part i/N`` line, and the room for that line is taken out of the limit.
    """

    if len(text) <= limit:
        return [text]

    parts = _pack_lines(text, limit)
    reserved = 0
    while True:
        header_length = len(_part_header(len(parts), len(parts)))
        if header_length == reserved or header_length >= limit:
            break
        reserved = header_length
        parts = _pack_lines(text, limit - reserved)

    if len(parts) <= 1:
        return parts
    return [f"{_part_header(index, len(parts))}{part}" for index, part in enumerate(parts, start=1)]


def _normalize_options(options: FormatOptions) -> FormatOptions:
    if options.chat_limit <= 0:
        raise ValidationError("Format option 'chat_limit' must be a positive integer.")
    try:
        return replace(
            options,
            format=OutputFormat(options.format),
            sort=SortOrder(options.sort),
            sections=tuple(DiffSection(section) for section in options.sections),
            section_labels={DiffSection(key): label for key, label in (options.section_labels or {}).items()},
        )
    except ValueError as exc:
        raise ValidationError(f"Invalid format option: {exc}") from exc


def _build_result(diff: DiffResult, options: FormatOptions) -> FormatResult:
    section_texts = [render_section(section, diff, options) for section in options.sections]
    if options.size_footer:
        section_texts.append(options.size_footer)
    text = "\n\n".join(section_texts).strip()

    if options.format is OutputFormat.CHAT:
        parts = split_chat_parts(text, options.chat_limit)
    else:
        parts = [text]
    return FormatResult(text=text, parts=parts, character_count=len(text))


def render_diff(diff: DiffResult, options: FormatOptions | None = None) -> FormatResult:
    """Like :func:`format_diff_result` but always returns the full result."""

    return _build_result(diff, _normalize_options(options or FormatOptions()))


def format_diff_result(diff: DiffResult, options: FormatOptions | None = None) -> FormatResult | str:
    """Render a diff as plain text, chat markdown or HTML links.

    Returns the joined text alone when ``options.raw_string`` is set.
    """

    result = render_diff(diff, options)
    if options is not None and options.raw_string:
        return result.text
    return result


__all__ = [
    "directional_labels",
    "format_diff_result",
    "render_diff",
    "render_entry",
    "render_section",
    "section_title",
    "split_chat_parts",
]
