from __future__ import annotations

from typing import Iterable, List

from .differ import dedupe_entries
from .exceptions import ValidationError
from .models import MergeOptions, ModEntry, ModListKind, ModSource
from .text_utils import escape_html

STEAM_WORKSHOP_URL = "https://steamcommunity.com/sharedfiles/filedetails/?id={steam_id}"
GENERATOR_NAME = "modlistdiff"

# arma:Type value written for each kind.
KIND_TYPE_TAGS = {
    ModListKind.COLLECTION: "preset",
    ModListKind.LIST: "list",
}

LAUNCHER_STYLE = """body {
\tmargin: 0;
\tpadding: 0;
\tcolor: #fff;
\tbackground: #000;
}

body, th, td {
\tfont: 95%/1.3 Roboto, Segoe UI, Tahoma, Arial, Helvetica, sans-serif;
}

td {
\tpadding: 3px 30px 3px 0;
}

h1 {
\tpadding: 20px 20px 0 20px;
\tcolor: white;
\tfont-weight: 200;
\tfont-family: segoe ui;
\tfont-size: 3em;
\tmargin: 0;
}

em {
\tfont-variant: italic;
\tcolor: silver;
}

.before-list {
\tpadding: 5px 20px 10px 20px;
}

.mod-list {
\tbackground: #222222;
\tpadding: 20px;
}

a {
\tcolor: #D18F21;
\ttext-decoration: underline;
}

a:hover {
\tcolor: #F1AF41;
\ttext-decoration: none;
}

.from-steam {
\tcolor: #449EBD;
}

.from-local {
\tcolor: gray;
}"""

IMPORT_HINT = (
    "To import this preset, drag this file onto the Launcher window. "
    "Or click the MODS tab, then PRESET in the top right, then IMPORT at the bottom, "
    "and finally select this file."
)


def steam_url_for(entry: ModEntry) -> str | None:
    if entry.external_url:
        return entry.external_url
    if entry.external_id:
        return STEAM_WORKSHOP_URL.format(steam_id=entry.external_id)
    return None


def _validate_options(options: MergeOptions) -> ModListKind:
    if not isinstance(options.name, str) or not options.name.strip():
        raise ValidationError("Merge option 'name' must be a non-empty string.")
    try:
        return ModListKind(options.kind)
    except ValueError as exc:
        raise ValidationError("Merge option 'kind' must be 'collection' or 'list'.") from exc


def _render_row(entry: ModEntry) -> str:
    css_class = "from-steam" if entry.source is ModSource.EXTERNAL else "from-local"
    url = steam_url_for(entry)
    link_cell = "          <td></td>"
    if url:
        escaped_url = escape_html(url)
        link_cell = (
            "          <td>\n"
            f'            <a href="{escaped_url}" data-type="Link">{escaped_url}</a>\n'
            "          </td>"
        )
    return "\n".join(
        [
            '        <tr data-type="ModContainer">',
            f'          <td data-type="DisplayName">{escape_html(entry.display_name)}</td>',
            "          <td>",
            f'            <span class="{css_class}">{entry.source_label}</span>',
            "          </td>",
            link_cell,
            "        </tr>",
        ]
    )


def _render_head(name: str, kind: ModListKind) -> List[str]:
    lines = [f'    <meta name="arma:Type" content="{KIND_TYPE_TAGS[kind]}" />']
    if kind is ModListKind.COLLECTION:
        lines.append(f'    <meta name="arma:PresetName" content="{escape_html(name)}" />')
    lines.extend(
        [
            f'    <meta name="generator" content="{GENERATOR_NAME}" />',
            "    <title>Arma 3</title>",
            '    <link href="https://fonts.googleapis.com/css?family=Roboto" rel="stylesheet" type="text/css" />',
            "    <style>",
            LAUNCHER_STYLE,
            "</style>",
        ]
    )
    return lines


def _render_heading(name: str, kind: ModListKind) -> str:
    if kind is ModListKind.COLLECTION:
        return f"    <h1>Arma 3  - Preset <strong>{escape_html(name)}</strong></h1>"
    return "    <h1>Arma 3 Mods</h1>"


def merge_mod_lists(entries: Iterable[ModEntry], options: MergeOptions) -> str:
    """Build a launcher export document holding every distinct entry once.

    Entries are deduplicated with the default identity rule; the first
    occurrence of an identity wins and the input order is kept.
    """

    kind = _validate_options(options)
    unique_entries, _ = dedupe_entries(entries)

    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        "<html>",
        f"  <!--Created by {GENERATOR_NAME}-->",
        "  <head>",
        *_render_head(options.name, kind),
        "  </head>",
        "  <body>",
        _render_heading(options.name, kind),
        '    <p class="before-list">',
        f"      <em>{IMPORT_HINT}</em>",
        "    </p>",
        '    <div class="mod-list">',
        "      <table>",
        *(_render_row(entry) for entry in unique_entries),
        "      </table>",
        "    </div>",
        "  </body>",
        "</html>",
    ]
    return "\n".join(lines)


__all__ = ["merge_mod_lists", "steam_url_for", "STEAM_WORKSHOP_URL"]
