"""Compare, merge and share Arma 3 launcher modlist exports."""

from .differ import dedupe_entries, default_identity, diff_mod_lists
from .exceptions import ModlistDiffError, ParseError, SchemaError, ValidationError
from .file_utils import backup_file, ensure_directory, read_text_file, write_text_file
from .formatter import directional_labels, format_diff_result, render_diff, split_chat_parts
from .html_parser import DEFAULT_PARSER, ArmaHtmlParser, ModListParser, parse_mod_list
from .load_config import ProgramConfig, load_program_config, load_size_table
from .merger import merge_mod_lists
from .models import (
    DiffResult,
    DiffSection,
    FormatOptions,
    FormatResult,
    MergeOptions,
    ModEntry,
    ModList,
    ModListKind,
    ModSource,
    OutputFormat,
    SizeContext,
    SortOrder,
)
from .report import export_report, print_diff_details
from .serializer import deserialize_mod_list, serialize_mod_list
from .sizes import build_size_context, compute_modlist_total, format_bytes, size_footer, sort_entries

__all__ = [
    "ArmaHtmlParser",
    "DEFAULT_PARSER",
    "DiffResult",
    "DiffSection",
    "FormatOptions",
    "FormatResult",
    "MergeOptions",
    "ModEntry",
    "ModList",
    "ModListKind",
    "ModListParser",
    "ModSource",
    "ModlistDiffError",
    "OutputFormat",
    "ParseError",
    "ProgramConfig",
    "SchemaError",
    "SizeContext",
    "SortOrder",
    "ValidationError",
    "parse_mod_list",
    "diff_mod_lists",
    "default_identity",
    "dedupe_entries",
    "merge_mod_lists",
    "format_diff_result",
    "render_diff",
    "directional_labels",
    "split_chat_parts",
    "format_bytes",
    "compute_modlist_total",
    "build_size_context",
    "size_footer",
    "sort_entries",
    "serialize_mod_list",
    "deserialize_mod_list",
    "load_program_config",
    "load_size_table",
    "print_diff_details",
    "export_report",
    "read_text_file",
    "write_text_file",
    "backup_file",
    "ensure_directory",
]
