from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Sequence

from modlistdiff import (
    DiffSection,
    FormatOptions,
    MergeOptions,
    ModEntry,
    ModList,
    ModListKind,
    ModlistDiffError,
    OutputFormat,
    SortOrder,
    build_size_context,
    dedupe_entries,
    deserialize_mod_list,
    diff_mod_lists,
    directional_labels,
    export_report,
    load_program_config,
    load_size_table,
    merge_mod_lists,
    parse_mod_list,
    print_diff_details,
    read_text_file,
    render_diff,
    serialize_mod_list,
    size_footer,
    write_text_file,
)
from modlistdiff.logging_utils import log_error, log_info, log_warn

SNAPSHOT_SUFFIX = ".json"


def _section_list(raw: str) -> List[DiffSection]:
    try:
        return [DiffSection(item.strip()) for item in raw.split(",") if item.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Compare Arma 3 launcher preset/modlist exports, merge selected mods into a new "
            "export, and render the differences as shareable text."
        )
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser("diff", help="Show mods only in A, only in B and in both.")
    diff_parser.add_argument("list_a", type=Path, help="First export (.html) or snapshot (.json).")
    diff_parser.add_argument("list_b", type=Path, help="Second export (.html) or snapshot (.json).")
    diff_parser.add_argument(
        "--format",
        choices=[item.value for item in OutputFormat],
        default=None,
        help="Output style. Defaults to the config file value, then 'plain'.",
    )
    diff_parser.add_argument("--links", action="store_true", default=None, help="Render Steam Workshop links.")
    diff_parser.add_argument(
        "--sections",
        type=_section_list,
        default=None,
        help="Comma separated sections to print, e.g. 'only_in_a,only_in_b'.",
    )
    diff_parser.add_argument("--label-a", default=None, help="Display name for list A.")
    diff_parser.add_argument("--label-b", default=None, help="Display name for list B.")
    diff_parser.add_argument(
        "--slot",
        choices=["A", "B"],
        default=None,
        help="The list currently in use; switches headings to Added/Removed and adds a size footer.",
    )
    diff_parser.add_argument("--sizes", type=Path, default=None, help="TOML file with a [sizes] table of Steam id = bytes.")
    diff_parser.add_argument("--sort", choices=[item.value for item in SortOrder], default=None)
    diff_parser.add_argument("--chat-limit", type=int, default=None, help="Maximum characters per chat message.")
    diff_parser.add_argument("--output", type=Path, default=None, help="Write the rendered text to this file.")
    diff_parser.add_argument(
        "--export-path",
        type=Path,
        default=Path(""),
        help="Path to save the diff report Excel file.",
    )
    diff_parser.add_argument(
        "--verbose-diff",
        action="store_true",
        default=False,
        help="Log every differing mod to the console.",
    )
    diff_parser.add_argument(
        "--config-path",
        type=Path,
        default=Path("config.toml"),
        help="Path to the program configuration TOML file.",
    )

    merge_parser = subparsers.add_parser("merge", help="Merge mods from several lists into one launcher export.")
    merge_parser.add_argument("inputs", nargs="+", type=Path, help="Exports (.html) or snapshots (.json) to merge.")
    merge_parser.add_argument("--name", required=True, help="Name of the merged preset.")
    merge_parser.add_argument(
        "--kind",
        choices=[item.value for item in ModListKind],
        default=ModListKind.COLLECTION.value,
    )
    merge_parser.add_argument(
        "--sections",
        type=_section_list,
        default=None,
        help="With exactly two inputs, only keep mods from these diff sections.",
    )
    merge_parser.add_argument("--output", type=Path, required=True, help="Where to write the merged export.")
    merge_parser.add_argument(
        "--backup-dir",
        type=Path,
        default=None,
        help="Back up an existing output file into this directory before overwriting it.",
    )

    snapshot_parser = subparsers.add_parser("snapshot", help="Save a launcher export as a JSON snapshot.")
    snapshot_parser.add_argument("input", type=Path)
    snapshot_parser.add_argument("--output", type=Path, required=True)

    restore_parser = subparsers.add_parser("restore", help="Rebuild a launcher export from a JSON snapshot.")
    restore_parser.add_argument("input", type=Path)
    restore_parser.add_argument("--output", type=Path, required=True)
    restore_parser.add_argument("--name", default=None, help="Preset name when the snapshot has none.")

    return parser.parse_args(argv)


def load_mod_list(path: Path) -> ModList:
    raw_text = read_text_file(path.expanduser())
    if path.suffix.lower() == SNAPSHOT_SUFFIX:
        return deserialize_mod_list(raw_text)
    return parse_mod_list(raw_text)


def run_diff(args: argparse.Namespace) -> None:
    config = load_program_config(args.config_path.expanduser())
    list_a = load_mod_list(args.list_a)
    list_b = load_mod_list(args.list_b)
    log_info(f"Loaded {list_a.num_entries} mods from {args.list_a} and {list_b.num_entries} mods from {args.list_b}.")

    diff = diff_mod_lists(list_a, list_b)
    name_a = args.label_a or list_a.name or args.list_a.stem
    name_b = args.label_b or list_b.name or args.list_b.stem

    if args.verbose_diff:
        print_diff_details(diff, name_a, name_b)

    labels = dict(config.labels)
    if args.slot:
        labels = {**directional_labels(args.slot), **labels}

    size_context = None
    footer = None
    sizes = load_size_table(args.sizes.expanduser()) if args.sizes else {}
    if sizes:
        size_context = build_size_context(list_a, list_b, sizes)
        if args.slot:
            footer = size_footer(size_context, args.slot)

    options = FormatOptions(
        format=OutputFormat(args.format) if args.format else config.style,
        include_links=config.include_links if args.links is None else args.links,
        name_a=name_a,
        name_b=name_b,
        sections=args.sections or config.sections,
        section_labels=labels,
        chat_limit=args.chat_limit or config.chat_limit,
        size_context=size_context,
        size_footer=footer,
        sort=SortOrder(args.sort) if args.sort else config.sort,
    )
    result = render_diff(diff, options)

    if args.output:
        write_text_file(args.output.expanduser(), result.text)
        log_info(f"Wrote {result.character_count} characters to {args.output}")
    else:
        print("\n\n".join(result.parts))
    if len(result.parts) > 1:
        log_info(f"Output split into {len(result.parts)} chat messages.")

    export_path = args.export_path
    if not export_path == Path(""):
        if export_path.suffix.lower() != ".xlsx":
            export_path = export_path / "modlist_diff.xlsx"
        export_report(output_path=export_path, diff=diff, name_a=name_a, name_b=name_b, sizes=sizes or None)
        log_info(f"Report saved to {export_path}")


def _collect_merge_entries(lists: List[ModList], sections: List[DiffSection] | None) -> List[ModEntry]:
    if sections is None:
        return [entry for mod_list in lists for entry in mod_list.entries]
    if len(lists) != 2:
        raise SystemExit("--sections needs exactly two input lists.")
    diff = diff_mod_lists(lists[0], lists[1])
    return [entry for section in sections for entry in diff.section(section)]


def run_merge(args: argparse.Namespace) -> None:
    lists = [load_mod_list(path) for path in args.inputs]
    entries = _collect_merge_entries(lists, args.sections)
    unique_entries, duplicates = dedupe_entries(entries)
    if duplicates:
        log_warn(f"Dropped {duplicates} duplicate mod entries.")

    markup = merge_mod_lists(unique_entries, MergeOptions(name=args.name, kind=args.kind))
    write_text_file(args.output.expanduser(), markup, backup_dir=args.backup_dir)
    log_info(f"Merged {len(unique_entries)} mods into {args.output}")


def run_snapshot(args: argparse.Namespace) -> None:
    mod_list = load_mod_list(args.input)
    write_text_file(args.output.expanduser(), serialize_mod_list(mod_list))
    log_info(f"Saved snapshot of {mod_list.num_entries} mods to {args.output}")


def run_restore(args: argparse.Namespace) -> None:
    mod_list = deserialize_mod_list(read_text_file(args.input.expanduser()))
    name = args.name or mod_list.name or args.input.stem
    markup = merge_mod_lists(mod_list.entries, MergeOptions(name=name, kind=mod_list.kind))
    write_text_file(args.output.expanduser(), markup)
    log_info(f"Restored {mod_list.num_entries} mods to {args.output}")


COMMANDS = {
    "diff": run_diff,
    "merge": run_merge,
    "snapshot": run_snapshot,
    "restore": run_restore,
}


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        COMMANDS[args.command](args)
    except (ModlistDiffError, ValueError, FileNotFoundError) as exc:
        log_error(f"{args.command} failed: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
