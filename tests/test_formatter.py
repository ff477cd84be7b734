"""Tests for diff rendering, size annotations and chat chunking."""

import pytest

from conftest import local_entry, steam_entry

from modlistdiff import (
    DiffResult,
    DiffSection,
    FormatOptions,
    FormatResult,
    OutputFormat,
    SizeContext,
    SortOrder,
    ValidationError,
    directional_labels,
    format_bytes,
    format_diff_result,
    render_diff,
    split_chat_parts,
)

SAMPLE_DIFF = DiffResult(
    only_in_a=(steam_entry("Only A Steam", "111"),),
    only_in_b=(local_entry("Only B Local"),),
    common=(steam_entry("Shared Steam", "222"),),
)

SIZED_DIFF = DiffResult(
    only_in_a=(steam_entry("Mod A", "100"),),
    only_in_b=(steam_entry("Mod B", "200"),),
    common=(steam_entry("Shared", "300"),),
)

SIZE_CONTEXT = SizeContext(
    sizes={"100": 1_500_000_000, "200": 350_000_000, "300": 52_428_800},
    total_a=2_000_000_000,
    total_b=1_800_000_000,
)


class TestFormatDiffResult:
    """Tests for format_diff_result without sizes."""

    def test_plain_headings(self) -> None:
        result = format_diff_result(SAMPLE_DIFF, FormatOptions(name_a="List A", name_b="List B"))

        assert isinstance(result, FormatResult)
        assert "=== Only in List A (1) ===" in result.text
        assert "Only A Steam" in result.text
        assert "=== Common Mods (1) ===" in result.text
        assert result.parts == [result.text]
        assert result.character_count == len(result.text)

    def test_plain_single_entry(self) -> None:
        diff = DiffResult(only_in_a=(local_entry("X"),))

        text = format_diff_result(diff, FormatOptions(name_a="Mine", sections=[DiffSection.ONLY_IN_A], raw_string=True))

        assert text == "=== Only in Mine (1) ===\nX"

    def test_plain_links_are_parenthesised(self) -> None:
        result = format_diff_result(SAMPLE_DIFF, FormatOptions(include_links=True))

        assert "Only A Steam (https://steamcommunity.com/sharedfiles/filedetails/?id=111)" in result.text
        assert "\nOnly B Local\n" in result.text

    def test_chat_markdown_links(self) -> None:
        result = format_diff_result(SAMPLE_DIFF, FormatOptions(format=OutputFormat.CHAT, include_links=True))

        assert "**Only in File A (1)**" in result.text
        assert "- [Only A Steam](https://steamcommunity.com/sharedfiles/filedetails/?id=111)" in result.text
        assert "- Only B Local" in result.text

    def test_html_links(self) -> None:
        text = format_diff_result(
            SAMPLE_DIFF, FormatOptions(format=OutputFormat.HTML_LINKS, include_links=True, raw_string=True)
        )

        assert isinstance(text, str)
        assert "<h3>Only in File A (1)</h3>" in text
        assert '  <li><a href="https://steamcommunity.com/sharedfiles/filedetails/?id=111">Only A Steam</a></li>' in text
        assert "<ul>" in text and "</ul>" in text

    def test_html_bare_names_are_escaped(self) -> None:
        diff = DiffResult(only_in_a=(local_entry("<b>x</b> & y"),))

        text = format_diff_result(
            diff,
            FormatOptions(format=OutputFormat.HTML_LINKS, sections=[DiffSection.ONLY_IN_A], raw_string=True),
        )

        assert "  <li>&lt;b&gt;x&lt;/b&gt; &amp; y</li>" in text
        assert "<b>" not in text

    def test_plain_names_are_not_escaped(self) -> None:
        diff = DiffResult(only_in_a=(local_entry("Ace & Co"),))

        text = format_diff_result(diff, FormatOptions(sections=[DiffSection.ONLY_IN_A], raw_string=True))

        assert text.endswith("\nAce & Co")

    def test_links_disabled_renders_bare_names(self) -> None:
        result = format_diff_result(SAMPLE_DIFF, FormatOptions(format=OutputFormat.CHAT))

        assert "https://" not in result.text

    def test_section_label_overrides_and_selection(self) -> None:
        options = FormatOptions(
            sections=[DiffSection.ONLY_IN_A, DiffSection.ONLY_IN_B],
            section_labels={DiffSection.ONLY_IN_A: "Removed", DiffSection.ONLY_IN_B: "Added"},
        )

        result = format_diff_result(SAMPLE_DIFF, options)

        assert "=== Removed (1) ===" in result.text
        assert "=== Added (1) ===" in result.text
        assert "Common Mods" not in result.text

    def test_sections_follow_requested_order(self) -> None:
        options = FormatOptions(sections=["common", "only_in_a"], raw_string=True)

        text = format_diff_result(SAMPLE_DIFF, options)

        assert text.index("Common Mods") < text.index("Only in File A")
        assert "Only in File B" not in text

    def test_sections_are_separated_by_blank_line(self) -> None:
        text = format_diff_result(SAMPLE_DIFF, FormatOptions(raw_string=True))

        assert "Only A Steam\n\n=== Only in File B (1) ===" in text

    def test_sort_by_name(self) -> None:
        diff = DiffResult(only_in_a=(local_entry("bravo"), local_entry("Alpha"), local_entry("charlie")))

        text = format_diff_result(
            diff, FormatOptions(sections=[DiffSection.ONLY_IN_A], sort=SortOrder.NAME_DESC, raw_string=True)
        )

        assert text.splitlines()[1:] == ["charlie", "bravo", "Alpha"]

    def test_render_diff_ignores_raw_string(self) -> None:
        result = render_diff(SAMPLE_DIFF, FormatOptions(raw_string=True))

        assert isinstance(result, FormatResult)
        assert result.text == format_diff_result(SAMPLE_DIFF, FormatOptions(raw_string=True))

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValidationError):
            format_diff_result(SAMPLE_DIFF, FormatOptions(chat_limit=0))

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError):
            format_diff_result(SAMPLE_DIFF, FormatOptions(format="markdown"))


class TestChatChunking:
    """Tests for chat message splitting."""

    def test_long_output_is_split_into_labelled_parts(self) -> None:
        diff = DiffResult(
            only_in_a=tuple(local_entry(f"Super Long Mod Name {index} {'X' * 30}") for index in range(12))
        )

        result = format_diff_result(diff, FormatOptions(format=OutputFormat.CHAT, chat_limit=120))

        assert len(result.parts) > 1
        assert result.parts[0].startswith(f"Part 1/{len(result.parts)}\n")
        assert all(len(part) <= 120 for part in result.parts)

    def test_plain_output_is_never_split(self) -> None:
        diff = DiffResult(only_in_a=tuple(local_entry(f"Mod {index} {'Y' * 40}") for index in range(20)))

        result = format_diff_result(diff, FormatOptions(chat_limit=50))

        assert result.parts == [result.text]

    def test_short_text_is_one_part(self) -> None:
        assert split_chat_parts("hello\nworld", 2000) == ["hello\nworld"]

    def test_whole_lines_are_kept_together(self) -> None:
        lines = [f"line {index:02d}" for index in range(10)]

        parts = split_chat_parts("\n".join(lines), 40)

        bodies = [part.split("\n", 1)[1] for part in parts]
        assert "\n".join(bodies).split("\n") == lines

    def test_over_long_line_is_hard_split(self) -> None:
        parts = split_chat_parts("A" * 250, 100)

        bodies = [part.split("\n", 1)[1] for part in parts]
        assert "".join(bodies) == "A" * 250
        assert all(len(part) <= 100 for part in parts)


class TestFormatBytes:
    """Tests for format_bytes."""

    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [
            (0, "0 B"),
            (500, "500 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1_048_576, "1 MB"),
            (350_000_000, "333.8 MB"),
            (1_073_741_824, "1 GB"),
            (1_500_000_000, "1.4 GB"),
        ],
    )
    def test_values(self, num_bytes: int, expected: str) -> None:
        assert format_bytes(num_bytes) == expected


class TestSizeAnnotations:
    """Tests for output with a size context."""

    def test_entry_sizes(self) -> None:
        result = format_diff_result(SIZED_DIFF, FormatOptions(size_context=SIZE_CONTEXT))

        assert "Mod A [1.4 GB]" in result.text
        assert "Mod B [333.8 MB]" in result.text
        assert "Shared [50 MB]" in result.text

    def test_section_totals_in_headings(self) -> None:
        result = format_diff_result(SIZED_DIFF, FormatOptions(size_context=SIZE_CONTEXT))

        assert "=== Only in File A (1) [1.4 GB] ===" in result.text
        assert "=== Only in File B (1) [333.8 MB] ===" in result.text

    def test_modlist_totals_for_side_sections(self) -> None:
        text = format_diff_result(
            SIZED_DIFF,
            FormatOptions(size_context=SIZE_CONTEXT, sections=[DiffSection.ONLY_IN_A, DiffSection.ONLY_IN_B], raw_string=True),
        )

        assert "Mod A [1.4 GB]\n[1.9 GB]" in text
        assert "Mod B [333.8 MB]\n[1.7 GB]" in text

    def test_no_modlist_total_for_common(self) -> None:
        text = format_diff_result(
            SIZED_DIFF, FormatOptions(size_context=SIZE_CONTEXT, sections=[DiffSection.COMMON], raw_string=True)
        )

        assert text.splitlines()[-1] == "Shared [50 MB]"

    def test_footer_is_last_section(self) -> None:
        text = format_diff_result(
            SIZED_DIFF, FormatOptions(size_context=SIZE_CONTEXT, size_footer="1.9 GB -> 1.7 GB", raw_string=True)
        )

        assert text.endswith("\n\n1.9 GB -> 1.7 GB")

    def test_chat_sizes(self) -> None:
        result = format_diff_result(SIZED_DIFF, FormatOptions(format=OutputFormat.CHAT, size_context=SIZE_CONTEXT))

        assert "**Only in File A (1) [1.4 GB]**" in result.text
        assert "- Mod A [1.4 GB]" in result.text

    def test_no_sizes_without_context(self) -> None:
        result = format_diff_result(SIZED_DIFF, FormatOptions())

        assert "[" not in result.text
        assert "GB" not in result.text

    def test_unknown_sizes_are_not_annotated(self) -> None:
        diff = DiffResult(only_in_a=(local_entry("Local Mod"),))
        context = SizeContext(sizes=SIZE_CONTEXT.sizes)

        text = format_diff_result(diff, FormatOptions(size_context=context, raw_string=True))

        assert "Local Mod" in text.splitlines()
        assert "=== Only in File A (1) ===" in text


class TestDirectionalLabels:
    """Tests for directional_labels."""

    def test_slot_a(self) -> None:
        labels = directional_labels("A")

        assert labels[DiffSection.ONLY_IN_A] == "Added"
        assert labels[DiffSection.ONLY_IN_B] == "Removed"

    def test_slot_b(self) -> None:
        labels = directional_labels("b")

        assert labels[DiffSection.ONLY_IN_A] == "Removed"
        assert labels[DiffSection.ONLY_IN_B] == "Added"

    def test_without_slot(self) -> None:
        labels = directional_labels(None, "Ops", None)

        assert labels[DiffSection.ONLY_IN_A] == "Only in Ops"
        assert labels[DiffSection.ONLY_IN_B] == "Only in File B"
        assert labels[DiffSection.COMMON] == "Common Mods"
