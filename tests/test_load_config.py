"""Tests for the TOML configuration and size table loaders."""

from pathlib import Path

import pytest

from modlistdiff import DiffSection, OutputFormat, SortOrder, load_program_config, load_size_table


class TestLoadProgramConfig:
    """Tests for load_program_config."""

    def test_missing_file_uses_defaults(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config = load_program_config(tmp_path / "config.toml")

        assert config.style is OutputFormat.PLAIN
        assert config.chat_limit == 2000
        assert config.sections == [DiffSection.ONLY_IN_A, DiffSection.ONLY_IN_B, DiffSection.COMMON]
        assert "[warn]" in capsys.readouterr().err

    def test_values_are_read(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            '[format]\nstyle = "chat"\ninclude_links = true\nchat_limit = 1500\n'
            'sections = ["only_in_b", "only_in_a"]\nsort = "a-z"\n\n'
            '[labels]\nonly_in_a = "Removed"\n',
            encoding="utf-8",
        )

        config = load_program_config(path)

        assert config.style is OutputFormat.CHAT
        assert config.include_links is True
        assert config.chat_limit == 1500
        assert config.sections == [DiffSection.ONLY_IN_B, DiffSection.ONLY_IN_A]
        assert config.sort is SortOrder.NAME_ASC
        assert config.labels == {DiffSection.ONLY_IN_A: "Removed"}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[format\nstyle = ", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid TOML"):
            load_program_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[format]\nstyle = "fancy"\n', encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid value"):
            load_program_config(path)


class TestLoadSizeTable:
    """Tests for load_size_table."""

    def test_sizes_are_read(self, tmp_path: Path) -> None:
        path = tmp_path / "sizes.toml"
        path.write_text('[sizes]\n"450814997" = 1048576\n"463939057" = 0\n', encoding="utf-8")

        assert load_size_table(path) == {"450814997": 1_048_576, "463939057": 0}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_size_table(tmp_path / "missing.toml") == {}

    def test_negative_size_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "sizes.toml"
        path.write_text('[sizes]\n"1" = -5\n', encoding="utf-8")

        with pytest.raises(ValueError, match="non-negative"):
            load_size_table(path)
