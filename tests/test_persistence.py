"""
Tests for persistence — per-domain selection files.
"""

from pathlib import Path

from karei.core.persistence.selection_file import (
    read_selections,
    selection_key,
    write_selection,
)


class TestSelectionKey:
    def test_uppercases_domain(self):
        assert selection_key("theme") == "KAREI_THEME"
        assert selection_key("ssh") == "KAREI_SSH"


class TestReadSelections:
    """Tests for parsing selection files."""

    def test_missing_file_is_empty(self, tmp_path: Path):
        """Reading an absent file yields no values."""
        assert read_selections(tmp_path / "nope", "theme") == []

    def test_single_line(self, tmp_path: Path):
        path = tmp_path / "theme"
        path.write_text("KAREI_THEME=catppuccin\n")
        assert read_selections(path, "theme") == ["catppuccin"]

    def test_strips_quotes_and_whitespace(self, tmp_path: Path):
        """Values are unquoted and trimmed."""
        path = tmp_path / "theme"
        path.write_text('  KAREI_THEME="gruvbox"  \n')
        assert read_selections(path, "theme") == ["gruvbox"]

        path.write_text("KAREI_THEME='nord'\n")
        assert read_selections(path, "theme") == ["nord"]

    def test_key_match_is_case_insensitive(self, tmp_path: Path):
        """`karei_theme=` matches like `KAREI_THEME=`."""
        path = tmp_path / "theme"
        path.write_text("karei_theme=kanagawa\n")
        assert read_selections(path, "theme") == ["kanagawa"]

    def test_ignores_unrelated_lines(self, tmp_path: Path):
        path = tmp_path / "theme"
        path.write_text("# comment\nOTHER=1\nKAREI_FONT=FiraMono\nKAREI_THEME=nord\n")
        assert read_selections(path, "theme") == ["nord"]

    def test_keeps_file_order(self, tmp_path: Path):
        path = tmp_path / "theme"
        path.write_text("KAREI_THEME=bogus\nKAREI_THEME=nord\n")
        assert read_selections(path, "theme") == ["bogus", "nord"]

    def test_binary_garbage_is_empty(self, tmp_path: Path):
        """Undecodable bytes read as no selection."""
        path = tmp_path / "theme"
        path.write_bytes(b"\xff\xfe\x00\x81garbage")
        assert read_selections(path, "theme") == []

    def test_directory_is_empty(self, tmp_path: Path):
        path = tmp_path / "theme"
        path.mkdir()
        assert read_selections(path, "theme") == []


class TestWriteSelection:
    """Tests for the atomic overwrite."""

    def test_writes_single_line(self, tmp_path: Path):
        path = tmp_path / "theme"
        write_selection(path, "theme", "tokyo-night")
        assert path.read_text() == "KAREI_THEME=tokyo-night\n"

    def test_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "karei" / "font"
        write_selection(path, "font", "FiraMono")
        assert path.read_text() == "KAREI_FONT=FiraMono\n"

    def test_overwrites_everything(self, tmp_path: Path):
        """Saving replaces the whole file."""
        path = tmp_path / "theme"
        path.write_text("# keep me?\nKAREI_THEME=nord\nEXTRA=1\n")
        write_selection(path, "theme", "gruvbox")
        assert path.read_text() == "KAREI_THEME=gruvbox\n"

    def test_no_temp_files_left(self, tmp_path: Path):
        """The atomic write cleans up after itself."""
        path = tmp_path / "theme"
        write_selection(path, "theme", "nord")
        write_selection(path, "theme", "everforest")
        assert list(tmp_path.glob(".theme_*.tmp")) == []

    def test_write_then_read(self, tmp_path: Path):
        path = tmp_path / "security"
        write_selection(path, "security", "firewall")
        assert read_selections(path, "security") == ["firewall"]
