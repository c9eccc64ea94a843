"""Tests for the CLI reference generator script."""

from scripts.generate_cli_reference import generate_cli_reference


class TestGenerateCliReference:
    """Tests for generate_cli_reference."""

    def test_documents_top_level_and_group_commands(self) -> None:
        """Should include a section for plain and grouped commands."""
        doc = generate_cli_reference()

        assert "### add" in doc
        assert "### budget set" in doc
        assert "### export csv" in doc

    def test_lists_options_with_flags(self) -> None:
        """Should render option flags and help text."""
        doc = generate_cli_reference()

        assert "`--category`, `-c`: Category name" in doc
        assert "- `DESCRIPTION` (required)" in doc
