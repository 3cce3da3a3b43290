"""Tests for formatting utilities."""

import io

from rich.console import Console

from fuzzkill.formatting import (
    format_pid,
    group_label,
    group_text,
    leaf_label,
    leaf_text,
    records_table,
)


class TestLabels:
    """Tests for plain labels."""

    def test_group_label(self) -> None:
        assert group_label("chrome", 2) == "All chrome (2)"

    def test_leaf_label_minimal(self, make_record) -> None:
        """Pid is right-aligned to six columns."""
        assert leaf_label(make_record(id=10, name="chrome")) == "    10 chrome"

    def test_leaf_label_unknown_pid(self, make_record) -> None:
        assert leaf_label(make_record(id=-1, name="ghost")) == "     ? ghost"
        assert format_pid(make_record(id=0)) == "?"

    def test_leaf_label_full(self, make_record) -> None:
        record = make_record(
            id=4,
            name="svchost",
            title="Service Host",
            owner_domain="NT AUTHORITY",
            owner_user="SYSTEM",
            is_system_owned=True,
        )
        assert leaf_label(record) == "     4 svchost Service Host NT AUTHORITY\\SYSTEM SYSTEM"

    def test_leaf_label_blank_title_skipped(self, make_record) -> None:
        assert leaf_label(make_record(id=1, name="a", title="  ")) == "     1 a"


class TestStyledText:
    """Tests for Rich renderings."""

    def test_group_text_plain_matches_label(self) -> None:
        assert group_text("chrome", 3).plain == group_label("chrome", 3)

    def test_leaf_text_plain_matches_label(self, make_record) -> None:
        record = make_record(id=7, name="bash", owner_user="bob", is_system_owned=True)
        assert leaf_text(record).plain == leaf_label(record)

    def test_markup_in_names_is_literal(self, make_record) -> None:
        """Brackets in process names are not treated as markup."""
        record = make_record(id=1, name="[bold]x[/]")
        assert "[bold]x[/]" in leaf_text(record).plain


class TestRecordsTable:
    """Tests for the details table."""

    def test_table_rows(self, browser_records) -> None:
        table = records_table(browser_records)
        assert table.row_count == 3
        assert [c.header for c in table.columns] == ["PID", "Name", "Title", "User"]

    def test_table_renders(self, make_record) -> None:
        console = Console(width=120, record=True, file=io.StringIO())
        console.print(records_table([make_record(id=99, name="sshd", owner_user="root")]))
        output = console.export_text()
        assert "99" in output
        assert "sshd" in output
        assert "root" in output
