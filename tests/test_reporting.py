"""Tests for the text report."""

from pathlib import Path

import pytest

from topup.errors import ReportWriteError
from topup.reporting import render, render_company, write_report
from topup.schemas import CompanyAggregate, ToppedUpUser


def _user(last: str, first: str, tokens: int, updated: int) -> ToppedUpUser:
    return ToppedUpUser(
        id=1,
        first_name=first,
        last_name=last,
        email=f"{first.lower()}@test.com",
        company_id=1,
        email_status=True,
        active_status=True,
        tokens=tokens,
        tokens_updated=updated,
    )


@pytest.fixture
def aggregate_a() -> CompanyAggregate:
    """An aggregate with users in both partitions."""
    return CompanyAggregate(
        company_id=1,
        company_name="Yellow Mouse Inc.",
        users_emailed=(_user("Avery", "Nina", 0, 37),),
        users_not_emailed=(_user("Boberg", "Amanda", 5, 42),),
        total_top_ups=74,
    )


class TestRender:
    """Tests for render()."""

    def test_company_block(self, aggregate_a: CompanyAggregate) -> None:
        """Test the exact layout of one company block."""
        expected = (
            "\tCompany Id: 1\n"
            "\tCompany Name: Yellow Mouse Inc.\n"
            "\tUsers Emailed:\n"
            "\t\tAvery, Nina, nina@test.com\n"
            "\t\t\tPrevious Token Balance, 0\n"
            "\t\t\tNew Token Balance 37\n"
            "\tUsers Not Emailed:\n"
            "\t\tBoberg, Amanda, amanda@test.com\n"
            "\t\t\tPrevious Token Balance, 5\n"
            "\t\t\tNew Token Balance 42\n"
            "\t\tTotal amount of top ups for Yellow Mouse Inc.: 74\n"
            "\n"
        )
        assert render_company(aggregate_a) == expected

    def test_empty_partitions(self) -> None:
        """Test that headings are kept when a company has no users."""
        text = render_company(CompanyAggregate(company_id=3, company_name="Red"))
        assert text == (
            "\tCompany Id: 3\n"
            "\tCompany Name: Red\n"
            "\tUsers Emailed:\n"
            "\tUsers Not Emailed:\n"
            "\t\tTotal amount of top ups for Red: 0\n"
            "\n"
        )

    def test_blocks_in_order(self, aggregate_a: CompanyAggregate) -> None:
        """Test that blocks follow aggregate order, separated by a blank line."""
        other = CompanyAggregate(company_id=2, company_name="Blue")
        text = render([other, aggregate_a])

        assert text == render_company(other) + render_company(aggregate_a)
        assert text.index("Company Id: 2") < text.index("Company Id: 1")
        assert "\n\n\tCompany Id: 1" in text

    def test_no_companies(self) -> None:
        """Test that no aggregates render an empty report."""
        assert render([]) == ""


class TestWriteReport:
    """Tests for write_report()."""

    def test_writes_text(self, tmp_path: Path) -> None:
        """Test that the report lands at the destination."""
        path = write_report("hello\n", tmp_path / "output.txt")
        assert path.read_text(encoding="utf-8") == "hello\n"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Test that missing parent directories are created."""
        path = write_report("x", tmp_path / "reports" / "2024" / "output.txt")
        assert path.exists()

    def test_replaces_existing_report(self, tmp_path: Path) -> None:
        """Test that an older report is replaced and no temp files remain."""
        target = tmp_path / "output.txt"
        target.write_text("old", encoding="utf-8")

        write_report("new", target)

        assert target.read_text(encoding="utf-8") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["output.txt"]

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        """Test that a destination blocked by a file raises ReportWriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(ReportWriteError, match="Error writing report"):
            write_report("x", blocker / "output.txt")

    def test_unencodable_text(self, tmp_path: Path) -> None:
        """Test that a lone surrogate fails cleanly and keeps the old report."""
        target = tmp_path / "output.txt"
        target.write_text("old", encoding="utf-8")

        with pytest.raises(ReportWriteError, match="surrogates not allowed"):
            write_report("Company Name: A\ud800\n", target)

        assert target.read_text(encoding="utf-8") == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["output.txt"]

    def test_failed_rename_removes_temp_file(self, tmp_path: Path) -> None:
        """Test that the temp file is removed when the final rename fails."""
        target = tmp_path / "output.txt"
        target.mkdir()

        with pytest.raises(ReportWriteError):
            write_report("x", target)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["output.txt"]
