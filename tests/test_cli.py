"""Tests for the budgetmgr command line."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from budgetmgr.cli import app
from budgetmgr.commands.common import parse_date
from budgetmgr.config import LOG_LEVEL_ENV
from budgetmgr.store import queries
from budgetmgr.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    return tmp_path


@pytest.fixture
def initialized() -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return get_db_path()


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, xdg_home: Path) -> None:
        result = runner.invoke(app, ["init", "--currency", "eur"])

        assert result.exit_code == 0
        assert (xdg_home / "data" / "budgetmgr" / "budgetmgr.db").exists()
        assert (xdg_home / "config" / "budgetmgr" / "config.toml").exists()
        assert queries.get_currency(get_db_path()) == "EUR"

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_unknown_currency(self) -> None:
        result = runner.invoke(app, ["init", "--currency", "xxx"])

        assert result.exit_code == 1

    def test_commands_need_database(self) -> None:
        result = runner.invoke(app, ["month", "show"])

        assert result.exit_code == 1
        assert "budgetmgr init" in result.output


class TestLedgerCommands:
    """Tests for month, income, payment and spend commands."""

    def test_month_show(self, initialized: Path) -> None:
        runner.invoke(app, ["income", "add", "Salary", "2800", "--month", "2025-02"])
        runner.invoke(app, ["spend", "add", "Coffee", "3.50", "--date", "03/02/2025"])

        result = runner.invoke(app, ["month", "show", "--month", "2025-02"])

        assert result.exit_code == 0, result.output
        assert "February 2025" in result.output
        month = queries.get_month_by_date(2025, 2, initialized)
        assert month.daily_budget.amount == 10000
        assert month.days[2].saldo.amount == 30000 - 350

    def test_iso_spend_date(self, initialized: Path) -> None:
        result = runner.invoke(app, ["spend", "add", "Coffee", "3", "--date", "2025-02-03"])

        assert result.exit_code == 0, result.output
        month = queries.get_month_by_date(2025, 2, initialized)
        assert [s.title for s in month.days[2].spends] == ["Coffee"]

    def test_zero_precision_currency(self) -> None:
        assert runner.invoke(app, ["init", "--currency", "JPY"]).exit_code == 0

        result = runner.invoke(app, ["income", "add", "Salary", "1000", "--month", "2025-02"])

        assert result.exit_code == 0, result.output
        month = queries.get_month_by_date(2025, 2, get_db_path())
        # 1000 / 28 = 35.71 yen, truncated to whole yen
        assert month.daily_budget.amount == 35
        assert month.daily_budget.prec == 0

    def test_invalid_month(self, initialized: Path) -> None:
        result = runner.invoke(app, ["month", "show", "--month", "February"])

        assert result.exit_code == 1

    def test_invalid_amount(self, initialized: Path) -> None:
        result = runner.invoke(app, ["income", "add", "Salary", "lots", "--month", "2025-02"])

        assert result.exit_code == 1
        assert "invalid money value" in result.output

    def test_invalid_date(self, initialized: Path) -> None:
        result = runner.invoke(app, ["spend", "add", "Coffee", "3", "--date", "someday"])

        assert result.exit_code == 1

    def test_edit_and_remove(self, initialized: Path) -> None:
        runner.invoke(app, ["payment", "add", "Rent", "1000", "--month", "2025-02"])
        payment = queries.get_month_by_date(2025, 2, initialized).monthly_payments[0]

        assert runner.invoke(app, ["payment", "edit", str(payment.id), "--cost", "1400"]).exit_code == 0
        assert queries.get_month_by_date(2025, 2, initialized).total_spend.amount == -140000

        assert runner.invoke(app, ["payment", "remove", str(payment.id)]).exit_code == 0
        assert queries.get_month_by_date(2025, 2, initialized).monthly_payments == []

    def test_missing_entity_exits_2(self, initialized: Path) -> None:
        result = runner.invoke(app, ["spend", "remove", "42"])

        assert result.exit_code == 2
        assert "doesn't exist" in result.output


class TestSpendTypeCommands:
    """Tests for spend type commands."""

    def test_add_and_list(self, initialized: Path) -> None:
        runner.invoke(app, ["type", "add", "Food"])
        runner.invoke(app, ["type", "add", "Groceries", "--parent", "1"])

        result = runner.invoke(app, ["type", "list"])

        assert result.exit_code == 0
        assert "Food / Groceries" in result.output

    def test_cycle_exits_3(self, initialized: Path) -> None:
        runner.invoke(app, ["type", "add", "Food"])
        runner.invoke(app, ["type", "add", "Groceries", "--parent", "1"])

        result = runner.invoke(app, ["type", "edit", "1", "--parent", "2"])

        assert result.exit_code == 3
        assert "cycle" in result.output


class TestSearchAndStats:
    """Tests for search and stats commands."""

    def test_search(self, initialized: Path) -> None:
        runner.invoke(app, ["spend", "add", "Coffee", "3", "--date", "2025-01-05"])
        runner.invoke(app, ["spend", "add", "Cinema", "12", "--date", "2025-01-06"])

        result = runner.invoke(app, ["search", "--title", "coffee"])

        assert result.exit_code == 0, result.output
        assert "Coffee" in result.output
        assert "Cinema" not in result.output

    def test_search_nothing_found(self, initialized: Path) -> None:
        result = runner.invoke(app, ["search", "--title", "nothing"])

        assert result.exit_code == 0
        assert "No spends found" in result.output

    def test_stats(self, initialized: Path) -> None:
        runner.invoke(app, ["type", "add", "Food"])
        runner.invoke(app, ["spend", "add", "Coffee", "3", "--date", "2025-01-05", "--type", "1"])
        runner.invoke(app, ["spend", "add", "Cinema", "12", "--date", "2025-01-06"])

        result = runner.invoke(
            app, ["stats", "--after", "2025-01-01", "--before", "2025-01-31", "--intervals", "2"]
        )

        assert result.exit_code == 0, result.output
        assert "Food" in result.output
        assert "No Type" in result.output

    def test_stats_rejects_zero_intervals(self, initialized: Path) -> None:
        result = runner.invoke(app, ["stats", "--intervals", "0"])

        assert result.exit_code == 1


class TestParseDate:
    """Tests for user-typed date parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2025-02-03", date(2025, 2, 3)),
            ("2025-12-01", date(2025, 12, 1)),
            (" 2025-01-12 ", date(2025, 1, 12)),
            ("12/01/2025", date(2025, 1, 12)),
            ("03/02/2025", date(2025, 2, 3)),
            ("3 Feb 2025", date(2025, 2, 3)),
        ],
    )
    def test_formats(self, raw: str, expected: date) -> None:
        assert parse_date(raw) == expected

    @pytest.mark.parametrize("raw", ["someday", ""])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_date(raw)
