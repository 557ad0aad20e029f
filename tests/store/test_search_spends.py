"""Tests for spend search rendered to SQLite."""

from datetime import date
from pathlib import Path

import pytest

from budgetmgr.domain.args import AddSpendArgs, AddSpendTypeArgs
from budgetmgr.domain.models import SpendTypeID
from budgetmgr.domain.money import Money
from budgetmgr.domain.search import Order, SearchSpendsArgs, SortBy, build_search_query
from budgetmgr.store import queries
from budgetmgr.store.schema import init_database
from budgetmgr.store.search import to_sql


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database with spends in December 2024 and January/February 2025."""
    path = tmp_path / "budgetmgr.db"
    init_database(path)
    for year, month in ((2024, 12), (2025, 1), (2025, 2)):
        queries.init_month(year, month, path)

    food = queries.add_spend_type(AddSpendTypeArgs("Food"), path)
    fun = queries.add_spend_type(AddSpendTypeArgs("Fun"), path)

    spends = [
        (date(2025, 1, 5), "Coffee", "3.00", food, ""),
        (date(2025, 1, 3), "Groceries", "45.00", food, "weekly shop"),
        (date(2025, 2, 1), "Cinema", "12.00", fun, ""),
        (date(2025, 1, 3), "coffee beans", "9.00", food, ""),
        (date(2024, 12, 31), "Refund", "-20.00", 0, ""),
        (date(2025, 1, 20), "Ёлка", "30.00", fun, "new_year"),
    ]
    for day, title, cost, type_id, notes in spends:
        day_id = queries.get_day_id(day, path)
        args = AddSpendArgs(day_id, title, Money.from_string(cost), SpendTypeID(type_id), notes)
        queries.add_spend(args, path)
    return path


def search(db_path: Path, **kwargs) -> list[int]:
    return [r.id for r in queries.search_spends(SearchSpendsArgs(**kwargs), db_path)]


class TestSearchSpends:
    """Search executed by SQLite."""

    def test_no_filters(self, db_path: Path) -> None:
        assert search(db_path) == [5, 2, 4, 1, 6, 3]

    def test_title_case_insensitive(self, db_path: Path) -> None:
        assert search(db_path, title="COFFEE") == [4, 1]

    def test_title_non_ascii_case_insensitive(self, db_path: Path) -> None:
        assert search(db_path, title="ёлка") == [6]

    def test_title_exactly(self, db_path: Path) -> None:
        assert search(db_path, title="coffee", title_exactly=True) == [1]

    def test_underscore_is_literal(self, db_path: Path) -> None:
        assert search(db_path, notes="w_") == [6]
        assert search(db_path, notes="_") == [6]

    def test_notes(self, db_path: Path) -> None:
        assert search(db_path, notes="SHOP") == [2]

    def test_date_range_is_inclusive(self, db_path: Path) -> None:
        assert search(db_path, after=date(2025, 1, 3), before=date(2025, 1, 5)) == [2, 4, 1]

    def test_date_range_across_years(self, db_path: Path) -> None:
        assert search(db_path, before=date(2025, 1, 3)) == [5, 2, 4]

    def test_cost_range(self, db_path: Path) -> None:
        assert search(db_path, min_cost=Money(300), max_cost=Money(1200)) == [4, 1, 3]

    def test_without_type(self, db_path: Path) -> None:
        assert search(db_path, without_type=True) == [5]

    def test_type_ids(self, db_path: Path) -> None:
        assert search(db_path, type_ids=(SpendTypeID(2),)) == [6, 3]

    def test_type_ids_with_untyped(self, db_path: Path) -> None:
        assert search(db_path, type_ids=(SpendTypeID(2), SpendTypeID(0))) == [5, 6, 3]

    def test_sort_by_cost_desc(self, db_path: Path) -> None:
        assert search(db_path, sort=SortBy.COST, order=Order.DESC) == [2, 6, 3, 4, 1, 5]

    def test_sort_by_title(self, db_path: Path) -> None:
        assert search(db_path, sort=SortBy.TITLE) == [3, 1, 2, 5, 4, 6]

    def test_rows_carry_date_and_amounts(self, db_path: Path) -> None:
        rows = queries.search_spends(SearchSpendsArgs(title="refund"), db_path)

        assert len(rows) == 1
        assert (rows[0].year, rows[0].month, rows[0].day) == (2024, 12, 31)
        assert rows[0].cost == Money(-2000)
        assert rows[0].type_id == 0

    @pytest.mark.parametrize(
        "args",
        [
            SearchSpendsArgs(),
            SearchSpendsArgs(title="co", sort=SortBy.COST),
            SearchSpendsArgs(after=date(2025, 1, 1), type_ids=(SpendTypeID(1), SpendTypeID(0))),
            SearchSpendsArgs(max_cost=Money(1000), order=Order.DESC),
        ],
    )
    def test_matches_in_memory_evaluation(self, db_path: Path, args: SearchSpendsArgs) -> None:
        everything = queries.search_spends(SearchSpendsArgs(), db_path)

        expected = build_search_query(args).apply(everything)

        assert queries.search_spends(args, db_path) == expected


class TestToSql:
    """Tests for the SQL rendering itself."""

    def test_parameters_are_bound(self) -> None:
        sql, params = to_sql(build_search_query(SearchSpendsArgs(title="x'; DROP TABLE spends; --")), 2)

        assert "DROP" not in sql
        assert params == ["%x'; drop table spends; --%"]

    def test_order_ends_with_id(self) -> None:
        sql, _ = to_sql(build_search_query(SearchSpendsArgs(sort=SortBy.TITLE)), 2)

        assert sql.rstrip().endswith("ORDER BY spend.title ASC, spend.id ASC")

    def test_cost_is_converted_to_minor_units(self) -> None:
        _, params = to_sql(build_search_query(SearchSpendsArgs(min_cost=Money.from_int(5))), 0)

        assert params == [5]
