"""Spend search: filter arguments to a storage-agnostic query descriptor.

build_search_query never touches storage. A store adapter renders the
SearchQuery to its own query language (see budgetmgr.store.search), and
SearchQuery.apply evaluates it in memory.

Unset filter fields produce no filter at all, so an empty SearchSpendsArgs
matches every spend, ordered by (year, month, day, id).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from functools import cmp_to_key

from budgetmgr.dates import date_key
from budgetmgr.domain.models import NO_SPEND_TYPE, SpendRow, SpendTypeID
from budgetmgr.domain.money import Money


class SortBy(str, Enum):
    DATE = "date"
    TITLE = "title"
    COST = "cost"


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Field(str, Enum):
    """Spend fields a query can refer to."""

    ID = "id"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    TITLE = "title"
    NOTES = "notes"
    COST = "cost"
    TYPE_ID = "type_id"


@dataclass(frozen=True)
class SearchSpendsArgs:
    """Spend search filter. Every field is optional.

    title/notes are matched case-insensitively as substrings, or as whole
    values when title_exactly/notes_exactly is set. after/before and
    min_cost/max_cost are inclusive. A zero cost means "not set".
    without_type searches only for spends without a type and ignores
    type_ids; NO_SPEND_TYPE inside type_ids also matches untyped spends.
    """

    title: str = ""
    notes: str = ""
    title_exactly: bool = False
    notes_exactly: bool = False
    after: date | None = None
    before: date | None = None
    min_cost: Money | None = None
    max_cost: Money | None = None
    without_type: bool = False
    type_ids: tuple[SpendTypeID, ...] = ()
    sort: SortBy = SortBy.DATE
    order: Order = Order.ASC


# Filters


@dataclass(frozen=True)
class Like:
    """Lower-cased field matches a LIKE pattern ('%' = any run of chars)."""

    field: Field
    pattern: str

    def matches(self, row: SpendRow) -> bool:
        value = str(getattr(row, self.field.value) or "").lower()
        return _like(value, self.pattern)


@dataclass(frozen=True)
class DateRange:
    """Spend date as yyyymmdd within [after, before]; None bound is open."""

    after: int | None = None
    before: int | None = None

    def matches(self, row: SpendRow) -> bool:
        key = row.date_key
        if self.after is not None and key < self.after:
            return False
        if self.before is not None and key > self.before:
            return False
        return True


@dataclass(frozen=True)
class CostRange:
    """Cost within [min_cost, max_cost]; None bound is open."""

    min_cost: Money | None = None
    max_cost: Money | None = None

    def matches(self, row: SpendRow) -> bool:
        if self.min_cost is not None and row.cost < self.min_cost:
            return False
        if self.max_cost is not None and row.cost > self.max_cost:
            return False
        return True


@dataclass(frozen=True)
class TypeFilter:
    """Spend type is one of type_ids, OR the spend has no type."""

    type_ids: tuple[SpendTypeID, ...] = ()
    include_untyped: bool = False

    def matches(self, row: SpendRow) -> bool:
        if self.include_untyped and row.type_id == NO_SPEND_TYPE:
            return True
        return row.type_id != NO_SPEND_TYPE and row.type_id in self.type_ids


Filter = Like | DateRange | CostRange | TypeFilter


@dataclass(frozen=True)
class OrderBy:
    field: Field
    descending: bool = False


@dataclass(frozen=True)
class SearchQuery:
    """Conjunction of filters plus a sort order."""

    filters: tuple[Filter, ...]
    order_by: tuple[OrderBy, ...]

    def matches(self, row: SpendRow) -> bool:
        return all(f.matches(row) for f in self.filters)

    def apply(self, rows: Iterable[SpendRow]) -> list[SpendRow]:
        """Filter and sort rows in memory."""
        matched = [row for row in rows if self.matches(row)]
        return sorted(matched, key=cmp_to_key(self._compare))

    def _compare(self, a: SpendRow, b: SpendRow) -> int:
        for order in self.order_by:
            x = getattr(a, order.field.value)
            y = getattr(b, order.field.value)
            if x == y:
                continue
            result = -1 if x < y else 1
            return -result if order.descending else result
        return 0


_SORT_FIELDS: dict[SortBy, tuple[Field, ...]] = {
    SortBy.DATE: (Field.YEAR, Field.MONTH, Field.DAY),
    SortBy.TITLE: (Field.TITLE,),
    SortBy.COST: (Field.COST,),
}


def build_search_query(args: SearchSpendsArgs) -> SearchQuery:
    """Translate search arguments into a SearchQuery.

    Args:
        args: Search filter; unset fields are left out of the query.

    Returns:
        SearchQuery whose order always ends with id ascending.
    """
    filters: list[Filter] = []

    if args.title:
        filters.append(Like(Field.TITLE, _pattern(args.title, args.title_exactly)))
    if args.notes:
        filters.append(Like(Field.NOTES, _pattern(args.notes, args.notes_exactly)))

    if args.after is not None or args.before is not None:
        filters.append(
            DateRange(
                after=date_key(args.after) if args.after is not None else None,
                before=date_key(args.before) if args.before is not None else None,
            )
        )

    min_cost = args.min_cost if args.min_cost else None
    max_cost = args.max_cost if args.max_cost else None
    if min_cost is not None or max_cost is not None:
        filters.append(CostRange(min_cost, max_cost))

    if args.without_type:
        filters.append(TypeFilter((), include_untyped=True))
    elif args.type_ids:
        include_untyped = NO_SPEND_TYPE in args.type_ids
        type_ids = tuple(dict.fromkeys(t for t in args.type_ids if t != NO_SPEND_TYPE))
        filters.append(TypeFilter(type_ids, include_untyped))

    descending = args.order is Order.DESC
    order_by = [OrderBy(f, descending) for f in _SORT_FIELDS[args.sort]]
    order_by.append(OrderBy(Field.ID))

    return SearchQuery(tuple(filters), tuple(order_by))


def _pattern(value: str, exactly: bool) -> str:
    value = value.lower()
    return value if exactly else f"%{value}%"


def _like(value: str, pattern: str) -> bool:
    parts = pattern.split("%")
    if len(parts) == 1:
        return value == pattern

    head, *middle, tail = parts
    if not value.startswith(head) or not value.endswith(tail) or len(value) < len(head) + len(tail):
        return False
    pos = len(head)
    end = len(value) - len(tail)
    for part in middle:
        found = value.find(part, pos, end)
        if found < 0:
            return False
        pos = found + len(part)
    return True
