"""Error kinds raised by the budget core and its store.

Callers map them to their own surface:
- ValidationError: bad user input (empty title, non-positive amount, bad text)
- NotFoundError: a referenced month/day/income/payment/spend/type doesn't exist
- ConflictError: the change would break a structural rule (spend type cycle,
  removing a spend type that is still used)
"""


class BudgetError(Exception):
    """Base class for all budgetmgr errors."""


class ValidationError(BudgetError):
    """Invalid user input."""


class NotFoundError(BudgetError):
    """Referenced entity doesn't exist."""

    def __init__(self, entity: str, entity_id: int | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with passed id doesn't exist")


class ConflictError(BudgetError):
    """Change conflicts with the current state."""


class SpendTypeGraphError(ConflictError):
    """Spend type hierarchy is malformed (too deep, cyclic or dangling)."""
