"""Pure functions over the spend type hierarchy.

Spend types form a forest: every type points to its parent through
parent_id, 0 meaning "no parent". The hierarchy must stay acyclic and no
deeper than MAX_SPEND_TYPE_DEPTH.
"""

from collections.abc import Iterable

from budgetmgr.domain.errors import SpendTypeGraphError
from budgetmgr.domain.models import NO_SPEND_TYPE, SpendType, SpendTypeID

MAX_SPEND_TYPE_DEPTH = 15


def has_cycle(
    spend_types: Iterable[SpendType],
    subject_id: SpendTypeID,
    proposed_parent_id: SpendTypeID,
) -> bool:
    """Check whether reparenting a spend type would introduce a cycle.

    Must be called with a snapshot of all spend types taken before the change.

    Args:
        spend_types: All spend types (current state).
        subject_id: Spend type being reparented.
        proposed_parent_id: New parent id (0 means "make it a root").

    Returns:
        True if the subject would become its own ancestor.

    Raises:
        SpendTypeGraphError: If the chain from the new parent is longer than
            MAX_SPEND_TYPE_DEPTH (the graph is already malformed) or refers to
            a spend type that doesn't exist.
    """
    if proposed_parent_id == NO_SPEND_TYPE:
        return False

    parents = {t.id: t.parent_id for t in spend_types}

    current = proposed_parent_id
    for _ in range(MAX_SPEND_TYPE_DEPTH):
        if current not in parents:
            raise SpendTypeGraphError("invalid spend type")
        if current == subject_id:
            return True
        if parents[current] == NO_SPEND_TYPE:
            return False
        current = parents[current]

    raise SpendTypeGraphError("spend type has too many parents or already has a cycle")


def ancestor_ids(spend_types: Iterable[SpendType], type_id: SpendTypeID) -> list[SpendTypeID]:
    """Get parent, grandparent, ... of a spend type (nearest first).

    Stops after MAX_SPEND_TYPE_DEPTH hops or at an unknown id.
    """
    parents = {t.id: t.parent_id for t in spend_types}
    result: list[SpendTypeID] = []
    current = parents.get(type_id, NO_SPEND_TYPE)
    while current != NO_SPEND_TYPE and current in parents and len(result) < MAX_SPEND_TYPE_DEPTH:
        result.append(current)
        current = parents[current]
    return result


def full_names(spend_types: Iterable[SpendType]) -> dict[SpendTypeID, str]:
    """Build display names like 'Food / Groceries / Vegetables'.

    Chains deeper than MAX_SPEND_TYPE_DEPTH are cut with '...'.
    """
    by_id = {t.id: t for t in spend_types}

    def build(spend_type: SpendType, depth: int) -> str:
        if depth >= MAX_SPEND_TYPE_DEPTH:
            return "..."
        parent = by_id.get(spend_type.parent_id)
        if parent is None:
            return spend_type.name
        return f"{build(parent, depth + 1)} / {spend_type.name}"

    return {type_id: build(t, 0) for type_id, t in by_id.items()}
