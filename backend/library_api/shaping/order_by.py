"""Sort expression validation.

A sort expression is a comma-separated list of clauses, each a name with an
optional `asc` or `desc`. Every clause is checked against a property mapping
before any data is fetched; one unknown name rejects the whole expression.
"""

from dataclasses import dataclass

from ..core.constants import ErrorMessages
from ..core.exceptions import InvalidOrderByError
from .property_mapping import PropertyMapping

ASCENDING = "asc"
DESCENDING = "desc"


@dataclass(frozen=True)
class SortClause:
    """A source property and the direction to sort it in."""
    source_property: str
    descending: bool = False


def _split_clause(clause: str) -> tuple[str, bool] | None:
    """Split `name [asc|desc]` into the name and a descending flag.

    Returns None for anything with more than one trailing token or a trailing
    token other than `asc` or `desc`.
    """
    tokens = clause.split()
    if len(tokens) == 1:
        return tokens[0], False
    if len(tokens) == 2 and tokens[1].lower() in (ASCENDING, DESCENDING):
        return tokens[0], tokens[1].lower() == DESCENDING
    return None


def parse_order_by(order_by: str | None, mapping: PropertyMapping) -> tuple[SortClause, ...]:
    """Expand a sort expression into source-property sort clauses.

    Each exposed name expands to all of its mapped source properties in
    registration order. A source property registered with `revert=True`
    sorts in the opposite direction to the one requested.

    Args:
        order_by: Expression such as "name, age desc" (empty means no sorting)
        mapping: Property mapping of the exposed type

    Returns:
        Ordered sort clauses for the data source

    Raises:
        InvalidOrderByError: If any clause is malformed or names an unknown property
    """
    if not order_by or not order_by.strip():
        return ()

    clauses: list[SortClause] = []
    for raw_clause in order_by.split(","):
        raw_clause = raw_clause.strip()
        if not raw_clause:
            continue

        split = _split_clause(raw_clause)
        if split is None:
            raise InvalidOrderByError(ErrorMessages.INVALID_ORDER_BY.format(order_by=order_by))
        name, descending = split

        values = mapping.get(name)
        if values is None:
            raise InvalidOrderByError(ErrorMessages.INVALID_ORDER_BY.format(order_by=order_by))

        for value in values:
            clauses.append(
                SortClause(
                    source_property=value.source_property,
                    descending=not descending if value.revert else descending
                )
            )

    return tuple(clauses)


def is_valid_order_by(order_by: str | None, mapping: PropertyMapping) -> bool:
    """True when every clause of `order_by` names a mapped property."""
    try:
        parse_order_by(order_by, mapping)
    except InvalidOrderByError:
        return False
    return True
