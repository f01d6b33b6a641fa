"""Query-building helpers shared by the catalog repositories.

asyncpg uses numbered placeholders (``$1``, ``$2``, ...), so filters, SET
clauses and LIMIT/OFFSET have to agree on parameter positions. ``SqlFilter``
hands out placeholders in order and keeps the matching values, which lets a
list query and its COUNT query share one WHERE clause and one parameter list.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class PaginationData(BaseModel):
    """Pagination metadata returned with every listing."""

    total: int
    limit: int
    offset: int
    returned: int


class SqlFilter:
    """Accumulates AND-ed conditions and their positional parameters."""

    def __init__(self) -> None:
        self.conditions: list[str] = []
        self.values: list[Any] = []

    def bind(self, value: Any) -> str:
        """Register a parameter value and return its placeholder."""
        self.values.append(value)
        return f"${len(self.values)}"

    def where(self, condition: str) -> None:
        """Add a condition; placeholders must come from :meth:`bind`."""
        self.conditions.append(condition)

    @property
    def clause(self) -> str:
        """The WHERE clause, or an empty string when nothing was added."""
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)

    def page(self, limit: int, offset: int) -> tuple[str, list[Any]]:
        """LIMIT/OFFSET clause plus the full parameter list for the page query.

        The filter's own values are left untouched so the COUNT query can
        still use them.
        """
        values = [*self.values, limit, offset]
        n = len(self.values)
        return f"LIMIT ${n + 1} OFFSET ${n + 2}", values


def contains_pattern(term: str) -> str:
    r"""Build an ILIKE pattern matching ``term`` literally anywhere.

    ``%``, ``_`` and the escape character itself are escaped with ``\``
    (PostgreSQL's default LIKE escape).
    """
    escaped = term.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")
    return f"%{escaped}%"


def sort_direction(order: str | None) -> str:
    """Only an explicit ``asc`` sorts ascending; anything else is descending."""
    if order is not None and order.lower() == "asc":
        return "ASC"
    return "DESC"


def build_set_clause(changes: dict[str, Any], sql_filter: SqlFilter) -> str:
    """Render ``col = $n`` assignments for a sparse patch.

    Column names come from the patch model's declared fields, never from
    request data. Placeholders are bound on ``sql_filter`` so the caller can
    keep binding WHERE parameters after the SET list.
    """
    return ", ".join(
        f"{column} = {sql_filter.bind(value)}" for column, value in changes.items()
    )


def quote_identifier(name: str) -> str:
    """Double-quote an identifier such as a collation name."""
    return '"' + name.replace('"', '""') + '"'


def affected_rows(status: str) -> int:
    """Parse the row count from an asyncpg command tag (``"UPDATE 3"``)."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0


def build_pagination(total: int, limit: int, offset: int, returned: int) -> PaginationData:
    """Assemble pagination metadata for a page of ``returned`` rows."""
    return PaginationData(total=total, limit=limit, offset=offset, returned=returned)
