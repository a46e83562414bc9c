"""
QueryBuilder: fluent SQL query construction with parameterized queries.

All caller inputs go through ? parameterized placeholders.
"""
from __future__ import annotations

from typing import Any, Iterable


class QueryBuilder:
    """Fluent SQL query builder with safe parameterization."""

    def __init__(self, base_table: str):
        """
        Args:
            base_table: Table name with optional alias, e.g. "vendors v"
        """
        self.base_table = base_table
        self._conditions: list[str] = []
        self._params: list[Any] = []
        self._joins: list[str] = []
        self._order_by: str | None = None
        self._group_by: str | None = None

    # --- Join methods ---

    def left_join(self, table: str, on: str) -> QueryBuilder:
        """Add LEFT JOIN."""
        self._joins.append(f"LEFT JOIN {table} ON {on}")
        return self

    # --- Generic where ---

    def where(self, condition: str, *params: Any) -> QueryBuilder:
        """Add a WHERE condition with parameters."""
        self._conditions.append(condition)
        self._params.extend(params)
        return self

    def where_in(self, column: str, values: Iterable[Any]) -> QueryBuilder:
        """Add `column IN (...)`. An empty list matches nothing."""
        values = list(values)
        if not values:
            self._conditions.append("0 = 1")
            return self
        placeholders = ", ".join("?" for _ in values)
        self._conditions.append(f"{column} IN ({placeholders})")
        self._params.extend(values)
        return self

    # --- Domain-specific filters ---

    def filter_verified(self, verified_only: bool, column: str = "v.verification_status") -> QueryBuilder:
        """Restrict to VERIFIED vendors when requested."""
        if verified_only:
            self._conditions.append(f"{column} = ?")
            self._params.append("VERIFIED")
        return self

    def filter_category(self, category: str | None, vendor_column: str = "v.id") -> QueryBuilder:
        """Keep vendors that list the category (any position)."""
        if category:
            self._conditions.append(
                "EXISTS (SELECT 1 FROM vendor_categories vc "
                f"WHERE vc.vendor_id = {vendor_column} AND vc.category = ?)"
            )
            self._params.append(category)
        return self

    def filter_city(self, city: str | None, column: str = "v.city") -> QueryBuilder:
        """Exact match on city."""
        if city:
            self._conditions.append(f"{column} = ?")
            self._params.append(city)
        return self

    def filter_min(self, value: float | None, column: str) -> QueryBuilder:
        """Filter `column >= value` if provided."""
        if value is not None:
            self._conditions.append(f"{column} >= ?")
            self._params.append(value)
        return self

    # --- Grouping ---

    def group_by(self, clause: str) -> QueryBuilder:
        """Set GROUP BY clause."""
        self._group_by = clause
        return self

    # --- Sorting ---

    def order_by(self, clause: str) -> QueryBuilder:
        """Set ORDER BY directly (use only with trusted input)."""
        self._order_by = clause
        return self

    # --- Build methods ---

    def _build_from(self) -> str:
        parts = [f"FROM {self.base_table}"]
        parts.extend(self._joins)
        return " ".join(parts)

    def _build_where(self) -> str:
        if not self._conditions:
            return ""
        return "WHERE " + " AND ".join(self._conditions)

    def _build_group_by(self) -> str:
        if not self._group_by:
            return ""
        return f"GROUP BY {self._group_by}"

    def _build_order_by(self) -> str:
        if not self._order_by:
            return ""
        return f"ORDER BY {self._order_by}"

    def build_select(self, columns: str) -> tuple[str, list[Any]]:
        """Build a full SELECT query."""
        parts = [
            f"SELECT {columns}",
            self._build_from(),
            self._build_where(),
            self._build_group_by(),
            self._build_order_by(),
        ]
        return " ".join(p for p in parts if p), list(self._params)
