"""
Table definitions and the parameterized SQL issued against them.

Column names in SQL text come only from the definitions below; every value
supplied by a client is bound through a ``%s`` placeholder.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from src.api.db import Database


@dataclass(frozen=True)
class Table:
    name: str
    entity: str
    key: str
    fields: Tuple[str, ...]

    @property
    def key_column(self) -> str:
        return self.key.lower()

    @property
    def columns(self) -> Tuple[str, ...]:
        return (self.key_column,) + tuple(field.lower() for field in self.fields)

    def column(self, field: str) -> str:
        if field != self.key and field not in self.fields:
            raise KeyError(f"{field} is not a column of {self.name}")
        return field.lower()


CUSTOMER = Table(
    name="customer",
    entity="Customer",
    key="CUST_CODE",
    fields=(
        "CUST_NAME",
        "CUST_CITY",
        "WORKING_AREA",
        "CUST_COUNTRY",
        "GRADE",
        "OPENING_AMT",
        "RECEIVE_AMT",
        "PAYMENT_AMT",
        "OUTSTANDING_AMT",
        "PHONE_NO",
        "AGENT_CODE",
    ),
)

AGENT = Table(
    name="agent",
    entity="Agent",
    key="AGENT_CODE",
    fields=("AGENT_NAME", "WORKING_AREA", "COMMISSION", "PHONE_NO", "COUNTRY"),
)

COMPANY = Table(
    name="company",
    entity="Company",
    key="COMPANY_ID",
    fields=("COMPANY_NAME", "COMPANY_CITY"),
)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TableRepository:
    """One-statement CRUD operations for a single table."""

    def __init__(self, table: Table, db: Database) -> None:
        self.table = table
        self.db = db

    def _select_list(self) -> str:
        return ", ".join(self.table.columns)

    # PUBLIC_INTERFACE
    def insert(self, values: Mapping[str, Any]) -> Any:
        """Insert one row and return its key."""
        columns = [self.table.column(field) for field in values]
        placeholders = ", ".join(["%s"] * len(columns))
        row = self.db.execute_returning_one(
            f"INSERT INTO {self.table.name} ({', '.join(columns)}) VALUES ({placeholders}) "
            f"RETURNING {self.table.key_column}",
            list(values.values()),
        )
        return row[self.table.key_column]

    # PUBLIC_INTERFACE
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Fetch one row by key, or None."""
        return self.db.fetch_one(
            f"SELECT {self._select_list()} FROM {self.table.name} WHERE {self.table.key_column}=%s",
            [key],
        )

    # PUBLIC_INTERFACE
    def update(self, key: str, values: Mapping[str, Any]) -> int:
        """Set the given fields on the row with this key. Returns affected rowcount."""
        if not values:
            raise ValueError("update() needs at least one field")
        assignments = ", ".join(f"{self.table.column(field)}=%s" for field in values)
        return self.db.execute(
            f"UPDATE {self.table.name} SET {assignments} WHERE {self.table.key_column}=%s",
            list(values.values()) + [key],
        )

    # PUBLIC_INTERFACE
    def delete(self, key: str) -> int:
        """Delete the row with this key. Returns affected rowcount."""
        return self.db.execute(
            f"DELETE FROM {self.table.name} WHERE {self.table.key_column}=%s",
            [key],
        )

    # PUBLIC_INTERFACE
    def find_containing(self, field: str, term: str) -> List[Dict[str, Any]]:
        """Rows whose ``field`` contains ``term`` as a substring (case per DB collation)."""
        column = self.table.column(field)
        return self.db.fetch_all(
            f"SELECT {self._select_list()} FROM {self.table.name} WHERE {column} LIKE %s "
            f"ORDER BY {self.table.key_column}",
            [f"%{_escape_like(term)}%"],
        )
