from typing import Any, Dict, List, Mapping, Optional

import psycopg2
import pytest
from fastapi.testclient import TestClient

from src.api.db import Database
from src.api.main import create_app
from src.api.routes import agents, companies, customers
from src.api.tables import AGENT, COMPANY, CUSTOMER, Table


class InMemoryRepository:
    """Stand-in for TableRepository that keeps rows in a dict, keyed like the real table."""

    def __init__(self, table: Table) -> None:
        self.table = table
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []

    def seed(self, **row: Any) -> None:
        stored = {column: None for column in self.table.columns}
        stored.update({field.lower(): value for field, value in row.items()})
        self.rows[stored[self.table.key_column]] = stored

    def insert(self, values: Mapping[str, Any]) -> Any:
        self.calls.append("insert")
        key = values[self.table.key]
        if key in self.rows:
            raise psycopg2.IntegrityError(f'duplicate key value violates unique constraint "{self.table.name}_pkey"')
        self.seed(**values)
        return key

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get")
        row = self.rows.get(key)
        return dict(row) if row else None

    def update(self, key: str, values: Mapping[str, Any]) -> int:
        self.calls.append("update")
        if key not in self.rows:
            return 0
        self.rows[key].update({field.lower(): value for field, value in values.items()})
        return 1

    def delete(self, key: str) -> int:
        self.calls.append("delete")
        return 1 if self.rows.pop(key, None) is not None else 0

    def find_containing(self, field: str, term: str) -> List[Dict[str, Any]]:
        self.calls.append("find_containing")
        column = self.table.column(field)
        return [dict(row) for _, row in sorted(self.rows.items()) if row[column] and term in row[column]]


@pytest.fixture
def repositories() -> Dict[str, InMemoryRepository]:
    return {
        "customer": InMemoryRepository(CUSTOMER),
        "agent": InMemoryRepository(AGENT),
        "company": InMemoryRepository(COMPANY),
    }


@pytest.fixture
def api_client(repositories: Dict[str, InMemoryRepository]) -> TestClient:
    # No context manager: the lifespan (and with it the real pool) never starts.
    app = create_app(db=Database())
    app.dependency_overrides[customers.get_repository] = lambda: repositories["customer"]
    app.dependency_overrides[agents.get_repository] = lambda: repositories["agent"]
    app.dependency_overrides[companies.get_repository] = lambda: repositories["company"]
    return TestClient(app)


@pytest.fixture
def acme() -> Dict[str, Any]:
    return {
        "CUST_CODE": "C001",
        "CUST_NAME": "Acme",
        "CUST_CITY": "NY",
        "WORKING_AREA": "East",
        "CUST_COUNTRY": "US",
        "OPENING_AMT": 100.00,
        "RECEIVE_AMT": 0,
        "PAYMENT_AMT": 0,
        "OUTSTANDING_AMT": 100.00,
        "PHONE_NO": "555-1111",
    }
