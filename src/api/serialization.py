"""
Outbound JSON policy for database records.

JavaScript clients parse JSON numbers as IEEE-754 doubles, so integers outside
the safe range are sent as exact decimal-digit strings instead.
"""
from decimal import Decimal
from typing import Any, Dict, List

MAX_SAFE_INTEGER = 2**53 - 1


def _json_safe_number(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return str(value)
        if abs(value) > MAX_SAFE_INTEGER:
            if value == value.to_integral_value():
                return str(int(value))
            return format(value, "f")
        return float(value)
    return value


# PUBLIC_INTERFACE
def to_json_safe(value: Any) -> Any:
    """Recursively apply the safe-integer policy to dicts, lists and scalars."""
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    return _json_safe_number(value)


# PUBLIC_INTERFACE
def serialize_record(row: Dict[str, Any]) -> Dict[str, Any]:
    """Map a database row to its API shape: upper-case column names, JSON-safe numbers."""
    return {column.upper(): to_json_safe(value) for column, value in row.items()}


def serialize_records(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_record(row) for row in rows]
