from typing import Annotated, Any, Dict, Optional

from fastapi import HTTPException, Path, status

from src.api.serialization import serialize_record
from src.api.tables import Table

RecordKey = Annotated[str, Path(min_length=1, max_length=6, description="Record key")]


def not_found(entity: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")


def found_record(table: Table, row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Serialized row, or 404 when the lookup matched nothing."""
    if not row:
        raise not_found(table.entity)
    return serialize_record(row)


def require_affected(table: Table, affected: int) -> int:
    """Zero affected rows means the key does not exist."""
    if affected == 0:
        raise not_found(table.entity)
    return affected
