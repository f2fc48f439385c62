import html
import logging
from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import AfterValidator

from src.api.db import Database, get_db
from src.api.routes.common import RecordKey, found_record, require_affected
from src.api.schemas import CreatedMessage, CustomerCreate, CustomerReplace, CustomerUpdate, RowsAffectedMessage
from src.api.serialization import serialize_records
from src.api.tables import CUSTOMER, TableRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Customers"])


def _trim_and_escape(value: str) -> str:
    value = html.escape(value.strip())
    if not value:
        raise ValueError("City must not be blank")
    return value


CitySearch = Annotated[str, Path(max_length=35, description="City name or part of it"), AfterValidator(_trim_and_escape)]


# PUBLIC_INTERFACE
def get_repository(db: Database = Depends(get_db)) -> TableRepository:
    """Customer table bound to the app's pooled database."""
    return TableRepository(CUSTOMER, db)


@router.post(
    "/customer",
    response_model=CreatedMessage,
    status_code=status.HTTP_201_CREATED,
    summary="Add a new customer",
)
def create_customer(payload: CustomerCreate, repo: TableRepository = Depends(get_repository)) -> CreatedMessage:
    """Insert a customer. CUST_CITY, GRADE and AGENT_CODE are optional."""
    key = repo.insert(payload.model_dump())
    logger.info("Customer %s created", key)
    return CreatedMessage(message="Customer added successfully!", id=str(key))


@router.get("/customer/{cust_code}", summary="Get a customer")
def get_customer(cust_code: RecordKey, repo: TableRepository = Depends(get_repository)) -> Dict[str, Any]:
    return found_record(CUSTOMER, repo.get(cust_code))


@router.patch("/customer/{cust_code}", response_model=RowsAffectedMessage, summary="Update some fields of a customer")
def update_customer(
    cust_code: RecordKey, payload: CustomerUpdate, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    """Set only the fields present in the body."""
    affected = require_affected(CUSTOMER, repo.update(cust_code, payload.changes()))
    return RowsAffectedMessage(message="Customer updated successfully!", affected_rows=affected)


@router.put("/customer/{cust_code}", response_model=RowsAffectedMessage, summary="Replace a customer")
def replace_customer(
    cust_code: RecordKey, payload: CustomerReplace, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    """Overwrite every mutable field; omitted optional fields become null."""
    affected = require_affected(CUSTOMER, repo.update(cust_code, payload.model_dump()))
    return RowsAffectedMessage(message="Customer replaced successfully!", affected_rows=affected)


@router.delete("/customer/{cust_code}", response_model=RowsAffectedMessage, summary="Delete a customer")
def delete_customer(cust_code: RecordKey, repo: TableRepository = Depends(get_repository)) -> RowsAffectedMessage:
    affected = require_affected(CUSTOMER, repo.delete(cust_code))
    logger.info("Customer %s deleted", cust_code)
    return RowsAffectedMessage(message="Customer deleted successfully!", affected_rows=affected)


@router.get("/customers/city/{city}", summary="Get customers by city")
def list_customers_by_city(city: CitySearch, repo: TableRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """Customers whose CUST_CITY contains the given text."""
    rows = repo.find_containing("CUST_CITY", city)
    if not rows:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No customers found in this city")
    return serialize_records(rows)
