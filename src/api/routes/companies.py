import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from src.api.db import Database, get_db
from src.api.routes.common import RecordKey, found_record, require_affected
from src.api.schemas import CompanyCreate, CompanyReplace, CompanyUpdate, CreatedMessage, RowsAffectedMessage
from src.api.tables import COMPANY, TableRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/company", tags=["Companies"])


# PUBLIC_INTERFACE
def get_repository(db: Database = Depends(get_db)) -> TableRepository:
    """Company table bound to the app's pooled database."""
    return TableRepository(COMPANY, db)


@router.post("", response_model=CreatedMessage, status_code=status.HTTP_201_CREATED, summary="Add a new company")
def create_company(payload: CompanyCreate, repo: TableRepository = Depends(get_repository)) -> CreatedMessage:
    key = repo.insert(payload.model_dump())
    logger.info("Company %s created", key)
    return CreatedMessage(message="Company added successfully!", id=str(key))


@router.get("/{company_id}", summary="Get a company")
def get_company(company_id: RecordKey, repo: TableRepository = Depends(get_repository)) -> Dict[str, Any]:
    return found_record(COMPANY, repo.get(company_id))


@router.patch("/{company_id}", response_model=RowsAffectedMessage, summary="Update some fields of a company")
def update_company(
    company_id: RecordKey, payload: CompanyUpdate, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    affected = require_affected(COMPANY, repo.update(company_id, payload.changes()))
    return RowsAffectedMessage(message="Company updated successfully!", affected_rows=affected)


@router.put("/{company_id}", response_model=RowsAffectedMessage, summary="Replace a company")
def replace_company(
    company_id: RecordKey, payload: CompanyReplace, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    affected = require_affected(COMPANY, repo.update(company_id, payload.model_dump()))
    return RowsAffectedMessage(message="Company replaced successfully!", affected_rows=affected)


@router.delete("/{company_id}", response_model=RowsAffectedMessage, summary="Delete a company")
def delete_company(company_id: RecordKey, repo: TableRepository = Depends(get_repository)) -> RowsAffectedMessage:
    affected = require_affected(COMPANY, repo.delete(company_id))
    logger.info("Company %s deleted", company_id)
    return RowsAffectedMessage(message="Company deleted successfully!", affected_rows=affected)
