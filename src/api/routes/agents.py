import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from src.api.db import Database, get_db
from src.api.routes.common import RecordKey, found_record, require_affected
from src.api.schemas import AgentCreate, AgentReplace, AgentUpdate, CreatedMessage, RowsAffectedMessage
from src.api.tables import AGENT, TableRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agent", tags=["Agents"])


# PUBLIC_INTERFACE
def get_repository(db: Database = Depends(get_db)) -> TableRepository:
    """Agent table bound to the app's pooled database."""
    return TableRepository(AGENT, db)


@router.post("", response_model=CreatedMessage, status_code=status.HTTP_201_CREATED, summary="Add a new agent")
def create_agent(payload: AgentCreate, repo: TableRepository = Depends(get_repository)) -> CreatedMessage:
    key = repo.insert(payload.model_dump())
    logger.info("Agent %s created", key)
    return CreatedMessage(message="Agent added successfully!", id=str(key))


@router.get("/{agent_code}", summary="Get an agent")
def get_agent(agent_code: RecordKey, repo: TableRepository = Depends(get_repository)) -> Dict[str, Any]:
    return found_record(AGENT, repo.get(agent_code))


@router.patch("/{agent_code}", response_model=RowsAffectedMessage, summary="Update some fields of an agent")
def update_agent(
    agent_code: RecordKey, payload: AgentUpdate, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    affected = require_affected(AGENT, repo.update(agent_code, payload.changes()))
    return RowsAffectedMessage(message="Agent updated successfully!", affected_rows=affected)


@router.put("/{agent_code}", response_model=RowsAffectedMessage, summary="Replace an agent")
def replace_agent(
    agent_code: RecordKey, payload: AgentReplace, repo: TableRepository = Depends(get_repository)
) -> RowsAffectedMessage:
    affected = require_affected(AGENT, repo.update(agent_code, payload.model_dump()))
    return RowsAffectedMessage(message="Agent replaced successfully!", affected_rows=affected)


@router.delete("/{agent_code}", response_model=RowsAffectedMessage, summary="Delete an agent")
def delete_agent(agent_code: RecordKey, repo: TableRepository = Depends(get_repository)) -> RowsAffectedMessage:
    """Customers still referencing the agent make the database reject this with a 500."""
    affected = require_affected(AGENT, repo.delete(agent_code))
    logger.info("Agent %s deleted", agent_code)
    return RowsAffectedMessage(message="Agent deleted successfully!", affected_rows=affected)
