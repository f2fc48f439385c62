from decimal import Decimal
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator

MAX_BIGINT = 2**63 - 1


def json_number(value: Any) -> Any:
    """Reject strings and booleans, which Decimal would otherwise coerce."""
    if value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("Input should be a number")
    return value


class RequestModel(BaseModel):
    """Base for request bodies: strings are trimmed, unknown fields are ignored."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class PartialUpdate(RequestModel):
    """
    Base for PATCH bodies.

    Any non-empty subset of the declared fields may be sent. An explicit null is
    accepted only for columns listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def check_subset(self) -> "PartialUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one updatable field must be provided")
        nulls = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None and name not in self.nullable_fields
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    # PUBLIC_INTERFACE
    def changes(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class APIMessage(BaseModel):
    message: str = Field(..., description="Human readable message")


class CreatedMessage(APIMessage):
    id: str = Field(..., description="Key of the inserted record")


class RowsAffectedMessage(APIMessage):
    affected_rows: int = Field(..., ge=0, description="Rows changed by the statement")


# =========================
# Customer
# =========================

class CustomerReplace(RequestModel):
    CUST_NAME: StrictStr = Field(..., min_length=1, max_length=40)
    CUST_CITY: Optional[StrictStr] = Field(None, min_length=1, max_length=35)
    WORKING_AREA: StrictStr = Field(..., min_length=1, max_length=35)
    CUST_COUNTRY: StrictStr = Field(..., min_length=1, max_length=20)
    GRADE: Optional[StrictInt] = Field(None, ge=0, le=MAX_BIGINT)
    OPENING_AMT: Decimal = Field(..., max_digits=12, decimal_places=2)
    RECEIVE_AMT: Decimal = Field(..., max_digits=12, decimal_places=2)
    PAYMENT_AMT: Decimal = Field(..., max_digits=12, decimal_places=2)
    OUTSTANDING_AMT: Decimal = Field(..., max_digits=12, decimal_places=2)
    PHONE_NO: StrictStr = Field(..., min_length=1, max_length=17)
    AGENT_CODE: Optional[StrictStr] = Field(None, min_length=1, max_length=6)

    amounts_are_numbers = field_validator("OPENING_AMT", "RECEIVE_AMT", "PAYMENT_AMT", "OUTSTANDING_AMT", mode="before")(
        json_number
    )


class CustomerCreate(CustomerReplace):
    CUST_CODE: StrictStr = Field(..., min_length=1, max_length=6, description="Customer code (primary key)")


class CustomerUpdate(PartialUpdate):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"CUST_CITY", "GRADE", "AGENT_CODE"})

    CUST_NAME: Optional[StrictStr] = Field(None, min_length=1, max_length=40)
    CUST_CITY: Optional[StrictStr] = Field(None, min_length=1, max_length=35)
    WORKING_AREA: Optional[StrictStr] = Field(None, min_length=1, max_length=35)
    CUST_COUNTRY: Optional[StrictStr] = Field(None, min_length=1, max_length=20)
    GRADE: Optional[StrictInt] = Field(None, ge=0, le=MAX_BIGINT)
    OPENING_AMT: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    RECEIVE_AMT: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    PAYMENT_AMT: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    OUTSTANDING_AMT: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    PHONE_NO: Optional[StrictStr] = Field(None, min_length=1, max_length=17)
    AGENT_CODE: Optional[StrictStr] = Field(None, min_length=1, max_length=6)

    amounts_are_numbers = field_validator("OPENING_AMT", "RECEIVE_AMT", "PAYMENT_AMT", "OUTSTANDING_AMT", mode="before")(
        json_number
    )


# =========================
# Agent
# =========================

class AgentReplace(RequestModel):
    AGENT_NAME: StrictStr = Field(..., min_length=1, max_length=40)
    WORKING_AREA: StrictStr = Field(..., min_length=1, max_length=35)
    COMMISSION: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    PHONE_NO: StrictStr = Field(..., min_length=1, max_length=15)
    COUNTRY: Optional[StrictStr] = Field(None, min_length=1, max_length=25)

    commission_is_number = field_validator("COMMISSION", mode="before")(json_number)


class AgentCreate(AgentReplace):
    AGENT_CODE: StrictStr = Field(..., min_length=1, max_length=6, description="Agent code (primary key)")


class AgentUpdate(PartialUpdate):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"COUNTRY"})

    AGENT_NAME: Optional[StrictStr] = Field(None, min_length=1, max_length=40)
    WORKING_AREA: Optional[StrictStr] = Field(None, min_length=1, max_length=35)
    COMMISSION: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    PHONE_NO: Optional[StrictStr] = Field(None, min_length=1, max_length=15)
    COUNTRY: Optional[StrictStr] = Field(None, min_length=1, max_length=25)

    commission_is_number = field_validator("COMMISSION", mode="before")(json_number)


# =========================
# Company
# =========================

class CompanyReplace(RequestModel):
    COMPANY_NAME: StrictStr = Field(..., min_length=1, max_length=25)
    COMPANY_CITY: Optional[StrictStr] = Field(None, min_length=1, max_length=25)


class CompanyCreate(CompanyReplace):
    COMPANY_ID: StrictStr = Field(..., min_length=1, max_length=6, description="Company id (primary key)")


class CompanyUpdate(PartialUpdate):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"COMPANY_CITY"})

    COMPANY_NAME: Optional[StrictStr] = Field(None, min_length=1, max_length=25)
    COMPANY_CITY: Optional[StrictStr] = Field(None, min_length=1, max_length=25)
