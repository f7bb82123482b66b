"""
Pydantic schemas for the service workflow API.

Field names are snake_case in Python and camelCase on the wire; both spellings
are accepted when parsing.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ServiceStatus(str, Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    WAITING_FOR_CLIENT = "WAITING_FOR_CLIENT"
    ON_HOLD = "ON_HOLD"
    UNDER_REVIEW = "UNDER_REVIEW"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"
    INVOICED = "INVOICED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class ServiceOrigin(str, Enum):
    CLIENT_REQUEST = "CLIENT_REQUEST"
    FIRM_CREATED = "FIRM_CREATED"
    RECURRING = "RECURRING"
    COMPLIANCE = "COMPLIANCE"


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    CONVERTED = "CONVERTED"


class RequestUrgency(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ServiceType(str, Enum):
    ITR_FILING = "ITR_FILING"
    GST_REGISTRATION = "GST_REGISTRATION"
    GST_RETURN = "GST_RETURN"
    TDS_RETURN = "TDS_RETURN"
    TDS_COMPLIANCE = "TDS_COMPLIANCE"
    ROC_FILING = "ROC_FILING"
    AUDIT = "AUDIT"
    BOOK_KEEPING = "BOOK_KEEPING"
    PAYROLL = "PAYROLL"
    CONSULTATION = "CONSULTATION"
    OTHER = "OTHER"


class AssigneeType(str, Enum):
    PROJECT_MANAGER = "PROJECT_MANAGER"
    TEAM_MEMBER = "TEAM_MEMBER"


class AssignmentType(str, Enum):
    INITIAL = "INITIAL"
    DELEGATION = "DELEGATION"
    RE_ASSIGNMENT = "RE_ASSIGNMENT"
    TAKE_BACK = "TAKE_BACK"


class AssignmentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DELEGATED = "DELEGATED"
    COMPLETED = "COMPLETED"
    REVOKED = "REVOKED"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire: camelCase keys, enums as values, unset fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Related summaries
# ---------------------------------------------------------------------------


class ClientSummary(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None


class ProjectManagerSummary(CamelModel):
    id: str
    name: str
    email: str


class ConvertedService(CamelModel):
    id: str
    title: str
    status: ServiceStatus


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class ServiceAssignment(CamelModel):
    id: str
    firm_id: str
    service_id: str
    assignee_id: str
    assignee_type: AssigneeType
    assignee_name: str
    assigned_by: str
    assigned_by_type: str
    assigned_by_name: str
    delegation_level: int = 0
    previous_assignment_id: Optional[str] = None
    delegation_reason: Optional[str] = None
    assignment_type: AssignmentType
    status: AssignmentStatus
    assigned_at: datetime
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[str] = None
    revoked_reason: Optional[str] = None


class ServiceStatusHistory(CamelModel):
    id: str
    firm_id: str
    service_id: str
    from_status: Optional[ServiceStatus] = None
    to_status: ServiceStatus
    action: str
    changed_by: str
    changed_by_type: str
    changed_by_name: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    metadata: Any = None
    changed_at: datetime


class RequestAttachment(CamelModel):
    id: str
    request_id: str
    file_name: str
    file_type: str
    file_size: int
    storage_path: str
    uploaded_at: datetime


class ServiceRequest(CamelModel):
    id: str
    firm_id: str
    client_id: str
    service_type: ServiceType
    title: str
    description: Optional[str] = None
    urgency: RequestUrgency = RequestUrgency.NORMAL
    preferred_due_date: Optional[datetime] = None
    financial_year: Optional[str] = None
    assessment_year: Optional[str] = None
    status: RequestStatus
    reviewed_by: Optional[str] = None
    reviewed_by_role: Optional[str] = None
    reviewed_by_name: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    approval_notes: Optional[str] = None
    quoted_fee: Optional[float] = None
    created_at: datetime
    updated_at: datetime
    client: Optional[ClientSummary] = None
    attachments: List[RequestAttachment] = Field(default_factory=list)
    converted_to_service: Optional[ConvertedService] = None


class EnhancedService(CamelModel):
    id: str
    firm_id: str
    client_id: str
    project_manager_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    type: ServiceType
    status: ServiceStatus
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    fee_amount: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    origin: ServiceOrigin = ServiceOrigin.FIRM_CREATED
    service_request_id: Optional[str] = None
    financial_year: Optional[str] = None
    assessment_year: Optional[str] = None
    current_assignee_id: Optional[str] = None
    current_assignee_type: Optional[str] = None
    current_assignee_name: Optional[str] = None
    created_by: Optional[str] = None
    created_by_role: Optional[str] = None
    created_by_name: Optional[str] = None
    start_date: Optional[datetime] = None
    internal_notes: Optional[str] = None

    client: Optional[ClientSummary] = None
    project_manager: Optional[ProjectManagerSummary] = None
    assignments: List[ServiceAssignment] = Field(default_factory=list)
    status_history: List[ServiceStatusHistory] = Field(default_factory=list)
    service_request: Optional[ServiceRequest] = None


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateServicePayload(CamelModel):
    client_id: str
    type: ServiceType
    title: str
    description: Optional[str] = None
    financial_year: Optional[str] = None
    assessment_year: Optional[str] = None
    due_date: Optional[str] = None
    fee_amount: Optional[float] = None
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    assign_to_id: Optional[str] = None
    assign_to_type: Optional[AssigneeType] = None


class AssignServicePayload(CamelModel):
    assignee_id: str
    assignee_type: AssigneeType
    notes: Optional[str] = None


class DelegateServicePayload(CamelModel):
    assignee_id: str
    assignee_type: AssigneeType
    delegation_reason: Optional[str] = None


class CreateServiceRequestPayload(CamelModel):
    service_type: ServiceType
    title: str
    description: Optional[str] = None
    urgency: Optional[RequestUrgency] = None
    preferred_due_date: Optional[str] = None
    financial_year: Optional[str] = None
    assessment_year: Optional[str] = None


class ApproveServiceRequestPayload(CamelModel):
    approval_notes: Optional[str] = None
    quoted_fee: Optional[float] = None
    due_date: Optional[str] = None


class AssignPMPayload(CamelModel):
    project_manager_id: str
    role: Optional[str] = None
    notes: Optional[str] = None


class UpdatePMAssignmentPayload(CamelModel):
    role: Optional[str] = None
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
