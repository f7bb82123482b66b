"""
Service workflow metadata and the role/status action matrix.

Describes each service status (label, phase) and decides which workflow
actions a user may trigger given the service status, their role and whether
they are the current assignee.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from portal.db.schemas import RequestUrgency, ServiceStatus, ServiceType


ROLE_SUPER_ADMIN = "SUPER_ADMIN"
ROLE_ADMIN = "ADMIN"
ROLE_PROJECT_MANAGER = "PROJECT_MANAGER"
ROLE_TEAM_MEMBER = "TEAM_MEMBER"

ADMIN_ROLES: FrozenSet[str] = frozenset({ROLE_SUPER_ADMIN, ROLE_ADMIN})

# Statuses from which a service can no longer be cancelled
FINAL_STATUSES: FrozenSet[ServiceStatus] = frozenset({ServiceStatus.CLOSED, ServiceStatus.CANCELLED})


@dataclass(frozen=True)
class StatusConfig:
    label: str
    icon: str
    description: str
    phase: str


@dataclass(frozen=True)
class ActionConfig:
    action: str
    label: str
    icon: str
    variant: str
    requires_input: bool = False
    input_label: Optional[str] = None
    input_placeholder: Optional[str] = None
    confirm_message: Optional[str] = None


STATUS_CONFIG: Dict[ServiceStatus, StatusConfig] = {
    ServiceStatus.PENDING: StatusConfig("Pending", "Clock", "Service created, awaiting assignment", "creation"),
    ServiceStatus.ASSIGNED: StatusConfig("Assigned", "UserCheck", "Assigned to team member, work not started", "assignment"),
    ServiceStatus.IN_PROGRESS: StatusConfig("In Progress", "Loader2", "Work is actively being done", "execution"),
    ServiceStatus.WAITING_FOR_CLIENT: StatusConfig("Waiting for Client", "UserMinus", "Waiting for client input or documents", "execution"),
    ServiceStatus.ON_HOLD: StatusConfig("On Hold", "Pause", "Work temporarily paused", "execution"),
    ServiceStatus.UNDER_REVIEW: StatusConfig("Under Review", "Search", "Submitted for quality check", "review"),
    ServiceStatus.CHANGES_REQUESTED: StatusConfig("Changes Requested", "AlertTriangle", "Reviewer found issues, needs rework", "review"),
    ServiceStatus.COMPLETED: StatusConfig("Completed", "CheckCircle", "All work done and approved", "completion"),
    ServiceStatus.DELIVERED: StatusConfig("Delivered", "Send", "Sent to client", "completion"),
    ServiceStatus.INVOICED: StatusConfig("Invoiced", "Receipt", "Invoice generated", "billing"),
    ServiceStatus.CLOSED: StatusConfig("Closed", "CheckCircle2", "Fully completed and paid", "final"),
    ServiceStatus.CANCELLED: StatusConfig("Cancelled", "XCircle", "Service cancelled", "final"),
}

SERVICE_TYPE_LABELS: Dict[ServiceType, str] = {
    ServiceType.ITR_FILING: "ITR Filing",
    ServiceType.GST_REGISTRATION: "GST Registration",
    ServiceType.GST_RETURN: "GST Return",
    ServiceType.TDS_RETURN: "TDS Return",
    ServiceType.TDS_COMPLIANCE: "TDS Compliance",
    ServiceType.ROC_FILING: "ROC Filing",
    ServiceType.AUDIT: "Audit",
    ServiceType.BOOK_KEEPING: "Book Keeping",
    ServiceType.PAYROLL: "Payroll",
    ServiceType.CONSULTATION: "Consultation",
    ServiceType.OTHER: "Other",
}

URGENCY_LABELS: Dict[RequestUrgency, str] = {
    RequestUrgency.LOW: "Low",
    RequestUrgency.NORMAL: "Normal",
    RequestUrgency.HIGH: "High",
    RequestUrgency.URGENT: "Urgent",
}

_ASSIGN = ActionConfig("assign", "Assign", "UserPlus", "default")
_START_WORK = ActionConfig("start-work", "Start Work", "Play", "default")
_DELEGATE = ActionConfig("delegate", "Delegate", "Share2", "outline")
_REQUEST_DOCUMENTS = ActionConfig(
    "request-documents",
    "Request Documents",
    "FileQuestion",
    "outline",
    requires_input=True,
    input_label="Documents needed",
    input_placeholder="Enter documents required...",
)
_PUT_ON_HOLD = ActionConfig(
    "put-on-hold",
    "Put On Hold",
    "Pause",
    "outline",
    requires_input=True,
    input_label="Reason",
    input_placeholder="Why are you putting this on hold?",
)
_SUBMIT_REVIEW = ActionConfig("submit-review", "Submit for Review", "Send", "default")
_MARK_COMPLETE = ActionConfig("mark-complete", "Mark Complete", "Check", "default")
_RESUME_WORK = ActionConfig("resume-work", "Resume Work", "Play", "default")
_START_FIXING = ActionConfig("resume-work", "Start Fixing", "Play", "default")
_APPROVE = ActionConfig("approve", "Approve", "CheckCircle", "default")
_REQUEST_CHANGES = ActionConfig(
    "request-changes",
    "Request Changes",
    "Edit",
    "outline",
    requires_input=True,
    input_label="Feedback",
    input_placeholder="Describe what needs to be changed...",
)
_DELIVER = ActionConfig("deliver", "Deliver to Client", "Send", "default")
_CLOSE = ActionConfig("close", "Close Service", "CheckCircle2", "default")
_CANCEL = ActionConfig(
    "cancel",
    "Cancel",
    "X",
    "destructive",
    requires_input=True,
    input_label="Reason",
    input_placeholder="Why is this service being cancelled?",
    confirm_message="Are you sure you want to cancel this service? This action cannot be undone.",
)


def is_admin_role(role: str) -> bool:
    """Return True for SUPER_ADMIN and ADMIN."""
    return role in ADMIN_ROLES


def is_manager_role(role: str) -> bool:
    """Return True if the role can manage services (project managers and admins)."""
    return role == ROLE_PROJECT_MANAGER or is_admin_role(role)


def get_available_actions(status: ServiceStatus | str, role: str, is_assignee: bool) -> List[ActionConfig]:
    """
    Get the workflow actions offered for a service.

    Args:
        status: Current service status (enum member or its string value)
        role: Role of the acting user (SUPER_ADMIN, ADMIN, PROJECT_MANAGER, TEAM_MEMBER)
        is_assignee: Whether the acting user is the current assignee

    Returns:
        Ordered list of ActionConfig entries

    Raises:
        ValueError: If status is not a known service status
    """
    status = ServiceStatus(status)
    is_pm = is_manager_role(role)
    can_work = is_assignee or is_admin_role(role)

    actions: List[ActionConfig] = []

    if status is ServiceStatus.PENDING:
        if is_pm:
            actions.append(_ASSIGN)
    elif status is ServiceStatus.ASSIGNED:
        if can_work:
            actions.extend([_START_WORK, _DELEGATE])
    elif status is ServiceStatus.IN_PROGRESS:
        if can_work:
            actions.extend([_REQUEST_DOCUMENTS, _PUT_ON_HOLD])
            if role == ROLE_TEAM_MEMBER:
                actions.append(_SUBMIT_REVIEW)
            if is_pm:
                actions.append(_MARK_COMPLETE)
            actions.append(_DELEGATE)
    elif status is ServiceStatus.WAITING_FOR_CLIENT:
        if can_work:
            actions.extend([_RESUME_WORK, _PUT_ON_HOLD])
    elif status is ServiceStatus.ON_HOLD:
        if can_work:
            actions.append(_RESUME_WORK)
    elif status is ServiceStatus.UNDER_REVIEW:
        if is_pm:
            actions.extend([_APPROVE, _REQUEST_CHANGES])
    elif status is ServiceStatus.CHANGES_REQUESTED:
        if can_work:
            actions.append(_START_FIXING)
    elif status is ServiceStatus.COMPLETED:
        if is_pm:
            actions.append(_DELIVER)
    elif status is ServiceStatus.INVOICED:
        if is_pm:
            actions.append(_CLOSE)
    # DELIVERED: invoicing happens outside the workflow

    if status not in FINAL_STATUSES and is_pm:
        actions.append(_CANCEL)

    return actions
