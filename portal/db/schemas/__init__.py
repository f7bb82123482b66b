"""
Pydantic schemas shared by the API client and workflow helpers.
"""

from .service_workflow import (
    ServiceStatus,
    ServiceOrigin,
    RequestStatus,
    RequestUrgency,
    ServiceType,
    AssigneeType,
    AssignmentType,
    AssignmentStatus,
    ClientSummary,
    ProjectManagerSummary,
    ConvertedService,
    ServiceAssignment,
    ServiceStatusHistory,
    RequestAttachment,
    ServiceRequest,
    EnhancedService,
    CreateServicePayload,
    AssignServicePayload,
    DelegateServicePayload,
    CreateServiceRequestPayload,
    ApproveServiceRequestPayload,
    AssignPMPayload,
    UpdatePMAssignmentPayload,
    ApiEnvelope,
)

__all__ = [
    # enums
    "ServiceStatus",
    "ServiceOrigin",
    "RequestStatus",
    "RequestUrgency",
    "ServiceType",
    "AssigneeType",
    "AssignmentType",
    "AssignmentStatus",
    # records
    "ClientSummary",
    "ProjectManagerSummary",
    "ConvertedService",
    "ServiceAssignment",
    "ServiceStatusHistory",
    "RequestAttachment",
    "ServiceRequest",
    "EnhancedService",
    # payloads
    "CreateServicePayload",
    "AssignServicePayload",
    "DelegateServicePayload",
    "CreateServiceRequestPayload",
    "ApproveServiceRequestPayload",
    "AssignPMPayload",
    "UpdatePMAssignmentPayload",
    # envelope
    "ApiEnvelope",
]
