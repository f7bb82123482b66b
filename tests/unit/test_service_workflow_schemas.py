import pytest
from pydantic import ValidationError

from portal.db.schemas import (
    ApproveServiceRequestPayload,
    DelegateServicePayload,
    AssigneeType,
    RequestStatus,
    RequestUrgency,
    ServiceAssignment,
    ServiceRequest,
    ServiceStatus,
)


def test_service_status_has_twelve_members():
    assert len(ServiceStatus) == 12
    assert ServiceStatus("WAITING_FOR_CLIENT") is ServiceStatus.WAITING_FOR_CLIENT


def test_service_request_parses_wire_format():
    req = ServiceRequest.model_validate(
        {
            "id": "r1",
            "firmId": "f1",
            "clientId": "c1",
            "serviceType": "GST_REGISTRATION",
            "title": "New GSTIN",
            "status": "CONVERTED",
            "quotedFee": 1500.5,
            "createdAt": "2024-04-01T09:00:00Z",
            "updatedAt": "2024-04-02T09:00:00Z",
            "attachments": [
                {
                    "id": "a1",
                    "requestId": "r1",
                    "fileName": "pan.pdf",
                    "fileType": "application/pdf",
                    "fileSize": 2048,
                    "storagePath": "uploads/pan.pdf",
                    "uploadedAt": "2024-04-01T09:05:00Z",
                }
            ],
            "convertedToService": {"id": "s1", "title": "New GSTIN", "status": "ASSIGNED"},
        }
    )

    assert req.status is RequestStatus.CONVERTED
    assert req.urgency is RequestUrgency.NORMAL
    assert req.attachments[0].file_size == 2048
    assert req.converted_to_service.status is ServiceStatus.ASSIGNED


def test_assignment_rejects_unknown_assignee_type():
    with pytest.raises(ValidationError):
        ServiceAssignment.model_validate(
            {
                "id": "a",
                "firmId": "f",
                "serviceId": "s",
                "assigneeId": "u",
                "assigneeType": "CLIENT",
                "assigneeName": "n",
                "assignedBy": "b",
                "assignedByType": "ADMIN",
                "assignedByName": "Admin",
                "assignmentType": "INITIAL",
                "status": "ACTIVE",
                "assignedAt": "2024-01-01T00:00:00Z",
            }
        )


def test_payloads_accept_python_names_and_emit_camel_case():
    payload = DelegateServicePayload(
        assignee_id="tm-2", assignee_type=AssigneeType.TEAM_MEMBER, delegation_reason="leave"
    )
    assert payload.to_payload() == {
        "assigneeId": "tm-2",
        "assigneeType": "TEAM_MEMBER",
        "delegationReason": "leave",
    }
    assert ApproveServiceRequestPayload().to_payload() == {}
    assert ApproveServiceRequestPayload(quoted_fee=999).to_payload() == {"quotedFee": 999.0}
