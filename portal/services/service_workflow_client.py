"""HTTP client for the portal's service workflow REST API."""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from portal.db.schemas import (
    ApiEnvelope,
    ApproveServiceRequestPayload,
    AssignPMPayload,
    AssignServicePayload,
    CreateServicePayload,
    CreateServiceRequestPayload,
    DelegateServicePayload,
    EnhancedService,
    ServiceAssignment,
    ServiceRequest,
    ServiceStatusHistory,
    UpdatePMAssignmentPayload,
)
from portal.utils.urls import get_api_base_url

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = (3, 30)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ServiceWorkflowError(RuntimeError):
    """Raised when the API reports failure or returns an unusable body."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class ServiceWorkflowConfig:
    base_url: str
    token: Optional[str] = None
    timeout: Any = _DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ServiceWorkflowConfig":
        timeout_raw = (os.getenv("PORTAL_API_TIMEOUT") or "").strip()
        timeout: Any = _DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                logger.warning("Ignoring invalid PORTAL_API_TIMEOUT '%s'", timeout_raw)
        token = (os.getenv("PORTAL_API_TOKEN") or "").strip() or None
        return cls(base_url=get_api_base_url(), token=token, timeout=timeout)


class ServiceWorkflowClient:
    """Thin wrapper over the service workflow, service request and PM assignment endpoints.

    Calls returning a single typed record parse it into the matching schema;
    the remaining calls return the decoded ``{"success", "data"}`` envelope.
    """

    def __init__(
        self,
        config: Optional[ServiceWorkflowConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ServiceWorkflowConfig.from_env()
        self.base_url = self.config.base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers["Accept"] = "application/json"
        if self.config.token:
            self._session.headers["Authorization"] = f"Bearer {self.config.token}"

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ServiceWorkflowClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("service_workflow_request %s %s", method, path)
        response = self._session.request(method, url, json=json, params=params, timeout=self.config.timeout)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise ServiceWorkflowError(
                f"Non-JSON response from {method} {path}", status_code=response.status_code
            ) from e
        if not isinstance(payload, dict):
            raise ServiceWorkflowError(
                f"Unexpected response structure from {method} {path}", status_code=response.status_code
            )
        if payload.get("success") is False:
            message = payload.get("message") or payload.get("error") or "Request failed"
            raise ServiceWorkflowError(str(message), status_code=response.status_code)
        return payload

    @staticmethod
    def _parse(payload: Dict[str, Any], model: Type[ModelT]) -> ModelT:
        try:
            envelope = ApiEnvelope[model].model_validate(payload)
        except ValidationError as e:
            raise ServiceWorkflowError(f"Invalid {model.__name__} payload: {e}") from e
        if envelope.data is None:
            raise ServiceWorkflowError(f"Response did not include {model.__name__} data")
        return envelope.data

    @staticmethod
    def _parse_list(payload: Dict[str, Any], model: Type[ModelT]) -> List[ModelT]:
        try:
            envelope = ApiEnvelope[List[model]].model_validate(payload)
        except ValidationError as e:
            raise ServiceWorkflowError(f"Invalid {model.__name__} list payload: {e}") from e
        return envelope.data or []

    @staticmethod
    def _body(**fields: Any) -> Dict[str, Any]:
        return {key: value for key, value in fields.items() if value is not None}

    def _action(self, service_id: str, action: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/service-workflow/services/{service_id}/actions/{action}", json=body)

    # ------------------------------------------------------------------
    # service workflow
    # ------------------------------------------------------------------

    def create_service(self, payload: CreateServicePayload) -> Dict[str, Any]:
        return self._request("POST", "/service-workflow/services", json=payload.to_payload())

    def get_enhanced_service(self, service_id: str) -> EnhancedService:
        return self._parse(self._request("GET", f"/service-workflow/services/{service_id}"), EnhancedService)

    def assign_service(self, service_id: str, payload: AssignServicePayload) -> Dict[str, Any]:
        return self._request("POST", f"/service-workflow/services/{service_id}/assign", json=payload.to_payload())

    def delegate_service(self, service_id: str, payload: DelegateServicePayload) -> Dict[str, Any]:
        return self._request("POST", f"/service-workflow/services/{service_id}/delegate", json=payload.to_payload())

    def get_assignment_history(self, service_id: str) -> List[ServiceAssignment]:
        payload = self._request("GET", f"/service-workflow/services/{service_id}/assignments")
        return self._parse_list(payload, ServiceAssignment)

    def get_status_history(self, service_id: str) -> List[ServiceStatusHistory]:
        payload = self._request("GET", f"/service-workflow/services/{service_id}/status-history")
        return self._parse_list(payload, ServiceStatusHistory)

    def get_service_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/service-workflow/stats")

    # ------------------------------------------------------------------
    # service actions
    # ------------------------------------------------------------------

    def start_work(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "start-work", self._body(notes=notes))

    def request_documents(
        self, service_id: str, document_list: Sequence[str], message: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._action(
            service_id,
            "request-documents",
            self._body(documentList=list(document_list), message=message),
        )

    def put_on_hold(self, service_id: str, reason: str) -> Dict[str, Any]:
        return self._action(service_id, "put-on-hold", {"reason": reason})

    def resume_work(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "resume-work", self._body(notes=notes))

    def submit_for_review(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "submit-review", self._body(notes=notes))

    def approve_work(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "approve", self._body(notes=notes))

    def request_changes(self, service_id: str, feedback: str) -> Dict[str, Any]:
        return self._action(service_id, "request-changes", {"feedback": feedback})

    def mark_complete(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        """Mark a service complete (project managers only)."""
        return self._action(service_id, "mark-complete", self._body(notes=notes))

    def deliver_to_client(self, service_id: str, delivery_notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "deliver", self._body(deliveryNotes=delivery_notes))

    def close_service(self, service_id: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._action(service_id, "close", self._body(notes=notes))

    def cancel_service(self, service_id: str, reason: str) -> Dict[str, Any]:
        return self._action(service_id, "cancel", {"reason": reason})

    # ------------------------------------------------------------------
    # service requests
    # ------------------------------------------------------------------

    def create_service_request(self, payload: CreateServiceRequestPayload) -> Dict[str, Any]:
        return self._request("POST", "/service-requests", json=payload.to_payload())

    def get_service_requests(
        self,
        *,
        status: Optional[str] = None,
        service_type: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> List[ServiceRequest]:
        params = self._body(status=status, serviceType=service_type, clientId=client_id)
        payload = self._request("GET", "/service-requests", params=params)
        return self._parse_list(payload, ServiceRequest)

    def get_service_request(self, request_id: str) -> ServiceRequest:
        return self._parse(self._request("GET", f"/service-requests/{request_id}"), ServiceRequest)

    def get_service_request_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/service-requests/stats")

    def approve_service_request(
        self, request_id: str, payload: Optional[ApproveServiceRequestPayload] = None
    ) -> Dict[str, Any]:
        body = payload.to_payload() if payload else {}
        return self._request("POST", f"/service-requests/{request_id}/approve", json=body)

    def reject_service_request(self, request_id: str, rejection_reason: str) -> Dict[str, Any]:
        return self._request(
            "POST", f"/service-requests/{request_id}/reject", json={"rejectionReason": rejection_reason}
        )

    def cancel_service_request(self, request_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/service-requests/{request_id}/cancel")

    # ------------------------------------------------------------------
    # client / project manager assignments
    # ------------------------------------------------------------------

    def get_client_pm_assignments(self, client_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/clients/{client_id}/pm-assignments")

    def assign_pm_to_client(self, client_id: str, payload: AssignPMPayload) -> Dict[str, Any]:
        return self._request("POST", f"/clients/{client_id}/pm-assignments", json=payload.to_payload())

    def update_pm_assignment(
        self, client_id: str, assignment_id: str, payload: UpdatePMAssignmentPayload
    ) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/clients/{client_id}/pm-assignments/{assignment_id}", json=payload.to_payload()
        )

    def remove_pm_from_client(
        self, client_id: str, assignment_id: str, reason: Optional[str] = None
    ) -> Dict[str, Any]:
        return self._request(
            "DELETE", f"/clients/{client_id}/pm-assignments/{assignment_id}", json=self._body(reason=reason)
        )

    def get_pm_clients(self, pm_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/project-managers/{pm_id}/clients")


_client_lock = threading.Lock()
_client_instance: Optional[ServiceWorkflowClient] = None


def get_service_workflow_client() -> ServiceWorkflowClient:
    """Return a process-wide client configured from the environment."""
    global _client_instance
    with _client_lock:
        if _client_instance is None:
            _client_instance = ServiceWorkflowClient()
        return _client_instance


def reset_service_workflow_client_for_tests() -> None:
    global _client_instance
    with _client_lock:
        if _client_instance is not None:
            _client_instance.close()
        _client_instance = None
