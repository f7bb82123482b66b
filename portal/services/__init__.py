"""Service-layer helpers with public client accessors."""

from .service_workflow_client import (
    ServiceWorkflowClient,
    ServiceWorkflowConfig,
    ServiceWorkflowError,
    get_service_workflow_client,
    reset_service_workflow_client_for_tests,
)

__all__ = [
    "ServiceWorkflowClient",
    "ServiceWorkflowConfig",
    "ServiceWorkflowError",
    "get_service_workflow_client",
    "reset_service_workflow_client_for_tests",
]
