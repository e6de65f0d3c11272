"""servicekit — single-shot service objects with accumulated, structured errors."""

from servicekit.exceptions import ServiceFailure, ServiceKitError, ServiceReuseError
from servicekit.services.base import BaseService, ServiceState
from servicekit.services.bulk import BulkCreationService
from servicekit.services.faults import (
    FaultLogger,
    StructlogFaultLogger,
    default_fault_logger,
    set_default_fault_logger,
)
from servicekit.services.result import ServiceError, ServiceResult

__all__ = [
    "BaseService",
    "BulkCreationService",
    "FaultLogger",
    "ServiceError",
    "ServiceFailure",
    "ServiceKitError",
    "ServiceResult",
    "ServiceReuseError",
    "ServiceState",
    "StructlogFaultLogger",
    "default_fault_logger",
    "set_default_fault_logger",
]
