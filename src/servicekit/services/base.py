"""BaseService — the execution contract shared by every service object.

Lifecycle: CONSTRUCTED → VALIDATING → RUNNING → SUCCEEDED | FAILED

- Construction binds inputs and creates a private error accumulator.
- Validation checks every declared rule before any business logic runs.
- Validation hooks and ``perform()`` share one fault-translation guard.
- ``perform()`` runs once and may record any number of errors.
- Unexpected exceptions are logged through the injected FaultLogger and
  reported as a ServiceError; they never escape ``execute()``.

INVARIANT: One execution per instance. Use ``Service.call(...)``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, ClassVar

from pydantic import BaseModel

from servicekit.exceptions import ServiceFailure, ServiceReuseError
from servicekit.services.faults import FaultLogger, default_fault_logger
from servicekit.services.result import ServiceError, ServiceResult
from servicekit.services.validation import validate_params

logger = logging.getLogger(__name__)


class ServiceState(StrEnum):
    """Execution state of a service instance."""

    CONSTRUCTED = "constructed"
    VALIDATING = "validating"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def describe_fault(fault: BaseException) -> str:
    """Fault description used as the error message; never empty."""
    return str(fault) or type(fault).__name__


class BaseService:
    """Abstract base for single-shot service objects.

    Subclasses implement :meth:`perform` and optionally declare
    ``params_model`` and/or override :meth:`validate`.

    Usage::

        class RegisterUser(BaseService):
            params_model = RegisterParams

            def perform(self) -> dict[str, str]:
                if self.params.email in taken:
                    self.add_error("Email already registered", field="email")
                    return None
                return {"email": self.params.email}

        result = RegisterUser.call(email="a@example.com")

    Class attributes:
        params_model: Pydantic model validated against the keyword inputs.
        success_message: Message of a successful result.
        failure_message: Message when ``perform`` recorded errors.
        invalid_message: Message when validation failed.
        keep_partial_data: Keep the payload on a failed result.
    """

    params_model: ClassVar[type[BaseModel] | None] = None
    success_message: ClassVar[str] = "Success"
    failure_message: ClassVar[str] = "Operation failed"
    invalid_message: ClassVar[str] = "Invalid parameters"
    keep_partial_data: ClassVar[bool] = False

    def __init__(
        self,
        *,
        fault_logger: FaultLogger | None = None,
        log_context: str | None = None,
        **inputs: Any,
    ) -> None:
        self._inputs = inputs
        self._fault_logger: FaultLogger = fault_logger or default_fault_logger()
        self._log_context = log_context
        self._errors: list[ServiceError] = []
        self._state = ServiceState.CONSTRUCTED
        self._result: ServiceResult | None = None
        self.params: Any = None
        self.data: Any = None
        self.message: str | None = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    @classmethod
    def call(cls, *args: Any, **kwargs: Any) -> ServiceResult:
        """Construct with the given arguments and execute once."""
        return cls(*args, **kwargs).execute()

    def execute(self) -> ServiceResult:
        """Run validation, then business logic, and return the outcome."""
        if self._state is not ServiceState.CONSTRUCTED:
            msg = f"{type(self).__name__} instance has already been executed"
            raise ServiceReuseError(msg)

        self._state = ServiceState.VALIDATING
        try:
            self._check_params()
            self.validate()
            if self._errors:
                return self._complete(ServiceResult.failure(self.invalid_message, self._errors))

            self._state = ServiceState.RUNNING
            payload = self.perform()
        except ServiceFailure as exc:
            # raise_if_errors re-raises records that are already accumulated
            for error in exc.errors:
                if not any(error is known for known in self._errors):
                    self._errors.append(error)
            if not self._errors:
                self._errors.append(ServiceError(message=exc.message))
            return self._complete(self._failed(exc.message))
        except Exception as exc:
            self._handle_fault(exc)
            return self._complete(self._failed(describe_fault(exc)))

        if payload is not None:
            self.data = payload
        if self._errors:
            return self._complete(self._failed(self.message or self.failure_message))
        return self._complete(ServiceResult.success(self.message or self.success_message, self.data))

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Record one error per violated precondition. Default: no rules."""

    def perform(self) -> Any:
        """Business logic. The return value (if not None) becomes the payload."""
        msg = f"{type(self).__name__} must implement perform()"
        raise NotImplementedError(msg)

    # ------------------------------------------------------------------
    # Error accumulation
    # ------------------------------------------------------------------

    def add_error(
        self,
        message: str | ServiceError | Mapping[str, Any],
        *,
        code: int = 422,
        correlation_id: str | int | None = None,
        field: str | None = None,
    ) -> None:
        """Record an error without interrupting execution.

        *message* is either a bare string, built into a record with the
        keyword attributes, or an existing record/mapping used as given.
        """
        if isinstance(message, str):
            error = ServiceError(
                message=message, code=code, correlation_id=correlation_id, field=field
            )
        else:
            error = ServiceError.coerce(message)
        self._errors.append(error)

    def add_errors(self, errors: list[ServiceError]) -> None:
        self._errors.extend(errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def raise_if_errors(self) -> None:
        """Raise ServiceFailure carrying every accumulated error, if any."""
        if self._errors:
            message = ", ".join(error.message for error in self._errors)
            raise ServiceFailure(message, self._errors)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def errors(self) -> tuple[ServiceError, ...]:
        return tuple(self._errors)

    @property
    def inputs(self) -> Mapping[str, Any]:
        return MappingProxyType(self._inputs)

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def result(self) -> ServiceResult | None:
        """The outcome, once executed."""
        return self._result

    @property
    def service_name(self) -> str:
        return type(self).__name__

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_params(self) -> None:
        if self.params_model is None:
            return
        self.params, errors = validate_params(self.params_model, self._inputs)
        self._errors.extend(errors)

    def _fault_context(self) -> str:
        context = f"{self.service_name} execution"
        if self._log_context:
            context = f"{context} ({self._log_context})"
        return context

    def _handle_fault(self, fault: Exception) -> None:
        try:
            self._fault_logger(fault, self._fault_context())
        except Exception:
            logger.debug("Fault logger failed for %s", self.service_name, exc_info=True)
        self._errors.append(ServiceError.server_error(describe_fault(fault)))

    def _failed(self, message: str) -> ServiceResult:
        if self.keep_partial_data and self.data is not None:
            return ServiceResult(ok=False, message=message, data=self.data, errors=self._errors)
        return ServiceResult.failure(message, self._errors)

    def _complete(self, result: ServiceResult) -> ServiceResult:
        self._state = ServiceState.SUCCEEDED if result.ok else ServiceState.FAILED
        self._result = result
        return result

    def __repr__(self) -> str:
        return f"<{self.service_name} state={self._state} errors={len(self._errors)}>"


