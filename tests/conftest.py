"""Shared pytest fixtures and sample services for servicekit tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
import structlog
from pydantic import BaseModel, field_validator

from servicekit.services.base import BaseService
from servicekit.services.faults import set_default_fault_logger


class CapturingFaultLogger:
    """FaultLogger stub recording every ``(fault, context)`` call."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException, str]] = []

    def __call__(self, fault: BaseException, context: str) -> None:
        self.calls.append((fault, context))


@pytest.fixture
def fault_log() -> CapturingFaultLogger:
    return CapturingFaultLogger()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None]:
    """Undo structlog configuration and the default fault logger set by a test."""
    yield
    structlog.reset_defaults()
    set_default_fault_logger(None)


# ---------------------------------------------------------------------------
# Sample services (used across service test modules)
# ---------------------------------------------------------------------------


class PersonParams(BaseModel):
    name: str = ""
    age: int = 0

    @field_validator("name")
    @classmethod
    def _name_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

    @field_validator("age")
    @classmethod
    def _age_positive(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Age must be positive")
        return value


class RegisterPerson(BaseService):
    """Validated through PersonParams; fails on a reserved name."""

    params_model = PersonParams
    success_message = "Person registered"

    def perform(self) -> dict[str, Any]:
        if self.params.name == "trigger_error":
            raise RuntimeError("Simulated processing error")
        if self.params.name == "admin":
            self.add_error("Name is reserved", code=409, field="name")
            return None
        return {"name": self.params.name, "age": self.params.age}


class EchoService(BaseService):
    """Returns its ``value`` input."""

    def perform(self) -> Any:
        return self.inputs.get("value")


class FailingService(BaseService):
    """Records errors and then, optionally, raises."""

    def perform(self) -> None:
        for message in self.inputs.get("errors", ()):
            self.add_error(message)
        fault = self.inputs.get("fault")
        if fault is not None:
            raise fault


class FakeRecord:
    """Target entity: saves when ``name`` is non-empty."""

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self._failures: list[tuple[str, str | None]] = []

    @property
    def name(self) -> str:
        return str(self.fields.get("name") or "")

    def save(self) -> bool:
        if not self.name:
            self._failures.append(("Name can't be blank", "name"))
        if "email" in self.fields and "@" not in str(self.fields["email"]):
            self._failures.append(("Email is invalid", "email"))
        return not self._failures

    def validation_failures(self) -> list[tuple[str, str | None]]:
        return list(self._failures)


class SilentRecord:
    """Target entity that fails without explaining why."""

    def __init__(self, **fields: Any) -> None:
        self.fields = fields

    def save(self) -> bool:
        return bool(self.fields.get("ok"))
