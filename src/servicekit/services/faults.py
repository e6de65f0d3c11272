"""Fault logging collaborator.

BaseService reports every unexpected exception through a FaultLogger
before turning it into a ServiceError. The logger is injected per
instance so tests can substitute a capturing stub.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from servicekit.config.settings import ServiceKitSettings


class FaultLogger(Protocol):
    """Callable receiving ``(fault, context)``; its return value is ignored."""

    def __call__(self, fault: BaseException, context: str) -> None: ...


class StructlogFaultLogger:
    """Default FaultLogger: one structured ``error`` event per fault."""

    def __init__(
        self,
        *,
        event: str = "service.fault",
        include_traceback: bool = True,
        logger_name: str = "servicekit.faults",
    ) -> None:
        self.event = event
        self.include_traceback = include_traceback
        self.logger_name = logger_name

    @classmethod
    def from_settings(cls, settings: ServiceKitSettings) -> StructlogFaultLogger:
        return cls(
            event=settings.faults.event,
            include_traceback=settings.faults.include_traceback,
        )

    def __call__(self, fault: BaseException, context: str) -> None:
        log = structlog.get_logger(self.logger_name)
        extra = {"exc_info": fault} if self.include_traceback else {}
        log.error(
            self.event,
            context=context,
            fault=type(fault).__name__,
            error=str(fault),
            **extra,
        )


_default_fault_logger: FaultLogger | None = None


def default_fault_logger() -> FaultLogger:
    """The process-wide FaultLogger used when a service is given none."""
    if _default_fault_logger is not None:
        return _default_fault_logger
    return StructlogFaultLogger()


def set_default_fault_logger(fault_logger: FaultLogger | None) -> None:
    """Install *fault_logger* as the default; ``None`` restores the built-in one."""
    global _default_fault_logger
    _default_fault_logger = fault_logger
