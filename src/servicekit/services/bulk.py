"""BulkCreationService — create many entities, reporting failures per item.

Every item is attempted in input order; a failing item never stops the
pass. Errors carry the item's correlation key so callers can map them
back to input rows.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from servicekit.services.base import BaseService
from servicekit.services.faults import FaultLogger
from servicekit.services.result import ServiceError
from servicekit.services.validation import errors_from_validation

DEFAULT_KEY_FIELD = "client_side_id"


@runtime_checkable
class Persistable(Protocol):
    """Target entity capability: construct from fields, then save."""

    def save(self) -> bool: ...


@runtime_checkable
class ReportsFailures(Protocol):
    """Entity that explains a failed save as ``(message, field)`` pairs."""

    def validation_failures(self) -> Iterable[tuple[str, str | None]]: ...


class BulkCreationService(BaseService):
    """Construct and save one entity per input item."""

    success_message = "All records created successfully"
    failure_message = "Some records failed to create"
    keep_partial_data = True

    def __init__(
        self,
        items: Sequence[Mapping[str, Any]] | None,
        entity_cls: Callable[..., Persistable] | None,
        *,
        key_field: str = DEFAULT_KEY_FIELD,
        fault_logger: FaultLogger | None = None,
        log_context: str | None = None,
    ) -> None:
        super().__init__(fault_logger=fault_logger, log_context=log_context)
        self.items = items
        self.entity_cls = entity_cls
        self.key_field = key_field

    def validate(self) -> None:
        if not self.items:
            self.add_error("Params cannot be blank")
        if self.entity_cls is None:
            self.add_error("Class cannot be blank")

    def perform(self) -> list[Persistable]:
        # validate() guarantees both are present
        items = self.items or ()
        entity_cls: Callable[..., Persistable] = self.entity_cls  # type: ignore[assignment]
        created: list[Persistable] = []

        for item in items:
            key = item.get(self.key_field)
            correlation_id = None if key is None else str(key)
            fields = {name: value for name, value in item.items() if name != self.key_field}

            try:
                entity = entity_cls(**fields)
            except ValidationError as exc:
                self.add_errors(errors_from_validation(exc, correlation_id=correlation_id))
                continue

            if entity.save():
                created.append(entity)
            else:
                self.add_errors(self._entity_errors(entity, correlation_id))

        return created

    @staticmethod
    def _entity_errors(entity: Persistable, correlation_id: str | None) -> list[ServiceError]:
        failures = list(entity.validation_failures()) if isinstance(entity, ReportsFailures) else []
        if not failures:
            return [ServiceError(message="Record validation failed", correlation_id=correlation_id)]
        return ServiceError.from_failures(failures, correlation_id=correlation_id)
