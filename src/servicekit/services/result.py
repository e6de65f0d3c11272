"""ServiceResult and ServiceError — the service outcome contract.

INVARIANT: Every service execution produces exactly one ServiceResult.
HTTP, RPC and CLI layers consume its ``to_dict()`` shape verbatim:
``{success, message, data, errors: [{message, code, id?, field?}]}``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, Self

from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator


class ServiceError(BaseModel):
    """One structured failure within a ServiceResult.

    Attributes:
        message: Human-readable description. Must be non-empty.
        code: HTTP-style classification (422 for validation failures).
        correlation_id: Caller-supplied key matching the error to one input
            item of a batch. Serialized as ``id``.
        field: Name of the invalid attribute, when there is one.
    """

    model_config = {"frozen": True}

    message: str = Field(min_length=1)
    code: int = 422
    correlation_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("correlation_id", "id"),
        serialization_alias="id",
    )
    field: str | None = None

    @field_validator("correlation_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return None if value is None else str(value)

    def to_dict(self) -> dict[str, Any]:
        """Canonical mapping; absent optional keys are omitted, not null."""
        return self.model_dump(by_alias=True, exclude_none=True)

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def validation(cls, message: str, *, field: str | None = None) -> Self:
        return cls(message=message, code=422, field=field)

    @classmethod
    def not_found(cls, message: str = "Record not found") -> Self:
        return cls(message=message, code=404)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> Self:
        return cls(message=message, code=401)

    @classmethod
    def forbidden(cls, message: str = "Forbidden") -> Self:
        return cls(message=message, code=403)

    @classmethod
    def server_error(cls, message: str = "Internal server error") -> Self:
        return cls(message=message, code=500)

    @classmethod
    def coerce(cls, value: str | ServiceError | Mapping[str, Any]) -> ServiceError:
        """Normalize a bare message, mapping, or record into a ServiceError."""
        if isinstance(value, ServiceError):
            return value
        if isinstance(value, str):
            return cls(message=value)
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        msg = f"Cannot build a ServiceError from {type(value).__name__}"
        raise TypeError(msg)

    @classmethod
    def from_failures(
        cls,
        failures: Iterable[tuple[str, str | None]],
        *,
        correlation_id: str | None = None,
        code: int = 422,
    ) -> list[ServiceError]:
        """One record per ``(message, field)`` pair reported by an entity."""
        return [
            cls(message=message, code=code, correlation_id=correlation_id, field=field)
            for message, field in failures
        ]


def json_default(value: Any) -> Any:
    """``json.dumps`` fallback for payload objects."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return str(value)


def _normalize_errors(value: Any) -> tuple[ServiceError, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, ServiceError, Mapping)):
        return (ServiceError.coerce(value),)
    return tuple(ServiceError.coerce(item) for item in value)


class ServiceResult(BaseModel):
    """Immutable outcome of one service execution.

    Use :meth:`success` and :meth:`failure` rather than the constructor.
    Direct construction is reserved for variants that report partial
    ``data`` alongside ``errors``.

    Attributes:
        ok: Whether the execution succeeded. Serialized as ``success``.
        message: Human-readable summary.
        data: Operation payload; ``None`` on failure unless the service
            keeps partial results.
        errors: Ordered error records.
    """

    model_config = {"frozen": True}

    ok: bool = Field(
        validation_alias=AliasChoices("ok", "success"),
        serialization_alias="success",
    )
    message: str = ""
    data: Any = None
    errors: tuple[ServiceError, ...] = ()

    @field_validator("errors", mode="before")
    @classmethod
    def _coerce_errors(cls, value: Any) -> tuple[ServiceError, ...]:
        return _normalize_errors(value)

    @field_serializer("errors")
    def _serialize_errors(self, errors: tuple[ServiceError, ...]) -> list[dict[str, Any]]:
        return [error.to_dict() for error in errors]

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def success(cls, message: str = "Success", data: Any = None) -> Self:
        return cls(ok=True, message=message, data=data, errors=())

    @classmethod
    def failure(cls, message: str, errors: Any = ()) -> Self:
        """Failed result; *errors* may be one error value or a sequence of them."""
        return cls(ok=False, message=message, data=None, errors=_normalize_errors(errors))

    error = failure

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def succeeded(self) -> bool:
        return self.ok

    def failed(self) -> bool:
        return not self.ok

    def has_errors(self) -> bool:
        """True iff any error was recorded, independent of the success flag."""
        return bool(self.errors)

    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, *, indent: int | None = None) -> str:
        """JSON wire form; payload objects pydantic cannot dump fall back to ``str``."""
        return json.dumps(self.to_dict(), indent=indent, default=json_default)
