"""Translate pydantic validation failures into ServiceError records.

Pydantic checks every field before raising, so one ValidationError holds
every violated rule. Each entry becomes one ServiceError.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from servicekit.services.result import ServiceError

T = TypeVar("T", bound=BaseModel)

# Error types whose ``ctx["error"]`` is the message a validator raised.
_CUSTOM_ERROR_TYPES = frozenset({"value_error", "assertion_error"})


def _field_name(loc: tuple[int | str, ...]) -> str | None:
    if not loc:
        return None
    return ".".join(str(part) for part in loc)


def _message_for(detail: Any, field: str | None) -> str:
    ctx = detail.get("ctx") or {}
    if detail["type"] in _CUSTOM_ERROR_TYPES and "error" in ctx:
        return str(ctx["error"])
    if field is None:
        return str(detail["msg"])
    label = field.replace("_", " ").replace(".", " ").capitalize()
    return f"{label}: {detail['msg']}"


def errors_from_validation(
    exc: ValidationError,
    *,
    correlation_id: str | None = None,
    code: int = 422,
) -> list[ServiceError]:
    """One ServiceError per entry in *exc*, in pydantic's reporting order.

    Messages raised by custom validators (``ValueError("Name is required")``)
    are used verbatim; built-in checks are prefixed with the field label.
    """
    errors: list[ServiceError] = []
    for detail in exc.errors(include_url=False):
        field = _field_name(detail["loc"])
        errors.append(
            ServiceError(
                message=_message_for(detail, field),
                code=code,
                correlation_id=correlation_id,
                field=field,
            )
        )
    return errors


def validate_params(
    model_cls: type[T], data: dict[str, Any]
) -> tuple[T | None, list[ServiceError]]:
    """Validate *data* against *model_cls*.

    Returns ``(model, [])`` on success and ``(None, errors)`` otherwise.
    """
    try:
        return model_cls.model_validate(data), []
    except ValidationError as exc:
        return None, errors_from_validation(exc)
