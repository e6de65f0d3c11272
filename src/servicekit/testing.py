"""Assertion and stubbing helpers for tests of service objects.

Every assertion accepts either a ServiceResult or an executed service
instance, returns it unchanged on success, and raises AssertionError with
a descriptive message otherwise.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar
from unittest import mock

from servicekit.services.base import BaseService
from servicekit.services.result import ServiceError, ServiceResult

T = TypeVar("T", ServiceResult, BaseService)

# Attribute names accepted by assert_service_error_with_attributes.
_ATTRIBUTE_ALIASES = {"id": "correlation_id"}


def _errors_of(target: ServiceResult | BaseService) -> tuple[ServiceError, ...]:
    return tuple(target.errors)


def _data_of(target: ServiceResult | BaseService) -> Any:
    return target.data


def assert_service_success(target: T) -> T:
    errors = _errors_of(target)
    failed = target.failed() if isinstance(target, ServiceResult) else bool(errors)
    if failed or errors:
        messages = [error.message for error in errors]
        msg = f"Expected service to succeed, but got errors: {messages}"
        raise AssertionError(msg)
    return target


def assert_service_failure(
    target: T, *, expected_error_count: int | None = None
) -> T:
    errors = _errors_of(target)
    if not errors:
        msg = f"Expected service to fail, but it succeeded with data: {_data_of(target)!r}"
        raise AssertionError(msg)
    if expected_error_count is not None and len(errors) != expected_error_count:
        messages = [error.message for error in errors]
        msg = f"Expected {expected_error_count} errors, but got {len(errors)}: {messages}"
        raise AssertionError(msg)
    return target


def assert_service_error(target: T, message: str) -> T:
    errors = _errors_of(target)
    if not errors:
        msg = "Expected service to have errors, but it succeeded"
        raise AssertionError(msg)
    messages = [error.message for error in errors]
    if message not in messages:
        msg = f"Expected error {message!r} but got: {messages}"
        raise AssertionError(msg)
    return target


def assert_service_error_with_attributes(
    target: T, **attributes: Any
) -> T:
    """Require one error whose attributes all equal *attributes*.

    ``id`` is accepted as a synonym for ``correlation_id``.
    """
    errors = _errors_of(target)
    if not errors:
        msg = "Expected service to have errors, but it succeeded"
        raise AssertionError(msg)
    wanted = {_ATTRIBUTE_ALIASES.get(key, key): value for key, value in attributes.items()}
    for error in errors:
        if all(getattr(error, key, mock.sentinel.missing) == value for key, value in wanted.items()):
            return target
    found = [error.to_dict() for error in errors]
    msg = f"Expected error with attributes {attributes} but got: {found}"
    raise AssertionError(msg)


def build_result(
    *,
    success: bool = True,
    message: str | None = None,
    data: Any = None,
    errors: Sequence[str | ServiceError] = (),
) -> ServiceResult:
    """A ready-made ServiceResult for stubbing collaborators."""
    if success and not errors:
        return ServiceResult.success(message or "Success", data)
    return ServiceResult(
        ok=success,
        message=message or ("Success" if success else "Operation failed"),
        data=data,
        errors=errors,
    )


def stub_service(
    service_cls: type[BaseService],
    *,
    success: bool = True,
    message: str | None = None,
    data: Any = None,
    errors: Sequence[str | ServiceError] = (),
) -> Any:
    """Patch ``service_cls.call`` to return a fixed result.

    Returns the ``unittest.mock`` patcher; use it as a context manager::

        with stub_service(RegisterUser, data={"id": 1}) as call:
            ...
            call.assert_called_once()
    """
    result = build_result(success=success, message=message, data=data, errors=errors)
    return mock.patch.object(service_cls, "call", return_value=result)
