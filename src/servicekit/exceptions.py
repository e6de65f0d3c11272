"""Exception hierarchy.

Validation and business-rule failures are data carried by a
:class:`~servicekit.services.result.ServiceResult`. The exceptions here
cover the few cases that do cross a boundary: an explicit short-circuit,
misuse of a service instance, and unreadable configuration.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from servicekit.services.result import ServiceError


class ServiceKitError(Exception):
    """Base exception for all servicekit errors."""


class ServiceFailure(ServiceKitError):
    """Accumulated service errors raised as one exception.

    Raised by :meth:`BaseService.raise_if_errors`. Inside ``perform`` it is
    part of the declared error vocabulary and is turned back into a failed
    result; outside an execution it reaches the caller.
    """

    def __init__(self, message: str, errors: Sequence[ServiceError] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.errors: tuple[ServiceError, ...] = tuple(errors)


class ServiceReuseError(ServiceKitError):
    """A service instance was executed more than once."""


class ConfigError(ServiceKitError):
    """A configuration file could not be read or parsed."""
