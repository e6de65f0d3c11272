"""Human/JSON rendering of a ServiceResult.

JSON output is the ``to_dict()`` wire shape; human output is a short
status line followed by payload or error lines.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from servicekit.services.result import ServiceError, ServiceResult


def _format_data_human(data: Any) -> str:
    """Format result data as indented key-value pairs."""
    if not isinstance(data, dict):
        return f"  {data!r}"
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            lines.append(f"  {key}: {_json.dumps(value, separators=(',', ':'), default=str)}")
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def _format_error_human(error: ServiceError) -> str:
    tags = [str(error.code)]
    if error.correlation_id is not None:
        tags.append(f"id={error.correlation_id}")
    if error.field is not None:
        tags.append(f"field={error.field}")
    return f"  - {error.message} [{', '.join(tags)}]"


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.to_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.message}"]
        if result.data is not None:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    parts = [f"ERROR: {result.message or 'Unknown error'}"]
    parts.extend(_format_error_human(error) for error in result.errors)
    return "\n".join(parts)
