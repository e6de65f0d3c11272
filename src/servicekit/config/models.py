"""Pydantic configuration section models with code-baked defaults.

Sparse TOML contract: defaults live here, servicekit.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class FaultConfig(BaseModel):
    """[faults] section."""

    model_config = {"frozen": True}

    event: str = "service.fault"
    include_traceback: bool = True
