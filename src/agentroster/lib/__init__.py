"""Shared utilities for AgentRoster."""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    ConflictError,
    CycleError,
    DocumentLoadError,
    EnumRosterErrorCode,
    ResolutionError,
    RosterError,
    TriggerUniquenessError,
    UnknownAgentError,
)
from .text import normalize

__all__ = [
    "ConfigurationError",
    "ConflictError",
    "CycleError",
    "DocumentLoadError",
    "EnumRosterErrorCode",
    "ResolutionError",
    "RosterError",
    "TriggerUniquenessError",
    "UnknownAgentError",
    "normalize",
]
