# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error handling for AgentRoster.

Every exception raised by the engine carries an error code, a human-readable
message and a ``details`` mapping suitable for structured logging. Build-level
failures and per-request resolution failures are separate branches of the
hierarchy so callers can catch one without the other.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any


class EnumRosterErrorCode(str, Enum):
    """Error codes for AgentRoster operations."""

    # Document store
    DOCUMENT_LOAD_FAILED = "DOCUMENT_LOAD_FAILED"

    # Registry build
    TRIGGER_NOT_UNIQUE = "TRIGGER_NOT_UNIQUE"

    # Resolution
    DEPENDENCY_CYCLE = "DEPENDENCY_CYCLE"
    AGENT_CONFLICT = "AGENT_CONFLICT"
    UNKNOWN_AGENT = "UNKNOWN_AGENT"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class RosterError(Exception):
    """Base exception class for AgentRoster.

    Attributes:
        code: Error code from EnumRosterErrorCode
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: EnumRosterErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code}, message={self.message!r}, "
            f"details={self.details})"
        )


class ConfigurationError(RosterError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            EnumRosterErrorCode.CONFIGURATION_ERROR,
            "; ".join(self.errors),
            details={"errors": self.errors},
        )


class DocumentLoadError(RosterError):
    """Raised when an agent document cannot be read.

    Attributes:
        path: Path to the document that failed.
        cause: The underlying exception, if any.
    """

    def __init__(self, message: str, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(
            EnumRosterErrorCode.DOCUMENT_LOAD_FAILED,
            message,
            details={"path": str(path)},
        )


class TriggerUniquenessError(RosterError):
    """Raised when a trigger phrase is declared by more than one agent.

    The build is rejected as a whole.

    Attributes:
        collisions: Mapping of each colliding phrase, in normalised form,
            to the sorted ids of every agent declaring it.
    """

    def __init__(self, collisions: Mapping[str, Iterable[str]]) -> None:
        self.collisions: dict[str, tuple[str, ...]] = {
            phrase: tuple(sorted(ids)) for phrase, ids in sorted(collisions.items())
        }
        described = "; ".join(
            f"'{phrase}' declared by {', '.join(ids)}"
            for phrase, ids in self.collisions.items()
        )
        super().__init__(
            EnumRosterErrorCode.TRIGGER_NOT_UNIQUE,
            f"Trigger phrases must be unique across the registry: {described}",
            details={"collisions": {k: list(v) for k, v in self.collisions.items()}},
        )

    @property
    def agent_ids(self) -> tuple[str, ...]:
        """All agent ids involved in any collision, sorted."""
        return tuple(sorted({i for ids in self.collisions.values() for i in ids}))


class ResolutionError(RosterError):
    """Base class for fatal per-request resolution failures.

    No plan is produced when one of these is raised.
    """


class CycleError(ResolutionError):
    """Raised when dependency expansion revisits an agent still being expanded.

    Attributes:
        cycle: The agent ids forming the cycle; first and last entries are
            the same agent.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(
            EnumRosterErrorCode.DEPENDENCY_CYCLE,
            f"Dependency cycle detected: {' -> '.join(self.cycle)}",
            details={"cycle": list(self.cycle)},
        )


class ConflictError(ResolutionError):
    """Raised when two agents of an expanded selection conflict.

    Conflicts are never resolved automatically; the caller must choose.

    Attributes:
        pair: The conflicting agent ids, in ascending order.
        declared_by: Ids of the agent(s) whose conflicts_with names the other.
    """

    def __init__(self, pair: tuple[str, str], declared_by: Sequence[str]) -> None:
        first, second = sorted(pair)
        self.pair = (first, second)
        self.declared_by = tuple(sorted(declared_by))
        super().__init__(
            EnumRosterErrorCode.AGENT_CONFLICT,
            (
                f"Agents '{first}' and '{second}' conflict "
                f"(declared by {', '.join(self.declared_by)}); choose one of them"
            ),
            details={"pair": list(self.pair), "declared_by": list(self.declared_by)},
        )


class UnknownAgentError(ResolutionError):
    """Raised when a selection names agents absent from the registry."""

    def __init__(self, agent_ids: Iterable[str]) -> None:
        self.agent_ids = tuple(sorted(agent_ids))
        super().__init__(
            EnumRosterErrorCode.UNKNOWN_AGENT,
            f"Unknown agent id(s): {', '.join(self.agent_ids)}",
            details={"agent_ids": list(self.agent_ids)},
        )


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
]
