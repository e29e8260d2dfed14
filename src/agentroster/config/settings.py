# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""AgentRoster settings.

All values can be provided through environment variables prefixed with
``AGENTROSTER_`` or through a ``.env`` file found in the working tree:

    AGENTROSTER_AGENTS_ROOT=./agents
    AGENTROSTER_TEMPLATES_ROOT=./templates/code
    AGENTROSTER_MIN_TRIGGERS=6
    AGENTROSTER_MAX_TRIGGERS=12
    AGENTROSTER_STRICT_TRIGGER_COUNT=false
    AGENTROSTER_MATCH_WORD_BOUNDARIES=false

The agents root is the only value required by the CLI. It has no default so
that a misconfigured shell never silently compiles the wrong directory.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, PrivateAttr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_and_load_env() -> None:
    """Load .env file from the nearest ancestor of the working directory."""
    from dotenv import load_dotenv

    current = Path.cwd().resolve()
    for _ in range(10):
        env_file = current / ".env"
        if env_file.exists():
            load_dotenv(env_file, override=False)
            return
        parent = current.parent
        if parent == current:
            break
        current = parent


_find_and_load_env()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings for registry builds and intent resolution."""

    _defaults_warned: bool = PrivateAttr(default=False)

    # =========================================================================
    # DOCUMENT STORE
    # =========================================================================
    agents_root: Path | None = Field(
        default=None,
        description=(
            "Root directory of agent documents. REQUIRED by the CLI; "
            "document ids are paths relative to this directory."
        ),
    )
    templates_root: Path | None = Field(
        default=None,
        description=(
            "Directory holding code templates. When set, every entry of an "
            "agent's code_templates must name a file in this directory."
        ),
    )
    document_glob: str = Field(
        default="**/*.md",
        description="Glob pattern used to discover agent documents",
    )

    # =========================================================================
    # HEADER VALIDATION
    # =========================================================================
    min_triggers: int = Field(
        default=6,
        ge=1,
        description="Minimum trigger phrases an agent document should declare",
    )
    max_triggers: int = Field(
        default=12,
        ge=1,
        description="Maximum trigger phrases an agent document should declare",
    )
    strict_trigger_count: bool = Field(
        default=False,
        description=(
            "Exclude documents whose trigger count is outside "
            "[min_triggers, max_triggers] instead of only warning"
        ),
    )

    # =========================================================================
    # INTENT MATCHING
    # =========================================================================
    match_word_boundaries: bool = Field(
        default=False,
        description=(
            "Opt in to requiring trigger phrases to start and end on token "
            "boundaries of the normalised intent ('auth' then no longer "
            "matches 'authentication')"
        ),
    )

    # =========================================================================
    # PYDANTIC SETTINGS CONFIG
    # =========================================================================
    model_config = SettingsConfigDict(
        env_prefix="AGENTROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_trigger_bounds(self) -> "Settings":
        if self.min_triggers > self.max_triggers:
            msg = (
                f"min_triggers ({self.min_triggers}) must be <= "
                f"max_triggers ({self.max_triggers})"
            )
            raise ValueError(msg)
        return self

    def validate_required(self) -> list[str]:
        """Validate the configuration needed to build a registry.

        Returns:
            List of validation error messages. Empty list means valid.
        """
        errors: list[str] = []

        if self.agents_root is None:
            errors.append(
                "AGENTROSTER_AGENTS_ROOT is required. Set it in .env or pass --root."
            )
        elif not self.agents_root.is_dir():
            errors.append(
                f"AGENTROSTER_AGENTS_ROOT is not a directory: {self.agents_root}"
            )

        if self.templates_root is not None and not self.templates_root.is_dir():
            errors.append(
                f"AGENTROSTER_TEMPLATES_ROOT is not a directory: {self.templates_root}"
            )

        return errors

    def log_default_warnings(self) -> None:
        """Log informational messages about optional checks that are off.

        Logged once per instance.
        """
        if self._defaults_warned:
            return
        self._defaults_warned = True

        if self.templates_root is None:
            logger.info(
                "Code template checks are disabled (AGENTROSTER_TEMPLATES_ROOT unset)."
            )

    def reset_warnings(self) -> None:
        """Reset the warning state for test isolation."""
        self._defaults_warned = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get singleton settings instance.

    Note:
        For test isolation, use `clear_settings_cache()` to reset the
        singleton before each test that needs fresh settings.
    """
    instance = Settings()
    instance.log_default_warnings()
    return instance


def clear_settings_cache() -> None:
    """Clear the settings singleton cache for test isolation."""
    get_settings.cache_clear()
