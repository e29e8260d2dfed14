# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""CLI subpackage for AgentRoster command-line tools.

Modules:
    main: ``agentroster`` command group (build, export, resolve)
"""

from __future__ import annotations

__all__ = ["main"]
