# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""AgentRoster - agent registry compiler and selection engine.

This package compiles a directory of agent documents (Markdown files with a
YAML header) into an immutable registry, and resolves free-text intent into
an ordered, conflict-free plan of agents to apply.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("agentroster")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
