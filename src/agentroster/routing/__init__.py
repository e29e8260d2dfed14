"""
Agent Routing
=============

Resolves free-text intent into an ordered, conflict-free agent plan.

Components:
- intent: controlled-vocabulary keyword extraction
- matcher: keyword-overlap scoring and classification
- resolver: dependency closure, cycle and conflict checks
- orderer: tier- and dependency-aware execution order
- engine: single resolution entry point
"""

from __future__ import annotations

from .engine import SelectionEngine, resolve
from .intent import IntentParser, normalize, parse_intent
from .matcher import TriggerMatcher
from .models import (
    IntentRequest,
    MatchOutcome,
    MatchResult,
    MatchStatus,
    Resolution,
    ResolvedPlan,
)
from .orderer import ExecutionOrderer
from .resolver import DependencyResolver

__all__ = [
    "DependencyResolver",
    "ExecutionOrderer",
    "IntentParser",
    "IntentRequest",
    "MatchOutcome",
    "MatchResult",
    "MatchStatus",
    "Resolution",
    "ResolvedPlan",
    "SelectionEngine",
    "TriggerMatcher",
    "normalize",
    "parse_intent",
    "resolve",
]
