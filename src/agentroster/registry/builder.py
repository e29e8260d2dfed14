# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Registry Builder.

Compiles a set of agent documents into an immutable ``Registry``.

Build steps:
1. Reject documents whose ids collide (e.g. ``a.md`` and ``a.markdown``)
2. Parse every header against the strict schema
3. Check trigger counts and code template references
4. Exclude agents with dangling references or on dependency cycles,
   repeating until no further agent is excluded
5. Enforce global trigger uniqueness on normalised phrases (fail-fast)
6. Group by tier, index triggers, fingerprint

Document-level problems exclude the document and are recorded as
``BuildWarning`` entries; only a trigger collision fails the build.
"""

from __future__ import annotations

import hashlib
import logging
from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path

from agentroster.config.settings import Settings, get_settings
from agentroster.documents.loader import (
    DocumentStore,
    SourceDocument,
    document_id_for,
)
from agentroster.lib.errors import ConfigurationError, TriggerUniquenessError
from agentroster.lib.graph import find_cycle
from agentroster.lib.text import normalize
from agentroster.registry.enums import AgentTier, BuildWarningKind
from agentroster.registry.header import HeaderParseFailure, parse_header
from agentroster.registry.models import (
    AgentDocument,
    BuildWarning,
    Registry,
    canonical_json,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RegistryBuilder:
    """Builds ``Registry`` snapshots from agent documents.

    The builder holds no state between builds; identical inputs always
    produce registries with identical content.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._clock = clock or _utcnow

    @property
    def settings(self) -> Settings:
        return self._settings

    def build_from_directory(self, root: Path | None = None) -> Registry:
        """Discover, read and compile every document under ``root``.

        Args:
            root: Agents directory; defaults to ``settings.agents_root``.

        Raises:
            ConfigurationError: If no root is given or configured.
            TriggerUniquenessError: If two agents share a trigger phrase.
        """
        root = root or self._settings.agents_root
        if root is None:
            raise ConfigurationError(
                ["AGENTROSTER_AGENTS_ROOT is required. Set it in .env or pass --root."]
            )

        store = DocumentStore(root, self._settings.document_glob)
        documents, failures = store.load_all()
        unreadable = [
            BuildWarning(
                kind=BuildWarningKind.HEADER_PARSE,
                document_id=document_id_for(failure.path, root),
                message=failure.message,
            )
            for failure in failures
        ]
        return self.build(documents, extra_warnings=unreadable)

    def build(
        self,
        documents: Iterable[SourceDocument],
        extra_warnings: Iterable[BuildWarning] = (),
    ) -> Registry:
        """Compile ``documents`` into a registry.

        Raises:
            TriggerUniquenessError: If two accepted agents share a trigger.
        """
        warnings: list[BuildWarning] = list(extra_warnings)
        ordered = sorted(documents, key=lambda d: (d.document_id, d.path.as_posix()))

        unique = self._drop_duplicate_ids(ordered, warnings)
        accepted: dict[str, AgentDocument] = {}
        for document in unique:
            result = parse_header(document)
            if isinstance(result, HeaderParseFailure):
                warnings.append(
                    BuildWarning(
                        kind=BuildWarningKind.HEADER_PARSE,
                        document_id=result.document_id,
                        message=result.message,
                    )
                )
                continue
            agent = result.document
            if not self._check_trigger_count(agent, warnings):
                continue
            self._check_templates(agent, warnings)
            accepted[agent.id] = agent

        self._exclude_invalid(accepted, warnings)
        self._check_conflict_symmetry(accepted, warnings)
        trigger_index = self._index_triggers(accepted)

        tiers: dict[AgentTier, list[str]] = {tier: [] for tier in AgentTier.ordered()}
        for agent_id in sorted(accepted):
            tiers[accepted[agent_id].tier].append(agent_id)

        warnings.sort(key=BuildWarning.sort_key)
        for warning in warnings:
            logger.warning(
                "Registry build warning: %s",
                warning,
                extra={"kind": warning.kind.value, "document_id": warning.document_id},
            )

        agents = {agent_id: accepted[agent_id] for agent_id in sorted(accepted)}
        fingerprint = hashlib.sha256(
            canonical_json(agents.values()).encode("utf-8")
        ).hexdigest()

        registry = Registry(
            agents=agents,
            tiers={tier: tuple(ids) for tier, ids in tiers.items()},
            trigger_index=trigger_index,
            built_at=self._clock(),
            fingerprint=fingerprint,
            warnings=tuple(warnings),
        )
        logger.info(
            "Built registry with %d agent(s), %d warning(s)",
            len(registry),
            len(registry.warnings),
            extra={"fingerprint": fingerprint[:12]},
        )
        return registry

    # ------------------------------------------------------------------
    # Validation steps
    # ------------------------------------------------------------------

    def _drop_duplicate_ids(
        self, documents: list[SourceDocument], warnings: list[BuildWarning]
    ) -> list[SourceDocument]:
        by_id: dict[str, list[SourceDocument]] = defaultdict(list)
        for document in documents:
            by_id[document.document_id].append(document)

        unique: list[SourceDocument] = []
        for document_id, group in by_id.items():
            if len(group) == 1:
                unique.append(group[0])
                continue
            paths = ", ".join(d.path.as_posix() for d in group)
            warnings.append(
                BuildWarning(
                    kind=BuildWarningKind.HEADER_PARSE,
                    document_id=document_id,
                    message=f"several documents share this id ({paths}); all excluded",
                )
            )
        return unique

    def _check_trigger_count(
        self, agent: AgentDocument, warnings: list[BuildWarning]
    ) -> bool:
        low, high = self._settings.min_triggers, self._settings.max_triggers
        count = len(agent.triggers)
        if low <= count <= high:
            return True

        strict = self._settings.strict_trigger_count
        warnings.append(
            BuildWarning(
                kind=BuildWarningKind.TRIGGER_COUNT,
                document_id=agent.id,
                message=(
                    f"declares {count} trigger(s), expected {low}-{high}"
                    + ("; excluded" if strict else "")
                ),
            )
        )
        return not strict

    def _check_templates(self, agent: AgentDocument, warnings: list[BuildWarning]) -> None:
        templates_root = self._settings.templates_root
        if templates_root is None:
            return
        for template in agent.code_templates:
            if not isinstance(template, str):
                continue
            if not (templates_root / template).is_file():
                warnings.append(
                    BuildWarning(
                        kind=BuildWarningKind.MISSING_TEMPLATE,
                        document_id=agent.id,
                        message=f"code template not found: {template}",
                    )
                )

    def _exclude_invalid(
        self, accepted: dict[str, AgentDocument], warnings: list[BuildWarning]
    ) -> None:
        """Drop dangling references and cycles until nothing changes."""
        changed = True
        while changed:
            changed = False

            for agent_id in sorted(accepted):
                agent = accepted[agent_id]
                missing = sorted(
                    ref
                    for ref in (*agent.depends_on, *agent.conflicts_with)
                    if ref not in accepted
                )
                if missing:
                    del accepted[agent_id]
                    changed = True
                    warnings.append(
                        BuildWarning(
                            kind=BuildWarningKind.REFERENTIAL_INTEGRITY,
                            document_id=agent_id,
                            message=(
                                "references unknown or excluded agent(s): "
                                + ", ".join(missing)
                            ),
                        )
                    )

            if changed:
                continue

            cycle = find_cycle({a.id: a.depends_on for a in accepted.values()})
            if cycle is not None:
                changed = True
                described = " -> ".join(cycle)
                for agent_id in sorted(set(cycle)):
                    del accepted[agent_id]
                    warnings.append(
                        BuildWarning(
                            kind=BuildWarningKind.DEPENDENCY_CYCLE,
                            document_id=agent_id,
                            message=f"on dependency cycle {described}",
                        )
                    )

    def _check_conflict_symmetry(
        self, accepted: dict[str, AgentDocument], warnings: list[BuildWarning]
    ) -> None:
        for agent_id in sorted(accepted):
            for other in accepted[agent_id].conflicts_with:
                if agent_id not in accepted[other].conflicts_with:
                    warnings.append(
                        BuildWarning(
                            kind=BuildWarningKind.ASYMMETRIC_CONFLICT,
                            document_id=agent_id,
                            message=(
                                f"conflicts with {other}, but {other} does not "
                                f"declare the conflict"
                            ),
                        )
                    )

    def _index_triggers(self, accepted: dict[str, AgentDocument]) -> dict[str, str]:
        """Index triggers, rejecting phrases that match the same normalised text.

        Matching compares normalised forms, so ``c++`` and ``c#`` (both ``c``)
        would always fire together and count as one phrase here.
        """
        owners: dict[str, str] = {}
        by_form: dict[str, set[str]] = defaultdict(set)
        for agent_id in sorted(accepted):
            for trigger in accepted[agent_id].triggers:
                owners[trigger] = agent_id
                by_form[normalize(trigger)].add(agent_id)

        collisions = {form: ids for form, ids in by_form.items() if len(ids) > 1}
        if collisions:
            error = TriggerUniquenessError(collisions)
            logger.error(
                "Registry build rejected: %s",
                error.message,
                extra={"agent_ids": list(error.agent_ids)},
            )
            raise error

        return dict(sorted(owners.items()))


__all__ = ["RegistryBuilder"]
