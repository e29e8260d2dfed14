# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Registry Provider - the current registry snapshot and its refresh.

Readers call ``current()`` and keep the returned snapshot for the whole
request; they never lock. ``refresh()`` builds a complete new snapshot
first and only then swaps the reference, so a reader sees either the old
registry or the new one, never a partial build. A failed build leaves the
previous snapshot published.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from agentroster.registry.builder import RegistryBuilder
from agentroster.registry.models import Registry

logger = logging.getLogger(__name__)


class RegistryProvider:
    """Holds the published registry snapshot.

    Args:
        builder: Builder used for every refresh.
        root: Agents directory; defaults to the builder's configured root.
    """

    def __init__(self, builder: RegistryBuilder | None = None, root: Path | None = None):
        self._builder = builder or RegistryBuilder()
        self._root = root
        self._snapshot: Registry | None = None
        self._version = 0
        self._refresh_lock = threading.Lock()

    @property
    def version(self) -> int:
        """Version of the published snapshot (0 before the first build)."""
        return self._version

    def current(self) -> Registry:
        """Return the published snapshot, building it on first use.

        Concurrent first readers share a single build.
        """
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._refresh_lock:
            # Another reader may have finished the first build while we waited.
            if self._snapshot is not None:
                return self._snapshot
            return self._build_and_publish()

    def refresh(self) -> Registry:
        """Rebuild from the document store and publish the result.

        Rebuilds are serialised; readers are not blocked.

        Raises:
            TriggerUniquenessError: The new build was rejected. The previous
                snapshot stays published.
        """
        with self._refresh_lock:
            return self._build_and_publish()

    def publish(self, registry: Registry) -> Registry:
        """Publish an externally built registry as the next version."""
        with self._refresh_lock:
            return self._publish(registry)

    def _build_and_publish(self) -> Registry:
        try:
            registry = self._builder.build_from_directory(self._root)
        except Exception:
            logger.error(
                "Registry refresh failed; keeping version %d",
                self._version,
                exc_info=True,
            )
            raise
        return self._publish(registry)

    def _publish(self, registry: Registry) -> Registry:
        previous = self._snapshot
        snapshot = registry.with_version(self._version + 1)
        self._snapshot = snapshot
        self._version = snapshot.version

        changed = previous is None or previous.fingerprint != snapshot.fingerprint
        logger.info(
            "Published registry version %d (%s)",
            snapshot.version,
            "changed" if changed else "unchanged",
            extra={"fingerprint": snapshot.fingerprint[:12], "agents": len(snapshot)},
        )
        return snapshot


__all__ = ["RegistryProvider"]
