# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Document store for agent documents.

Agent documents are Markdown files with a YAML front-matter header. The store
only discovers and reads them; it never interprets or modifies their content.

Usage:
    >>> from pathlib import Path
    >>> from agentroster.documents import DocumentStore
    >>>
    >>> store = DocumentStore(Path("agents"))
    >>> documents, failures = store.load_all()
    >>> for doc in documents:
    ...     print(doc.document_id)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from agentroster.lib.errors import DocumentLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """Raw text of one agent document.

    Attributes:
        document_id: Path relative to the store root, without suffix, with
            ``/`` separators (``features/billing``).
        path: Location the text was read from.
        text: Full document text, header and body.
    """

    document_id: str
    path: Path
    text: str


def document_id_for(path: Path, root: Path) -> str:
    """Derive the stable document id of ``path`` under ``root``."""
    relative = path.relative_to(root)
    return relative.with_suffix("").as_posix()


class DocumentStore:
    """Read-only view over a directory of agent documents.

    Attributes:
        root: Root directory for document discovery.
        pattern: Glob pattern relative to the root.
    """

    DEFAULT_PATTERN = "**/*.md"

    def __init__(self, root: Path, pattern: str = DEFAULT_PATTERN) -> None:
        self._root = root
        self._pattern = pattern
        logger.debug("DocumentStore initialized with root: %s", root)

    @property
    def root(self) -> Path:
        """Return the documents root directory."""
        return self._root

    @property
    def pattern(self) -> str:
        """Return the discovery glob pattern."""
        return self._pattern

    def discover_documents(self) -> list[Path]:
        """Discover all agent documents under the root.

        Returns:
            Paths sorted by document id, independent of filesystem
            enumeration order. Empty if the root is missing or not a
            directory.
        """
        if not self._root.exists():
            logger.warning("Agents directory does not exist: %s", self._root)
            return []

        if not self._root.is_dir():
            logger.warning("Agents path is not a directory: %s", self._root)
            return []

        discovered = sorted(
            (p for p in self._root.glob(self._pattern) if p.is_file()),
            key=lambda p: (document_id_for(p, self._root), p.as_posix()),
        )
        logger.info("Discovered %d document(s) in %s", len(discovered), self._root)
        return discovered

    def load_document(self, path: Path) -> SourceDocument:
        """Read a single document.

        Raises:
            DocumentLoadError: If the file cannot be read or decoded.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentLoadError(
                f"Document file not found: {path}", path=path, cause=e
            ) from e
        except UnicodeDecodeError as e:
            raise DocumentLoadError(
                f"Document is not valid UTF-8: {path}", path=path, cause=e
            ) from e
        except OSError as e:
            raise DocumentLoadError(
                f"Could not read document {path}: {e}", path=path, cause=e
            ) from e

        return SourceDocument(
            document_id=document_id_for(path, self._root),
            path=path,
            text=text,
        )

    def load_all(self) -> tuple[list[SourceDocument], list[DocumentLoadError]]:
        """Load every discovered document.

        A document that cannot be read does not stop the others from loading.

        Returns:
            The loaded documents and the load failures, both in discovery
            order.
        """
        documents: list[SourceDocument] = []
        failures: list[DocumentLoadError] = []

        for path in self.discover_documents():
            try:
                documents.append(self.load_document(path))
            except DocumentLoadError as e:
                logger.warning("Skipping unreadable document: %s", e.message)
                failures.append(e)

        return documents, failures


__all__ = [
    "DocumentStore",
    "SourceDocument",
    "document_id_for",
]
