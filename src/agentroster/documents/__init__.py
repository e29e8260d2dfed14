"""Agent document store."""

from __future__ import annotations

from .loader import DocumentStore, SourceDocument, document_id_for

__all__ = [
    "DocumentStore",
    "SourceDocument",
    "document_id_for",
]
