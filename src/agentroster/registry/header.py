# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Header parsing for agent documents.

A document starts with a YAML front-matter block::

    ---
    name: Billing
    tier: features
    triggers: [stripe, billing, subscription, invoice, checkout, pricing]
    depends_on: [foundation/auth]
    conflicts_with: []
    prerequisites: []
    description: Subscription billing with Stripe
    code_templates: [stripe-subscription-flow.ts]
    design_tokens: ""
    ---
    (opaque body)

``parse_header`` returns a tagged result: either ``HeaderParsed`` with a
complete ``AgentDocument`` or ``HeaderParseFailure`` listing every reason.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from agentroster.documents.loader import SourceDocument
from agentroster.registry.models import AgentDocument, AgentHeader

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"
_FRONT_MATTER_END = {"---", "..."}


@dataclass(frozen=True)
class HeaderParsed:
    """Successful parse."""

    document: AgentDocument

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class HeaderParseFailure:
    """Failed parse; the document is excluded from the registry.

    Attributes:
        document_id: Id of the rejected document.
        path: Source file, when known.
        reasons: One line per problem found.
    """

    document_id: str
    path: Path | None
    reasons: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return "; ".join(self.reasons)


HeaderParseResult = HeaderParsed | HeaderParseFailure


def split_front_matter(text: str) -> tuple[str, str] | None:
    """Split ``text`` into (header YAML, body).

    Returns:
        None when the text does not open with a terminated front-matter
        block.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return None

    for index in range(1, len(lines)):
        if lines[index].strip() in _FRONT_MATTER_END:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return header, body
    return None


def _format_validation_error(error: ValidationError) -> tuple[str, ...]:
    reasons = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"]) or "header"
        reasons.append(f"{loc}: {item['msg']}")
    return tuple(reasons)


def parse_header(document: SourceDocument) -> HeaderParseResult:
    """Parse and validate the header of ``document``."""

    def failure(*reasons: str) -> HeaderParseFailure:
        return HeaderParseFailure(
            document_id=document.document_id,
            path=document.path,
            reasons=tuple(reasons),
        )

    parts = split_front_matter(document.text)
    if parts is None:
        return failure("missing or unterminated front-matter header")

    header_text, _body = parts
    try:
        raw = yaml.safe_load(header_text)
    except yaml.YAMLError as e:
        return failure(f"invalid YAML in header: {e}")

    if raw is None:
        return failure("header is empty")
    if not isinstance(raw, dict):
        return failure(f"header must be a YAML mapping, got {type(raw).__name__}")

    try:
        header = AgentHeader.model_validate(raw)
    except ValidationError as e:
        return failure(*_format_validation_error(e))

    self_refs = [
        f"{key}: agent references itself"
        for key, refs in (
            ("conflicts_with", header.conflicts_with),
            ("depends_on", header.depends_on),
        )
        if document.document_id in refs
    ]
    if self_refs:
        return failure(*self_refs)

    logger.debug(
        "Parsed header for %s",
        document.document_id,
        extra={"tier": header.tier.value, "trigger_count": len(header.triggers)},
    )
    return HeaderParsed(
        document=AgentDocument.from_header(
            document.document_id, header, source_path=document.path
        )
    )


__all__ = [
    "HeaderParseFailure",
    "HeaderParseResult",
    "HeaderParsed",
    "parse_header",
    "split_front_matter",
]
