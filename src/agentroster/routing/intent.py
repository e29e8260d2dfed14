# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Intent Parser.

Extracts controlled-vocabulary keywords from free text. Only phrases that are
triggers of some agent in the registry can ever be returned.
"""

from __future__ import annotations

from agentroster.lib.text import normalize
from agentroster.registry.models import Registry
from agentroster.routing.models import IntentRequest


class IntentParser:
    """Matches registry trigger phrases against user input.

    The normalised form of every trigger is computed once per registry.
    """

    def __init__(self, registry: Registry, word_boundaries: bool = False) -> None:
        self._registry = registry
        self._word_boundaries = word_boundaries
        self._phrases: tuple[tuple[str, str], ...] = tuple(
            (phrase, normalized)
            for phrase in registry.vocabulary
            if (normalized := normalize(phrase))
        )

    @property
    def registry(self) -> Registry:
        return self._registry

    def parse(self, text: str) -> IntentRequest:
        """Return the request with every trigger phrase found in ``text``."""
        normalized = normalize(text or "")
        if not normalized:
            return IntentRequest(raw=text or "")

        # Padding makes a plain substring test respect token boundaries.
        haystack = f" {normalized} " if self._word_boundaries else normalized
        keywords = frozenset(
            phrase
            for phrase, needle in self._phrases
            if (f" {needle} " if self._word_boundaries else needle) in haystack
        )
        return IntentRequest(raw=text, keywords=keywords)


def parse_intent(
    text: str, registry: Registry, word_boundaries: bool = False
) -> IntentRequest:
    """Parse ``text`` against ``registry`` in one call."""
    return IntentParser(registry, word_boundaries=word_boundaries).parse(text)


__all__ = ["IntentParser", "normalize", "parse_intent"]
