# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Text normalisation shared by header validation, indexing and matching."""

from __future__ import annotations

import re

# Unicode-aware: letters and digits of any script survive, everything else
# (punctuation, symbols, underscores, whitespace) separates tokens.
_NON_WORD = re.compile(r"[\W_]+")


def normalize(text: str) -> str:
    """Casefold, turn punctuation into spaces and collapse whitespace.

    >>> normalize("Set up Stripe-billing, please!")
    'set up stripe billing please'
    >>> normalize("Café")
    'café'
    """
    return _NON_WORD.sub(" ", text.casefold()).strip()


__all__ = ["normalize"]
