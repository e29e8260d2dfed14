# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Tests for agent document header parsing."""

from __future__ import annotations

import pytest

from agentroster.registry.enums import AgentTier
from agentroster.registry.header import (
    HeaderParsed,
    HeaderParseFailure,
    parse_header,
    split_front_matter,
)

pytestmark = pytest.mark.unit


class TestSplitFrontMatter:
    def test_splits_header_and_body(self) -> None:
        parts = split_front_matter("---\nname: x\n---\nbody line\n")

        assert parts == ("name: x\n", "body line\n")

    def test_missing_opening_delimiter(self) -> None:
        assert split_front_matter("name: x\n---\nbody\n") is None

    def test_unterminated_header(self) -> None:
        assert split_front_matter("---\nname: x\nbody\n") is None

    def test_accepts_yaml_document_end_marker(self) -> None:
        assert split_front_matter("---\nname: x\n...\nbody") == ("name: x\n", "body")

    def test_ignores_byte_order_mark(self) -> None:
        assert split_front_matter("\ufeff---\nname: x\n---\n") == ("name: x\n", "")


class TestParseHeader:
    def test_valid_header_produces_document(self, agent_text, source_document) -> None:
        text = agent_text(
            name="Billing",
            tier="features",
            triggers=["stripe", "billing"],
            depends_on=["auth"],
            code_templates=["stripe-subscription-flow.ts"],
            prerequisites=[{"env": "STRIPE_SECRET_KEY"}],
        )

        result = parse_header(source_document("billing", text))

        assert isinstance(result, HeaderParsed)
        assert result.ok
        doc = result.document
        assert doc.id == "billing"
        assert doc.tier is AgentTier.FEATURES
        assert doc.triggers == ("billing", "stripe")
        assert doc.depends_on == ("auth",)
        assert doc.code_templates == ("stripe-subscription-flow.ts",)
        assert doc.prerequisites == ({"env": "STRIPE_SECRET_KEY"},)
        assert doc.source_path == "/agents/billing.md"

    def test_body_is_never_interpreted(self, agent_text, source_document) -> None:
        text = agent_text(body="---\nnot: [valid\n")

        assert parse_header(source_document("a", text)).ok

    def test_missing_header(self, source_document) -> None:
        result = parse_header(source_document("a", "# Just a body\n"))

        assert isinstance(result, HeaderParseFailure)
        assert "front-matter" in result.message

    def test_invalid_yaml(self, source_document) -> None:
        result = parse_header(source_document("a", "---\nname: [unclosed\n---\n"))

        assert isinstance(result, HeaderParseFailure)
        assert "invalid YAML" in result.message

    def test_header_must_be_mapping(self, source_document) -> None:
        result = parse_header(source_document("a", "---\n- one\n- two\n---\n"))

        assert isinstance(result, HeaderParseFailure)
        assert "mapping" in result.message

    def test_empty_header(self, source_document) -> None:
        result = parse_header(source_document("a", "---\n---\nbody"))

        assert isinstance(result, HeaderParseFailure)
        assert result.reasons == ("header is empty",)

    def test_missing_triggers_is_rejected(self, source_document) -> None:
        text = "---\nname: A\ntier: ui\ndescription: d\n---\n"

        result = parse_header(source_document("a", text))

        assert isinstance(result, HeaderParseFailure)
        assert any(reason.startswith("triggers") for reason in result.reasons)

    def test_empty_triggers_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(triggers=[])))

        assert not result.ok

    def test_uppercase_trigger_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(triggers=["Stripe"])))

        assert isinstance(result, HeaderParseFailure)
        assert "lowercase" in result.message

    def test_punctuation_only_trigger_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(triggers=["stripe", "++"])))

        assert isinstance(result, HeaderParseFailure)
        assert "no letters or digits" in result.message

    def test_non_latin_trigger_is_accepted(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(triggers=["東京", "café"])))

        assert result.ok

    def test_duplicate_triggers_are_rejected(self, agent_text, source_document) -> None:
        text = agent_text(triggers=["stripe", " stripe"])

        result = parse_header(source_document("a", text))

        assert isinstance(result, HeaderParseFailure)
        assert "duplicates" in result.message

    def test_unknown_tier_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(tier="backend")))

        assert isinstance(result, HeaderParseFailure)
        assert any(reason.startswith("tier") for reason in result.reasons)

    def test_unknown_field_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(owner="someone")))

        assert isinstance(result, HeaderParseFailure)
        assert any(reason.startswith("owner") for reason in result.reasons)

    def test_blank_name_is_rejected(self, agent_text, source_document) -> None:
        assert not parse_header(source_document("a", agent_text(name="   "))).ok

    def test_self_dependency_is_rejected(self, agent_text, source_document) -> None:
        result = parse_header(source_document("a", agent_text(depends_on=["a"])))

        assert isinstance(result, HeaderParseFailure)
        assert result.reasons == ("depends_on: agent references itself",)

    def test_failure_lists_every_problem(self, source_document) -> None:
        text = "---\nname: A\ntier: nowhere\n---\n"

        result = parse_header(source_document("a", text))

        assert isinstance(result, HeaderParseFailure)
        fields = {reason.split(":")[0] for reason in result.reasons}
        assert {"tier", "triggers", "description"} <= fields
