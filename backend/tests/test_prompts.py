"""Tests for the prompt builder and versioned prompt loading."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from costume.pipeline.prompts import (
    build_messages,
    build_system_prompt,
    build_user_prompt,
    format_budget,
)
from costume.pipeline.vendors import TRUSTED_VENDORS
from costume.utils import prompt_versioning
from costume.utils.prompt_versioning import (
    get_active_version,
    load_versioned_prompt,
    strip_changelog_lines,
)


class TestFormatBudget:
    @pytest.mark.parametrize(
        ("budget", "expected"),
        [(100.0, "100"), (70.0, "70"), (17.5, "17.5"), (129.99, "129.99"), (130, "130")],
    )
    def test_trailing_zeros_dropped(self, budget, expected):
        assert format_budget(budget) == expected


class TestSystemPrompt:
    def test_lists_every_trusted_vendor(self):
        prompt = build_system_prompt(100)
        for vendor in TRUSTED_VENDORS:
            assert vendor in prompt

    def test_states_item_count_and_fields(self):
        prompt = build_system_prompt(100)
        assert "4-6 items" in prompt
        for field in ("itemId", "category", "name", "searchTerm", "brand", "price", "vendor"):
            assert f'"{field}"' in prompt

    def test_budget_ceiling(self):
        assert "Budget: $45." in build_system_prompt(45)

    def test_untrusted_instruction(self):
        assert '"vendorTrusted" to false' in build_system_prompt(100)

    def test_default_quality_is_normal_and_balanced(self):
        prompt = build_system_prompt(100)
        assert "Quality: normal." in prompt
        assert "Balance cost and quality." in prompt

    def test_cheaper_steers_to_low_cost(self):
        prompt = build_system_prompt(70, "cheaper")
        assert "Quality: cheaper." in prompt
        assert "lowest-cost" in prompt

    def test_better_steers_to_quality(self):
        prompt = build_system_prompt(130, "better")
        assert "Quality: better." in prompt
        assert "higher-quality" in prompt

    def test_schema_braces_rendered(self):
        """Escaped template braces come out as literal JSON braces."""
        prompt = build_system_prompt(100)
        assert '"items": [' in prompt
        assert "{{" not in prompt

    def test_changelog_line_not_sent(self):
        assert "[v1:" not in build_system_prompt(100)


class TestUserPrompt:
    def test_restates_description_and_budget(self):
        prompt = build_user_prompt("a mystical wizard", 100)
        assert 'Generate a Halloween costume for: "a mystical wizard"' in prompt
        assert "$100" in prompt

    def test_braces_in_description_are_literal(self):
        prompt = build_user_prompt("robot {v2}", 50)
        assert "robot {v2}" in prompt

    def test_any_string_accepted(self):
        assert 'for: ""' in build_user_prompt("", 30)


class TestBuildMessages:
    def test_system_then_user(self):
        messages = build_messages("pirate", 60, "better")
        assert [m["role"] for m in messages] == ["system", "user"]
        assert "Quality: better." in messages[0]["content"]
        assert "pirate" in messages[1]["content"]


class TestPromptVersioning:
    def test_active_version_from_manifest(self):
        assert get_active_version("costume_system") == "v1"

    def test_unknown_prompt_defaults_to_v1(self):
        assert get_active_version("does_not_exist") == "v1"

    def test_missing_prompt_raises(self):
        with pytest.raises(FileNotFoundError):
            load_versioned_prompt("does_not_exist")

    def test_falls_back_to_unversioned_file(self, tmp_path):
        (tmp_path / "greeting.txt").write_text("hello")
        with patch.object(prompt_versioning, "PROMPTS_DIR", tmp_path):
            assert load_versioned_prompt("greeting", "v9") == "hello"

    def test_corrupted_manifest_defaults(self, tmp_path):
        manifest = tmp_path / "prompt_versions.json"
        manifest.write_text("{not json")
        with patch.object(prompt_versioning, "VERSIONS_FILE", manifest):
            assert get_active_version("costume_system") == "v1"

    def test_strip_changelog_lines(self):
        text = "[v2: tweak wording]\nLine one\n[v1: initial]\nLine two"
        assert strip_changelog_lines(text) == "Line one\nLine two"
