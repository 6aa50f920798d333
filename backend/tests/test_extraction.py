"""Tests for pulling the JSON payload out of model replies."""

from __future__ import annotations

import pytest

from costume.errors import ExtractionError
from costume.pipeline.extraction import PARSE_ERROR_MESSAGE, extract_json, raw_items


class TestExtractJson:
    def test_json_after_prose(self):
        text = 'Sure! Here you go: {"items":[{"name":"Hat","vendor":"Target","price":15}]}'
        data = extract_json(text)
        assert len(data["items"]) == 1
        assert data["items"][0]["name"] == "Hat"

    def test_pure_json(self):
        assert extract_json('{"items": []}') == {"items": []}

    def test_code_fenced_json(self):
        text = '```json\n{"items": [{"name": "Cape"}]}\n```'
        assert extract_json(text)["items"][0]["name"] == "Cape"

    def test_prose_on_both_sides(self):
        text = 'Here it is:\n{"items": [{"name": "Mask"}]}\nHave a spooky night!'
        assert extract_json(text)["items"][0]["name"] == "Mask"

    def test_nested_objects_kept_whole(self):
        text = 'x {"items": [{"name": "Cape", "meta": {"size": "L"}}]} y'
        assert extract_json(text)["items"][0]["meta"] == {"size": "L"}

    def test_stray_brace_after_payload(self):
        """Greedy match overshoots; the balanced match recovers the payload."""
        text = '{"items": [{"name": "Wand"}]}\nTip: wrap the {handle} in tape.'
        assert extract_json(text)["items"][0]["name"] == "Wand"

    def test_braces_inside_strings(self):
        text = 'Result: {"items": [{"name": "Robe {deluxe}"}]} enjoy'
        assert extract_json(text)["items"][0]["name"] == "Robe {deluxe}"

    def test_stray_brace_before_payload_fails(self):
        """Known limitation: prose braces before the payload defeat extraction."""
        text = 'Use {your imagination}! {"items": [{"name": "Hat"}]}'
        with pytest.raises(ExtractionError):
            extract_json(text)

    def test_no_braces_fails(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_json("Sorry, I can't help with that costume.")
        assert exc_info.value.message == PARSE_ERROR_MESSAGE
        assert exc_info.value.status_code == 500

    def test_empty_text_fails(self):
        with pytest.raises(ExtractionError):
            extract_json("")

    def test_top_level_array_rejected(self):
        with pytest.raises(ExtractionError):
            extract_json('[{"name": "Hat"}]')

    def test_padded_top_level_array_rejected(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_json('\n  [{"name": "Hat"}, {"name": "Cape"}]  \n')
        assert exc_info.value.message == PARSE_ERROR_MESSAGE

    def test_bracketed_prose_before_object_still_parsed(self):
        text = '[note] {"items": [{"name": "Hat"}]}'
        assert extract_json(text)["items"][0]["name"] == "Hat"

    def test_error_does_not_leak_model_text(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_json("secret internal reasoning without json")
        assert "secret" not in str(exc_info.value)


class TestRawItems:
    def test_returns_items_list(self):
        assert raw_items({"items": [{"name": "Hat"}]}) == [{"name": "Hat"}]

    def test_missing_items_is_empty(self):
        assert raw_items({"costume": "wizard"}) == []

    def test_non_list_items_is_empty(self):
        assert raw_items({"items": {"name": "Hat"}}) == []
