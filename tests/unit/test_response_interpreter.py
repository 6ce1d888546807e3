"""Unit tests for response text extraction."""

import pytest
import pytest_check as check

from aithena.agent.errors import EmptyResponse, MalformedResponse
from aithena.agent.response_interpreter import interpret_response


class TestInterpretValid:
    """Tests for well-formed responses."""

    def test_extracts_first_candidate_text(self) -> None:
        raw = {
            "candidates": [
                {"content": {"role": "model", "parts": [{"text": "4"}]}},
                {"content": {"role": "model", "parts": [{"text": "four"}]}},
            ]
        }

        check.equal(interpret_response(raw), "4")

    def test_joins_split_text_parts(self) -> None:
        raw = {"candidates": [{"content": {"parts": [{"text": "Hello, "}, {"text": "world"}]}}]}

        check.equal(interpret_response(raw), "Hello, world")


class TestInterpretFailures:
    """Tests for malformed and empty envelopes."""

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "text",
            [],
            {},
            {"candidates": []},
            {"candidates": "nope"},
            {"candidates": [{}]},
            {"candidates": [{"content": None}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        ],
    )
    def test_missing_structure_is_malformed(self, raw: object) -> None:
        with pytest.raises(MalformedResponse):
            interpret_response(raw)

    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_blank_text_is_empty(self, text: str) -> None:
        raw = {"candidates": [{"content": {"parts": [{"text": text}]}}]}

        with pytest.raises(EmptyResponse):
            interpret_response(raw)

    def test_blocked_prompt_is_empty(self) -> None:
        raw = {"promptFeedback": {"blockReason": "SAFETY"}}

        with pytest.raises(EmptyResponse, match="SAFETY"):
            interpret_response(raw)
