"""
Unit tests for equipment parsing, aggregation and merging.
"""
import itertools

import pytest

from backend.engine.parsing.equipment import (
    aggregate_equipment,
    canonicalize_equipment,
    merge_equipment,
    parse_equipment,
    strict_parse,
)
from backend.engine.parsing.models import StrictParseKind


class TestStrictParse:
    """Tests for the tagged strict JSON attempt."""

    def test_array_is_sequence(self):
        result = strict_parse('["Treadmill", "Bench"]')
        assert result.kind == StrictParseKind.SEQUENCE
        assert result.items == ["Treadmill", "Bench"]

    def test_object_is_other(self):
        result = strict_parse('{"equipment": ["Bench"]}')
        assert result.kind == StrictParseKind.OTHER
        assert result.value == {"equipment": ["Bench"]}

    def test_number_is_other(self):
        result = strict_parse("5")
        assert result.kind == StrictParseKind.OTHER
        assert result.value == 5

    def test_plain_text_is_failed(self):
        result = strict_parse("Treadmill\nBench")
        assert result.kind == StrictParseKind.FAILED
        assert result.error

    def test_code_fenced_array_is_sequence(self):
        """A JSON array wrapped in a markdown code fence should decode."""
        result = strict_parse('```json\n["Treadmill"]\n```')
        assert result.kind == StrictParseKind.SEQUENCE
        assert result.items == ["Treadmill"]

    def test_deeply_nested_input_does_not_raise(self):
        result = strict_parse("[" * 100000)
        assert result.kind == StrictParseKind.FAILED


class TestParseEquipment:
    """Tests for parse_equipment."""

    def test_bulleted_list(self):
        """Bulleted text falls back to line extraction."""
        text = "- Treadmill\n- Dumbbells\n* Kettlebell"
        assert parse_equipment(text) == ["treadmill", "dumbbells", "kettlebell"]

    def test_json_array_returned_as_is(self):
        """A JSON array is returned without canonicalization."""
        assert parse_equipment('["Treadmill", " Bench "]') == ["Treadmill", " Bench "]

    def test_non_array_json_falls_back(self):
        """Valid JSON that is not an array goes through line extraction."""
        assert parse_equipment("42") == ["42"]
        assert parse_equipment('"Treadmill"') == ['"treadmill"']

    def test_empty_response(self):
        """An empty answer means no equipment."""
        assert parse_equipment("") == []

    def test_empty_json_array(self):
        assert parse_equipment("[]") == []

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "null",
            "{",
            "[1, 2",
            "```",
            "\x00\x01",
            "• • •",
            "{\"a\": [}",
            "[" * 5000,
            "true",
        ],
    )
    def test_never_raises(self, text):
        """parse_equipment is total and always returns a list."""
        assert isinstance(parse_equipment(text), list)


class TestCanonicalize:
    def test_trims_and_lowercases(self):
        assert canonicalize_equipment("  Leg Press ") == "leg press"


class TestAggregateEquipment:
    """Tests for aggregate_equipment."""

    def test_case_insensitive_dedup_across_photos(self):
        """The same equipment in several photos is kept once."""
        detected = aggregate_equipment(["Treadmill", "treadmill\ndumbbell"])
        assert set(detected) == {"treadmill", "dumbbell"}
        assert len(detected) == 2

    def test_preserves_first_seen_order(self):
        detected = aggregate_equipment(["Bench\nBarbell", "Rack\nbench"])
        assert detected == ["bench", "barbell", "rack"]

    def test_canonicalizes_json_items(self):
        """Strictly parsed items are trimmed and lower-cased too."""
        assert aggregate_equipment(['[" Treadmill ", "BENCH"]']) == ["treadmill", "bench"]

    def test_skips_blank_items(self):
        assert aggregate_equipment(['["", "  ", "Bench"]', "-\n"]) == ["bench"]

    def test_skips_non_string_items(self):
        assert aggregate_equipment(['[1, null, {"a": 1}, "Bench"]']) == ["bench"]

    def test_no_responses(self):
        assert aggregate_equipment([]) == []

    def test_order_independent(self):
        """Any permutation of the photo answers gives the same set."""
        responses = ["Treadmill\nBench", '["bench", "Rower"]', "- Kettlebell\n- TREADMILL"]
        expected = {"treadmill", "bench", "rower", "kettlebell"}
        for permutation in itertools.permutations(responses):
            assert set(aggregate_equipment(permutation)) == expected


class TestMergeEquipment:
    """Tests for merge_equipment."""

    def test_union_keeps_existing(self):
        merged = merge_equipment(["bench", "rack"], ["treadmill", "bench"])
        assert merged == ["bench", "rack", "treadmill"]

    def test_never_removes(self):
        merged = merge_equipment(["bench", "rack"], [])
        assert merged == ["bench", "rack"]

    def test_empty_existing(self):
        assert merge_equipment([], ["bench"]) == ["bench"]
        assert merge_equipment(None, ["bench"]) == ["bench"]

    def test_idempotent(self):
        """Merging the same detection twice equals merging it once."""
        detected = aggregate_equipment(["Treadmill", "treadmill\ndumbbell"])
        once = merge_equipment(["bench"], detected)
        twice = merge_equipment(once, detected)
        assert twice == once
