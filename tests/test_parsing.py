"""
Unit tests for travelflow/api/parsing.py
"""
import json

import pytest

from travelflow.api.errors import ReplyFormatError
from travelflow.api.parsing import (
    DEFAULT_REVISION_SUMMARY,
    decode_itinerary_reply,
    fallback_itinerary,
    parse_itinerary_reply,
    parse_revision_reply,
)


class TestDecodeItineraryReply:

    def test_fenced_block_wins_over_prose(self, raw_days):
        text = "여기 일정입니다 [참고]\n```json\n" + json.dumps(raw_days, ensure_ascii=False) + "\n```\n즐거운 여행 되세요!"
        result = decode_itinerary_reply(text, "서울")
        assert result.status == "ok"
        assert result.days == raw_days
        assert result.reason is None

    def test_bracket_span_with_surrounding_commentary(self, raw_days):
        text = "Sure! " + json.dumps(raw_days) + " Hope this helps."
        assert parse_itinerary_reply(text, "서울") == raw_days

    def test_bare_json(self, raw_days):
        assert parse_itinerary_reply(json.dumps(raw_days), "서울") == raw_days

    def test_reparsing_serialized_itinerary_is_idempotent(self, itinerary):
        serialized = json.dumps(itinerary.to_dicts(), ensure_ascii=False)
        assert parse_itinerary_reply(serialized) == itinerary.to_dicts()

    @pytest.mark.parametrize("text", [
        "",
        "I could not plan that trip, sorry.",
        '[{"title": "1일차", "day": 1, "activities": [',
        "```json\n{not json}\n```",
        "] backwards [",
    ])
    def test_malformed_input_falls_back(self, text):
        result = decode_itinerary_reply(text, "부산")
        assert result.is_fallback
        assert result.reason
        assert len(result.days) == 1
        assert result.days[0]["day"] == 1
        assert result.days[0]["activities"][0]["location"] == "부산"

    def test_non_array_json_falls_back(self):
        result = decode_itinerary_reply('```json\n{"title": "1일차"}\n```', "부산")
        assert result.is_fallback
        assert "dict" in result.reason

    @pytest.mark.parametrize("value", [None, 42, b"[]"])
    def test_non_string_input_never_raises(self, value):
        assert decode_itinerary_reply(value, "부산").is_fallback

    def test_fallback_shape(self):
        days = fallback_itinerary("제주")
        assert days[0]["title"] == "1일차"
        activity = days[0]["activities"][0]
        assert activity["activity"] == "여행 시작"
        assert activity["time"] == "09:00"
        assert activity["description"]


class TestParseRevisionReply:

    def _reply(self, summary, body):
        return f"RESPONSE_START\n{summary}\nJSON_START\n{body}\nJSON_END\nRESPONSE_END"

    def test_extracts_summary_and_days(self, raw_days):
        revision = parse_revision_reply(self._reply("카페를 추가했습니다.", json.dumps(raw_days)))
        assert revision.summary == "카페를 추가했습니다."
        assert revision.days == raw_days

    def test_blank_summary_gets_default(self, raw_days):
        revision = parse_revision_reply(self._reply("", json.dumps(raw_days)))
        assert revision.summary == DEFAULT_REVISION_SUMMARY

    def test_missing_response_envelope_raises(self, raw_days):
        with pytest.raises(ReplyFormatError):
            parse_revision_reply("JSON_START\n" + json.dumps(raw_days) + "\nJSON_END")

    def test_missing_json_envelope_raises(self):
        with pytest.raises(ReplyFormatError):
            parse_revision_reply("RESPONSE_START\n요약만 있습니다\nRESPONSE_END")

    def test_invalid_interior_json_raises(self):
        with pytest.raises(ReplyFormatError):
            parse_revision_reply(self._reply("요약", "[{broken"))

    def test_non_array_payload_raises(self):
        with pytest.raises(ReplyFormatError):
            parse_revision_reply(self._reply("요약", '{"day": 1}'))

    def test_plain_json_is_not_accepted(self, raw_days):
        with pytest.raises(ReplyFormatError):
            parse_revision_reply(json.dumps(raw_days))


class TestDecodeRejectsNonItineraryArrays:

    @pytest.mark.parametrize("text", ["[]", "[1, 2]", '["서울", "부산"]', '[{"title": "1일차", "activities": 5}]'])
    def test_array_without_days_falls_back(self, text):
        result = decode_itinerary_reply(text, "부산")
        assert result.is_fallback
        assert "no day objects" in result.reason
        assert result.days == fallback_itinerary("부산")

    def test_stray_elements_are_dropped(self, raw_days):
        result = decode_itinerary_reply(json.dumps([raw_days[0], 7, {"title": "x"}]), "서울")
        assert result.status == "ok"
        assert result.days == [raw_days[0]]
