"""
Unit tests for travelflow/api/llm.py

The Gemini REST call is faked by handing GeminiClient a mocked
requests.Session.
"""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from travelflow.api import errors
from travelflow.api.llm import GeminiClient, generate_trip_itinerary, revise_itinerary
from travelflow.api.models import TripRequest


def _response(status, payload=None):
    resp = MagicMock()
    resp.status_code = status
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


def _candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(session, **kwargs):
    return GeminiClient(
        api_key="test-key",
        model="gemini-1.5-flash",
        generation_config={"temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 8192},
        timeout=5,
        session=session,
        **kwargs,
    )


class TestGenerateText:

    def test_posts_wire_contract(self):
        session = MagicMock()
        session.post.return_value = _response(200, _candidate("hello"))

        assert _client(session).generate_text("prompt text") == "hello"

        args, kwargs = session.post.call_args
        assert args[0] == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
        )
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["json"]["contents"] == [{"parts": [{"text": "prompt text"}]}]
        assert kwargs["json"]["generationConfig"]["topK"] == 40
        assert kwargs["timeout"] == 5

    def test_overrides_generation_config_per_call(self):
        session = MagicMock()
        session.post.return_value = _response(200, _candidate("ok"))

        _client(session).generate_text("p", maxOutputTokens=4096)

        config = session.post.call_args.kwargs["json"]["generationConfig"]
        assert config["maxOutputTokens"] == 4096
        assert config["temperature"] == 0.7

    def test_missing_key_raises_without_calling(self):
        session = MagicMock()
        client = GeminiClient(api_key="  ", session=session)
        with pytest.raises(errors.MissingCredentialError):
            client.generate_text("p")
        session.post.assert_not_called()

    @pytest.mark.parametrize("status, expected, http_status", [
        (401, errors.InvalidCredentialError, 401),
        (403, errors.ForbiddenCredentialError, 403),
        (429, errors.RateLimitError, 429),
        (400, errors.BadRequestError, 400),
        (404, errors.BadRequestError, 400),
        (500, errors.UpstreamServiceError, 502),
        (503, errors.UpstreamServiceError, 502),
    ])
    def test_status_classification(self, status, expected, http_status):
        session = MagicMock()
        session.post.return_value = _response(status, {"error": {"message": "nope"}})

        with pytest.raises(expected) as exc_info:
            _client(session).generate_text("p")

        assert exc_info.value.status_code == status
        assert exc_info.value.http_status == http_status
        assert "nope" in str(exc_info.value)
        assert exc_info.value.user_message

    def test_credential_errors_have_distinct_messages(self):
        assert errors.InvalidCredentialError.user_message != errors.ForbiddenCredentialError.user_message

    def test_error_body_that_is_not_json(self):
        session = MagicMock()
        session.post.return_value = _response(500, ValueError("no json"))
        with pytest.raises(errors.UpstreamServiceError):
            _client(session).generate_text("p")

    @pytest.mark.parametrize("exc", [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
    ])
    def test_network_failure_is_connectivity_error(self, exc):
        session = MagicMock()
        session.post.side_effect = exc
        with pytest.raises(errors.ConnectivityError) as exc_info:
            _client(session).generate_text("p")
        assert exc_info.value.status_code is None

    def test_no_retry_on_failure(self):
        session = MagicMock()
        session.post.return_value = _response(429)
        with pytest.raises(errors.RateLimitError):
            _client(session).generate_text("p")
        assert session.post.call_count == 1

    def test_missing_candidates_is_reply_format_error(self):
        session = MagicMock()
        session.post.return_value = _response(200, {"candidates": []})
        with pytest.raises(errors.ReplyFormatError):
            _client(session).generate_text("p")


class TestFromEnv:

    def test_reads_key_and_model(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
        client = GeminiClient.from_env()
        assert client.api_key == "env-key"
        assert client.endpoint.endswith("/models/gemini-test:generateContent")
        assert client.generation_config["maxOutputTokens"] == 8192

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert GeminiClient.from_env(api_key="explicit").api_key == "explicit"


class TestModuleFunctions:

    def test_generate_trip_itinerary_decodes_reply(self, fake_client, trip_form, raw_days):
        fake_client.generate_text.return_value = "```json\n" + json.dumps(raw_days) + "\n```"

        result = generate_trip_itinerary(TripRequest.from_dict(trip_form), client=fake_client)

        assert result.status == "ok"
        assert result.days == raw_days
        prompt = fake_client.generate_text.call_args.args[0]
        assert "경복궁" in prompt

    def test_generate_trip_itinerary_falls_back_on_prose(self, fake_client, trip_form):
        fake_client.generate_text.return_value = "죄송합니다."
        result = generate_trip_itinerary(TripRequest.from_dict(trip_form), client=fake_client)
        assert result.is_fallback
        assert result.days[0]["activities"][0]["location"] == "서울"

    def test_revise_uses_revision_token_budget(self, fake_client, itinerary, raw_days):
        fake_client.generate_text.return_value = (
            "RESPONSE_START\n수정 완료\nJSON_START\n" + json.dumps(raw_days) + "\nJSON_END\nRESPONSE_END"
        )
        with patch("travelflow.api.llm.get_gemini_config",
                   return_value={"revision_max_output_tokens": 4096}):
            revision = revise_itinerary(itinerary, "변경", client=fake_client)

        assert revision.summary == "수정 완료"
        assert fake_client.generate_text.call_args.kwargs == {"maxOutputTokens": 4096}
