import pytest
from unittest.mock import MagicMock, patch

import httpx
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from DayLog.formatters import (
    AuthenticationError,
    ContentError,
    GeminiFormatter,
    RemoteServerError,
    TransientError,
)
from DayLog.formatters.gemini import build_prompt

TABLE = "| Time | Activity | Notes |\n|---|---|---|\n| 7:30 AM | Woke up | - |"


def _response(*texts):
    return genai_types.GenerateContentResponse(
        candidates=[
            genai_types.Candidate(
                content=genai_types.Content(
                    role="model",
                    parts=[genai_types.Part(text=t) for t in texts],
                )
            )
        ]
    )


def _api_error(code, status="UNAVAILABLE"):
    payload = {"error": {"code": code, "message": f"status {code}", "status": status}}
    cls = genai_errors.ServerError if code >= 500 else genai_errors.ClientError
    return cls(code, payload)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def formatter(remote_settings, client, sleeps):
    return GeminiFormatter(remote_settings, client=client, sleep=sleeps.append)


def test_returns_joined_text(formatter, client):
    client.models.generate_content.return_value = _response("  | Time |", " Activity |  ")
    assert formatter.format("Woke up 7:30") == "| Time | Activity |"


def test_request_carries_prompt_and_generation_config(formatter, client, remote_settings):
    client.models.generate_content.return_value = _response(TABLE)
    formatter.format("Woke up 7:30")

    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == remote_settings.model_name
    assert kwargs["contents"].endswith("Woke up 7:30")
    assert "Output ONLY a Markdown table" in kwargs["contents"]
    config = kwargs["config"]
    assert config.temperature == 0.2
    assert config.max_output_tokens == 1024
    assert len(config.safety_settings) == 4
    assert all(s.threshold == genai_types.HarmBlockThreshold.BLOCK_NONE for s in config.safety_settings)


def test_missing_api_key_is_an_auth_error(settings, client):
    formatter = GeminiFormatter(settings, client=client)
    with pytest.raises(AuthenticationError):
        formatter.format("Woke up 7:30")
    client.models.generate_content.assert_not_called()


@pytest.mark.parametrize("code", [429, 503])
def test_transient_errors_are_retried_with_backoff(formatter, client, sleeps, code):
    client.models.generate_content.side_effect = [_api_error(code), _api_error(code), _response(TABLE)]
    assert formatter.format("log") == TABLE
    assert client.models.generate_content.call_count == 3
    assert sleeps == [0.5, 1.0]


def test_transient_error_surfaces_after_three_attempts(formatter, client, sleeps):
    client.models.generate_content.side_effect = _api_error(503)
    with pytest.raises(TransientError) as exc_info:
        formatter.format("log")
    assert exc_info.value.status == 503
    assert client.models.generate_content.call_count == 3
    assert sleeps == [0.5, 1.0]


def test_other_http_errors_are_not_retried(formatter, client, sleeps):
    client.models.generate_content.side_effect = _api_error(400, status="INVALID_ARGUMENT")
    with pytest.raises(RemoteServerError) as exc_info:
        formatter.format("log")
    assert not isinstance(exc_info.value, TransientError)
    assert exc_info.value.status == 400
    assert str(exc_info.value).startswith("HTTP 400: ")
    assert client.models.generate_content.call_count == 1
    assert sleeps == []


def test_timeout_is_a_server_error(formatter, client):
    client.models.generate_content.side_effect = httpx.ReadTimeout("stuck")
    with pytest.raises(RemoteServerError) as exc_info:
        formatter.format("log")
    assert exc_info.value.status is None


def test_blocked_prompt_is_a_content_error(formatter, client):
    client.models.generate_content.return_value = genai_types.GenerateContentResponse(
        prompt_feedback=genai_types.GenerateContentResponsePromptFeedback(
            block_reason=genai_types.BlockedReason.SAFETY,
        )
    )
    with pytest.raises(ContentError, match="Blocked: SAFETY"):
        formatter.format("log")


def test_no_candidates_is_a_content_error(formatter, client):
    client.models.generate_content.return_value = genai_types.GenerateContentResponse(candidates=[])
    with pytest.raises(ContentError, match="No content returned"):
        formatter.format("log")


def test_blank_text_is_a_content_error(formatter, client):
    client.models.generate_content.return_value = _response("  ", "\n")
    with pytest.raises(ContentError, match="Empty text result"):
        formatter.format("log")


def test_client_is_built_lazily_with_timeout(remote_settings):
    with patch("DayLog.formatters.gemini.genai.Client") as mock_client_cls:
        formatter = GeminiFormatter(remote_settings)
        formatter.client
        _, kwargs = mock_client_cls.call_args
        assert kwargs["api_key"] == "test-key"
        assert kwargs["http_options"].timeout == 30_000


def test_build_prompt_keeps_braces_in_log():
    assert build_prompt("{weird} log").endswith("{weird} log")


@pytest.mark.parametrize("exc", [
    httpx.ConnectError("no route"),
    httpx.RemoteProtocolError("connection reset"),
])
def test_transport_errors_are_server_errors(formatter, client, sleeps, exc):
    client.models.generate_content.side_effect = exc
    with pytest.raises(RemoteServerError) as exc_info:
        formatter.format("log")
    assert exc_info.value.status is None
    assert str(exc) in str(exc_info.value)
    assert exc_info.value.__cause__ is exc
    assert client.models.generate_content.call_count == 1
    assert sleeps == []
