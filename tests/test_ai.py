import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from smartvault import config
from smartvault.ai import (
    GeminiClient, expand_query, analyze_password, SEARCH_TERMS_SCHEMA
)

from conftest import FakeClient


def gemini_response(payload):
    """A requests.Response stand-in carrying `payload` as the candidate text."""
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        "candidates": [{"content": {"parts": [{"text": json.dumps(payload)}]}}]
    }
    return response


@pytest.fixture
def client():
    return GeminiClient(api_key="test-key", url="https://example.invalid/generate", timeout=5)


def test_call_posts_prompt_and_schema(client):
    with patch("smartvault.ai.requests.post", return_value=gemini_response({"search_terms": ["Google"]})) as post:
        result = client.call("find google", SEARCH_TERMS_SCHEMA)

    assert result == {"search_terms": ["Google"]}
    args, kwargs = post.call_args
    assert args[0] == "https://example.invalid/generate"
    assert kwargs["params"] == {"key": "test-key"}
    assert kwargs["timeout"] == 5
    body = kwargs["json"]
    assert body["contents"][0]["parts"][0]["text"] == "find google"
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["generationConfig"]["responseSchema"] == SEARCH_TERMS_SCHEMA


def test_call_returns_none_on_connection_error(client):
    with patch("smartvault.ai.requests.post", side_effect=requests.ConnectionError("down")):
        assert client.call("p", {}) is None


def test_call_returns_none_on_http_error(client):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    with patch("smartvault.ai.requests.post", return_value=response):
        assert client.call("p", {}) is None


def test_call_returns_none_on_non_json_body(client):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.side_effect = ValueError("not json")
    with patch("smartvault.ai.requests.post", return_value=response):
        assert client.call("p", {}) is None


def test_call_returns_none_without_candidates(client):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"candidates": []}
    with patch("smartvault.ai.requests.post", return_value=response):
        assert client.call("p", {}) is None


def test_call_returns_none_on_bad_candidate_text(client):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": "{not json"}]}}]}
    with patch("smartvault.ai.requests.post", return_value=response):
        assert client.call("p", {}) is None


def test_call_rejects_non_object_json(client):
    with patch("smartvault.ai.requests.post", return_value=gemini_response(["Google"])):
        assert client.call("p", {}) is None


def test_expand_query_joins_terms():
    fake = FakeClient({"search_terms": ["Facebook", "Instagram"]})
    expansion = expand_query("social media", fake)

    assert expansion.term == "Facebook Instagram"
    assert expansion.sites == ["Facebook", "Instagram"]
    assert expansion.changed
    assert expansion.message == config.MSG_SEARCH_FOUND.format(sites="Facebook, Instagram")
    assert '"social media"' in fake.calls[0][0]


def test_expand_query_empty_term_skips_adapter():
    fake = FakeClient({"search_terms": ["X"]})
    expansion = expand_query("", fake)
    assert expansion.term == ""
    assert expansion.message == config.MSG_SEARCH_EMPTY
    assert fake.calls == []


@pytest.mark.parametrize("result", [
    None,
    {},
    {"search_terms": []},
    {"search_terms": "Google"},
    {"search_terms": [1, 2]},
])
def test_expand_query_failure_leaves_term(result):
    expansion = expand_query("my bank", FakeClient(result))
    assert expansion.term == "my bank"
    assert expansion.message == config.MSG_SEARCH_NONE
    assert not expansion.changed


def test_analyze_password_success():
    fake = FakeClient({"score": 42, "suggestions": ["Longer.", "Symbols.", "No words."]})
    analysis = analyze_password("hunter2", fake)
    assert analysis.score == 42
    assert analysis.suggestions == ["Longer.", "Symbols.", "No words."]
    assert analysis.message == "Password Strength: 42/100. Suggestions: Longer. Symbols. No words."


def test_analyze_password_clamps_score():
    analysis = analyze_password("x", FakeClient({"score": 250, "suggestions": []}))
    assert analysis.score == 100


@pytest.mark.parametrize("result", [
    None,
    {"score": 0, "suggestions": []},
    {"score": "high", "suggestions": []},
    {"score": 50},
    {"score": 50, "suggestions": "use more"},
])
def test_analyze_password_failure(result):
    analysis = analyze_password("x", FakeClient(result))
    assert analysis.score is None
    assert analysis.message == config.MSG_ANALYZE_FAILED
