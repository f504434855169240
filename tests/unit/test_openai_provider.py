import json
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from resume_intake.extraction.models import SectionType
from resume_intake.suggestions.exceptions import SuggestionError, SuggestionNetworkError
from resume_intake.suggestions.openai_provider import OpenAISuggestionProvider

_PATCH_TARGET = "resume_intake.suggestions.openai_provider.openai.OpenAI"


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_item(**overrides: object) -> dict[str, object]:
    item: dict[str, object] = {
        "type": "content",
        "priority": "high",
        "title": "Quantify achievements",
        "description": "Add numbers to your experience bullets",
        "section": "experience",
        "impact": 7,
        "autoApplicable": False,
    }
    item.update(overrides)
    return item


def _make_provider(mock_client: MagicMock, **kwargs: object) -> OpenAISuggestionProvider:
    with patch(_PATCH_TARGET, return_value=mock_client):
        return OpenAISuggestionProvider(api_key="k", model="m", timeout_seconds=30, **kwargs)


class TestOpenAISuggestionProvider:
    def test_returns_parsed_suggestions(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            json.dumps({"suggestions": [_make_item(), _make_item(type="keyword", section="skills")]})
        )
        provider = _make_provider(mock_client)

        suggestions = provider.suggest("resume text", [], [])

        assert [s.id for s in suggestions] == ["ai-1", "ai-2"]
        assert suggestions[0].section == SectionType.EXPERIENCE
        assert suggestions[0].impact == 7.0
        assert suggestions[1].type == "keyword"

    def test_sends_strict_json_schema(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"suggestions": []}')
        provider = _make_provider(mock_client)

        provider.suggest("resume text", [], [])

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["strict"] is True
        assert "resume text" in kwargs["messages"][1]["content"]

    def test_clamps_temperature(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"suggestions": []}')
        provider = _make_provider(mock_client, temperature=3.0)

        provider.suggest("resume text", [], [])

        assert mock_client.chat.completions.create.call_args.kwargs["temperature"] == 1.0

    def test_caps_suggestion_count(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            json.dumps({"suggestions": [_make_item() for _ in range(15)]})
        )
        assert len(_make_provider(mock_client).suggest("text", [], [])) == 10

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(SuggestionError, match="empty response"):
            _make_provider(mock_client).suggest("text", [], [])

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        with pytest.raises(SuggestionError, match="no choices"):
            _make_provider(mock_client).suggest("text", [], [])

    def test_raises_error_for_invalid_json(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("not json")
        with pytest.raises(SuggestionError, match="Invalid JSON"):
            _make_provider(mock_client).suggest("text", [], [])

    def test_raises_error_for_invalid_section(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            json.dumps({"suggestions": [_make_item(section="hobbies")]})
        )
        with pytest.raises(SuggestionError, match="invalid 'section'"):
            _make_provider(mock_client).suggest("text", [], [])

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(SuggestionNetworkError, match="network error"):
            _make_provider(mock_client).suggest("text", [], [])

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.ReadTimeout("timed out")
        with pytest.raises(SuggestionNetworkError, match="network error"):
            _make_provider(mock_client).suggest("text", [], [])
