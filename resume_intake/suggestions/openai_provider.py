import json
from collections.abc import Sequence
from typing import Any, ClassVar

import httpx
import openai

from resume_intake.extraction.models import (
    ContentSuggestion,
    ExtractedSection,
    MissingContentAlert,
    SectionType,
)
from resume_intake.logging.logger import Log
from resume_intake.suggestions.base import BaseSuggestionProvider
from resume_intake.suggestions.exceptions import SuggestionError, SuggestionNetworkError

_MAX_PROMPT_CHARS = 12000
_MAX_SUGGESTIONS = 10

SYSTEM_PROMPT = (
    "You are an expert resume reviewer. Suggest specific, actionable improvements "
    "that raise the resume's ATS compatibility and impact. Respond with JSON only."
)


class OpenAISuggestionProvider(BaseSuggestionProvider):
    """Suggestion provider built on an OpenAI-compatible chat API."""

    TYPES: ClassVar[list[str]] = ["format", "content", "structure", "keyword"]
    PRIORITIES: ClassVar[list[str]] = ["low", "medium", "high", "critical"]

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        temperature: float = 0.2,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))

    def suggest(
        self,
        text: str,
        sections: Sequence[ExtractedSection],
        missing: Sequence[MissingContentAlert],
    ) -> list[ContentSuggestion]:
        prompt = self._build_prompt(text, sections, missing)
        Log.debug(f"Suggestion prompt:\n{prompt}")
        raw = self._call_ai(prompt)
        suggestions = self._parse(raw)
        Log.info(f"AI suggestions received: {len(suggestions)}")
        return suggestions

    def json_schema(self) -> dict[str, object]:
        item = {
            "type": "object",
            "additionalProperties": False,
            "required": [
                "type", "priority", "title", "description", "section", "impact", "autoApplicable",
            ],
            "properties": {
                "type": {"type": "string", "enum": self.TYPES},
                "priority": {"type": "string", "enum": self.PRIORITIES},
                "title": {"type": "string"},
                "description": {"type": "string"},
                "section": {"type": "string", "enum": [s.value for s in SectionType]},
                "impact": {"type": "number"},
                "autoApplicable": {"type": "boolean"},
            },
        }
        return {
            "type": "object",
            "additionalProperties": False,
            "required": ["suggestions"],
            "properties": {"suggestions": {"type": "array", "items": item}},
        }

    @staticmethod
    def _build_prompt(
        text: str,
        sections: Sequence[ExtractedSection],
        missing: Sequence[MissingContentAlert],
    ) -> str:
        found = ", ".join(s.type.value for s in sections) or "none"
        absent = ", ".join(a.section.value for a in missing) or "none"
        return (
            f"Detected sections: {found}\n"
            f"Missing sections: {absent}\n"
            f"Provide up to {_MAX_SUGGESTIONS} suggestions.\n\n"
            f"Resume text:\n{text[:_MAX_PROMPT_CHARS]}"
        )

    def _call_ai(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "resume_suggestions",
                        "strict": True,
                        "schema": self.json_schema(),
                    },
                },
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SuggestionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise SuggestionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise SuggestionError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise SuggestionError("AI returned empty response")
        return content

    def _parse(self, raw: str) -> list[ContentSuggestion]:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SuggestionError(f"Invalid JSON response: {exc}") from exc
        if not isinstance(parsed, dict) or not isinstance(parsed.get("suggestions"), list):
            raise SuggestionError("JSON response must be an object with a 'suggestions' list")
        return [
            self._build(item, index)
            for index, item in enumerate(parsed["suggestions"][:_MAX_SUGGESTIONS])
        ]

    def _build(self, item: Any, index: int) -> ContentSuggestion:
        if not isinstance(item, dict):
            raise SuggestionError(f"Suggestion at index {index} must be an object")
        if item.get("type") not in self.TYPES:
            raise SuggestionError(f"Suggestion at index {index}: invalid 'type'")
        if item.get("priority") not in self.PRIORITIES:
            raise SuggestionError(f"Suggestion at index {index}: invalid 'priority'")
        try:
            section = SectionType(item.get("section"))
        except ValueError as exc:
            raise SuggestionError(f"Suggestion at index {index}: invalid 'section'") from exc
        title = item.get("title")
        if not title or not isinstance(title, str):
            raise SuggestionError(f"Suggestion at index {index}: 'title' must be a non-empty string")
        impact = item.get("impact", 0)
        if not isinstance(impact, (int, float)):
            raise SuggestionError(f"Suggestion at index {index}: 'impact' must be a number")
        return ContentSuggestion(
            id=f"ai-{index + 1}",
            type=item["type"],
            priority=item["priority"],
            title=title,
            description=str(item.get("description", "")),
            section=section,
            impact=float(impact),
            auto_applicable=bool(item.get("autoApplicable", False)),
        )
