from abc import ABC, abstractmethod
from collections.abc import Sequence

from resume_intake.extraction.models import (
    ContentSuggestion,
    ExtractedSection,
    MissingContentAlert,
)
from resume_intake.logging.logger import Log
from resume_intake.suggestions.exceptions import SuggestionError


class BaseSuggestionProvider(ABC):
    """Contract for all content suggestion providers."""

    @abstractmethod
    def suggest(
        self,
        text: str,
        sections: Sequence[ExtractedSection],
        missing: Sequence[MissingContentAlert],
    ) -> list[ContentSuggestion]:
        """Produce improvement suggestions for one resume.

        Args:
            text: Cleaned full text of the document.
            sections: Sections found by the segmenter.
            missing: Alerts for required/recommended sections that are absent.

        Raises:
            SuggestionError: on any failure.
        """


class FallbackSuggestionProvider(BaseSuggestionProvider):
    """Uses the primary provider and falls back when it fails."""

    def __init__(self, primary: BaseSuggestionProvider, fallback: BaseSuggestionProvider) -> None:
        self._primary = primary
        self._fallback = fallback

    def suggest(
        self,
        text: str,
        sections: Sequence[ExtractedSection],
        missing: Sequence[MissingContentAlert],
    ) -> list[ContentSuggestion]:
        try:
            return self._primary.suggest(text, sections, missing)
        except SuggestionError as exc:
            Log.warning(f"Suggestion provider failed, using fallback: {exc}")
            return self._fallback.suggest(text, sections, missing)
