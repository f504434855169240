"""Deterministic suggestion provider.

No network calls. It is the default provider and the fallback used when an
AI provider fails, so every upload gets suggestions.
"""

from collections.abc import Sequence

from resume_intake.extraction import patterns
from resume_intake.extraction.models import (
    ContentSuggestion,
    ExtractedSection,
    Importance,
    MissingContentAlert,
    SectionType,
)
from resume_intake.extraction.sections import DEFAULT_TITLES
from resume_intake.suggestions.base import BaseSuggestionProvider

_CORE_SECTIONS = frozenset({SectionType.CONTACT, SectionType.EXPERIENCE, SectionType.SKILLS})
_MIN_ACTION_VERBS = 5
_MAX_AVERAGE_SENTENCE_WORDS = 25
_MAX_JARGON_RATIO = 0.1


class RuleBasedSuggestionProvider(BaseSuggestionProvider):
    def suggest(
        self,
        text: str,
        sections: Sequence[ExtractedSection],
        missing: Sequence[MissingContentAlert],
    ) -> list[ContentSuggestion]:
        suggestions: list[ContentSuggestion] = []

        for alert in missing:
            required = alert.importance == Importance.REQUIRED
            suggestions.append(
                ContentSuggestion(
                    id=f"missing-{alert.section.value}",
                    type="structure",
                    priority="critical" if required else "medium",
                    title=f"Add a {DEFAULT_TITLES[alert.section]} section",
                    description=f"{alert.description}. Include: {', '.join(alert.examples)}",
                    section=alert.section,
                    impact=alert.impact,
                )
            )

        for section in sections:
            if section.is_complete or not section.suggestions:
                continue
            suggestions.append(
                ContentSuggestion(
                    id=f"{section.id}-incomplete",
                    type="content",
                    priority="high" if section.type in _CORE_SECTIONS else "medium",
                    title=f"Complete your {section.title}",
                    description=section.suggestions[0],
                    section=section.type,
                    impact=8,
                )
            )

        word_list = patterns.words(text)
        if word_list and patterns.count_action_verbs(text) < _MIN_ACTION_VERBS:
            suggestions.append(
                ContentSuggestion(
                    id="keyword-action-verbs",
                    type="keyword",
                    priority="medium",
                    title="Use stronger action verbs",
                    description="Start bullet points with verbs such as led, built or delivered",
                    section=SectionType.EXPERIENCE,
                    impact=6,
                )
            )

        jargon = sum(1 for word in word_list if word.lower() in patterns.JARGON_WORDS)
        if word_list and jargon > len(word_list) * _MAX_JARGON_RATIO:
            suggestions.append(
                ContentSuggestion(
                    id="keyword-jargon",
                    type="keyword",
                    priority="low",
                    title="Replace jargon with standard terms",
                    description="High jargon density may confuse ATS systems",
                    section=SectionType.SUMMARY,
                    impact=3,
                    auto_applicable=True,
                )
            )

        if patterns.average_sentence_length(text) > _MAX_AVERAGE_SENTENCE_WORDS:
            suggestions.append(
                ContentSuggestion(
                    id="format-sentence-length",
                    type="format",
                    priority="low",
                    title="Shorten long sentences",
                    description="Break down complex sentences into shorter, clearer statements",
                    section=SectionType.SUMMARY,
                    impact=4,
                )
            )

        return suggestions
