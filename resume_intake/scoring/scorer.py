"""Deterministic quality scoring of extracted resume content.

Every category is a pure function of the ExtractedContent fields, so the same
document always scores the same and scores move predictably when content
changes. Only the analysis timestamp comes from the injected clock.
"""

import hashlib
import json
from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime, timezone

from resume_intake.extraction import patterns
from resume_intake.extraction.models import ContentSuggestion, ExtractedContent, SectionType
from resume_intake.extraction.sections import split_skill_items
from resume_intake.logging.logger import Log
from resume_intake.scoring.base import BaseScorer
from resume_intake.scoring.models import (
    CATEGORIES,
    CategoryScores,
    Effort,
    EnhancedAnalysisResult,
    ImpactMetrics,
    Suggestion,
)
from resume_intake.scoring.policy import ScoringPolicy

_SUGGESTION_TYPES = {
    "format": "format-improvement",
    "content": "content-enhancement",
    "structure": "structure-reorganization",
    "keyword": "keyword-optimization",
}
_SUGGESTION_CATEGORIES = {
    "format": "format",
    "content": "content",
    "structure": "ats",
    "keyword": "keywords",
}
_EFFORT_BY_PRIORITY = {
    "critical": Effort(30, "hard"),
    "high": Effort(15, "medium"),
    "medium": Effort(10, "medium"),
    "low": Effort(5, "easy", requires_manual_review=False),
}
_PRIORITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def content_fingerprint(content: ExtractedContent) -> str:
    """Stable sha256 of the content, used as the analysis id."""
    payload = json.dumps(asdict(content), sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class QualityScorer(BaseScorer):
    def __init__(
        self,
        policy: ScoringPolicy | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._policy = policy or ScoringPolicy()
        self._clock = clock

    def score(self, content: ExtractedContent) -> EnhancedAnalysisResult:
        raw_scores = {
            "ats": self._ats(content),
            "keywords": self._keywords(content),
            "format": self._format(content),
            "content": self._content(content),
            "impact": self._impact(content),
            "readability": self._readability(content),
        }
        for alert in content.missing_content:
            related = self._policy.missing_section_categories.get(alert.section, ("content",))
            if "content" not in related:
                related = ("content", *related)
            for category in related:
                raw_scores[category] -= alert.impact

        categories = CategoryScores(
            **{name: round(_clamp(raw_scores[name]), 1) for name in CATEGORIES}
        )
        overall = self._overall(categories)
        result = EnhancedAnalysisResult(
            id=f"analysis-{content_fingerprint(content)[:16]}",
            overall_score=overall,
            category_scores=categories,
            suggestions=self._suggestions(content),
            analysis_timestamp=self._clock(),
        )
        Log.info(
            f"Scored {content.metadata.file_name}: {overall}",
            analysis_id=result.id,
        )
        return result

    def _overall(self, categories: CategoryScores) -> float:
        weights = self._policy.weights
        total_weight = sum(weights.get(name, 0.0) for name in CATEGORIES)
        if total_weight <= 0:
            return 0.0
        weighted = sum(getattr(categories, name) * weights.get(name, 0.0) for name in CATEGORIES)
        return round(_clamp(weighted / total_weight), 1)

    def _ats(self, content: ExtractedContent) -> float:
        ats = content.ats_compatibility
        points = sum(self._policy.ats_issue_points.get(i.severity, 0.0) for i in ats.issues)
        return ats.score * 100 - points

    def _keywords(self, content: ExtractedContent) -> float:
        skills = content.section(SectionType.SKILLS)
        skill_items = len(split_skill_items(skills.content)) if skills else 0
        verbs = patterns.count_action_verbs(content.text)
        skill_share = min(1.0, skill_items / self._policy.target_skill_items)
        verb_share = min(1.0, verbs / self._policy.target_action_verbs)
        return skill_share * 60 + verb_share * 40

    @staticmethod
    def _format(content: ExtractedContent) -> float:
        flags = asdict(content.ats_compatibility.format_compliance)
        return sum(1 for passed in flags.values() if passed) / len(flags) * 100

    def _content(self, content: ExtractedContent) -> float:
        if not content.sections:
            return 0.0
        factor = self._policy.incomplete_section_factor
        per_section = [
            section.confidence * (1.0 if section.is_complete else factor)
            for section in content.sections
        ]
        return sum(per_section) / len(per_section) * 100

    def _impact(self, content: ExtractedContent) -> float:
        metric_lines = sum(
            1 for line in content.text.splitlines() if patterns.METRIC_RE.search(line)
        )
        verbs = patterns.count_action_verbs(content.text)
        metric_share = min(1.0, metric_lines / self._policy.target_metric_lines)
        verb_share = min(1.0, verbs / self._policy.target_action_verbs)
        return metric_share * 70 + verb_share * 30

    def _readability(self, content: ExtractedContent) -> float:
        average = patterns.average_sentence_length(content.text)
        if average == 0:
            return 0.0
        low, high = self._policy.ideal_sentence_words
        distance = max(low - average, average - high, 0.0)
        score = 100 - distance * self._policy.sentence_length_penalty

        word_list = patterns.words(content.text)
        if word_list:
            jargon = sum(1 for word in word_list if word.lower() in patterns.JARGON_WORDS)
            score -= jargon / len(word_list) * self._policy.jargon_penalty
        return score

    def _suggestions(self, content: ExtractedContent) -> list[Suggestion]:
        suggestions = [self._from_content_suggestion(s) for s in content.suggestions]
        for index, issue in enumerate(content.ats_compatibility.issues, start=1):
            increase = round(self._policy.ats_issue_points.get(issue.severity, 0.0), 1)
            suggestions.append(
                Suggestion(
                    id=f"ats-{index}",
                    type="ats-compatibility",
                    priority=issue.severity.value,
                    category="ats",
                    title=issue.fix,
                    description=f"{issue.description} ({issue.location})",
                    impact=ImpactMetrics(score_increase=increase, ats_compatibility=increase),
                    effort=_EFFORT_BY_PRIORITY[issue.severity.value],
                )
            )
        return sorted(
            suggestions,
            key=lambda s: (_PRIORITY_RANK.get(s.priority, 4), -s.impact.score_increase, s.id),
        )

    @staticmethod
    def _from_content_suggestion(suggestion: ContentSuggestion) -> Suggestion:
        category = _SUGGESTION_CATEGORIES.get(suggestion.type, "content")
        increase = float(suggestion.impact)
        return Suggestion(
            id=suggestion.id,
            type=_SUGGESTION_TYPES.get(suggestion.type, "content-enhancement"),
            priority=suggestion.priority,
            category=category,
            title=suggestion.title,
            description=suggestion.description,
            impact=ImpactMetrics(
                score_increase=increase,
                ats_compatibility=increase if category == "ats" else increase / 2,
                readability_improvement=increase if suggestion.type == "format" else 0.0,
                keyword_density=increase if category == "keywords" else 0.0,
            ),
            effort=_EFFORT_BY_PRIORITY.get(suggestion.priority, _EFFORT_BY_PRIORITY["medium"]),
            can_auto_apply=suggestion.auto_applicable,
        )
