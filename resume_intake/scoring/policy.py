from dataclasses import dataclass, field

from resume_intake.extraction.models import SectionType, Severity


def _default_weights() -> dict[str, float]:
    return {
        "ats": 0.25,
        "keywords": 0.20,
        "format": 0.15,
        "content": 0.20,
        "impact": 0.10,
        "readability": 0.10,
    }


def _default_issue_points() -> dict[Severity, float]:
    return {
        Severity.LOW: 2.0,
        Severity.MEDIUM: 4.0,
        Severity.HIGH: 6.0,
        Severity.CRITICAL: 10.0,
    }


def _default_missing_categories() -> dict[SectionType, tuple[str, ...]]:
    return {
        SectionType.CONTACT: ("content", "ats"),
        SectionType.SUMMARY: ("content", "readability"),
        SectionType.EXPERIENCE: ("content", "impact"),
        SectionType.EDUCATION: ("content",),
        SectionType.SKILLS: ("content", "keywords"),
    }


@dataclass(frozen=True)
class ScoringPolicy:
    """Weights, penalties and targets used by QualityScorer."""

    weights: dict[str, float] = field(default_factory=_default_weights)
    ats_issue_points: dict[Severity, float] = field(default_factory=_default_issue_points)
    # Every missing section also counts against "content".
    missing_section_categories: dict[SectionType, tuple[str, ...]] = field(
        default_factory=_default_missing_categories
    )
    incomplete_section_factor: float = 0.6
    target_skill_items: int = 10
    target_action_verbs: int = 8
    target_metric_lines: int = 5
    ideal_sentence_words: tuple[int, int] = (10, 20)
    sentence_length_penalty: float = 4.0
    jargon_penalty: float = 200.0
