from dataclasses import dataclass, field
from datetime import datetime

CATEGORIES = ("ats", "keywords", "format", "content", "impact", "readability")


@dataclass(frozen=True)
class CategoryScores:
    """Per-category scores, each within 0..100."""

    ats: float = 0.0
    keywords: float = 0.0
    format: float = 0.0
    content: float = 0.0
    impact: float = 0.0
    readability: float = 0.0


@dataclass(frozen=True)
class ImpactMetrics:
    """Expected score movement if a suggestion is applied."""

    score_increase: float = 0.0
    ats_compatibility: float = 0.0
    readability_improvement: float = 0.0
    keyword_density: float = 0.0


@dataclass(frozen=True)
class Effort:
    time_minutes: int
    difficulty: str  # easy | medium | hard
    requires_manual_review: bool = True


@dataclass(frozen=True)
class Suggestion:
    id: str
    type: str
    priority: str
    category: str
    title: str
    description: str
    impact: ImpactMetrics
    effort: Effort
    is_applied: bool = False
    can_auto_apply: bool = False


@dataclass(frozen=True)
class EnhancedAnalysisResult:
    """Output of the scorer for one document."""

    id: str
    overall_score: float
    category_scores: CategoryScores
    analysis_timestamp: datetime
    suggestions: list[Suggestion] = field(default_factory=list)
    version: str = "2.0.0"
