from abc import ABC, abstractmethod

from resume_intake.extraction.models import ExtractedContent
from resume_intake.scoring.models import EnhancedAnalysisResult


class BaseScorer(ABC):
    """Contract for all quality scorers."""

    @abstractmethod
    def score(self, content: ExtractedContent) -> EnhancedAnalysisResult:
        """Score extracted resume content.

        Args:
            content: Output of the content extraction pipeline.

        Returns:
            EnhancedAnalysisResult with every score within 0..100.
        """
