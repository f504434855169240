from resume_intake.exceptions import TransientError


class SuggestionError(Exception):
    """Raised when a suggestion provider cannot produce suggestions."""


class SuggestionNetworkError(SuggestionError, TransientError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
