from resume_intake.config.settings import Settings
from resume_intake.suggestions.base import BaseSuggestionProvider, FallbackSuggestionProvider
from resume_intake.suggestions.openai_provider import OpenAISuggestionProvider
from resume_intake.suggestions.rules import RuleBasedSuggestionProvider


class SuggestionProviderFactory:
    """Creates the configured suggestion provider."""

    @classmethod
    def create(cls, settings: Settings) -> BaseSuggestionProvider:
        provider = settings.suggestions_provider.lower()
        if provider == "rules":
            return RuleBasedSuggestionProvider()
        if provider == "openai":
            primary = OpenAISuggestionProvider(
                api_key=settings.suggestions_openai_api_key,
                model=settings.suggestions_openai_model_name,
                timeout_seconds=settings.suggestions_openai_timeout_seconds,
                base_url=settings.suggestions_openai_base_url or None,
                temperature=settings.suggestions_openai_temperature,
            )
            return FallbackSuggestionProvider(primary, RuleBasedSuggestionProvider())
        raise ValueError(
            f"Unknown suggestions provider '{provider}'. Choose from: ['rules', 'openai']"
        )
