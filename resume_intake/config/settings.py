from pydantic_settings import BaseSettings, SettingsConfigDict

MEGABYTE = 1024 * 1024


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_file_size_bytes: int = 10 * MEGABYTE
    enable_multiple_files: bool = True

    pdf_engine: str = "pdfplumber"

    upload_chunk_size_bytes: int = 256 * 1024
    upload_stage_duration_ms: int = 2000
    processing_stage_duration_ms: int = 3000
    analyzing_stage_duration_ms: int = 2000
    stage_timeout_seconds: float = 30.0
    stage_tick_interval_seconds: float = 0.0

    preview_enabled: bool = True
    preview_max_chars: int = 500

    suggestions_provider: str = "rules"
    suggestions_openai_api_key: str = ""
    suggestions_openai_model_name: str = "gpt-4o-mini"
    suggestions_openai_base_url: str | None = None
    suggestions_openai_timeout_seconds: int = 30
    suggestions_openai_temperature: float = 0.2
