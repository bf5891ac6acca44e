"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Provides centralized configuration management with type safety and validation.

Features:
- Environment variable loading and validation
- Secure credential management for GitHub and the completion endpoint
- Defaults for the reporting window
"""

from datetime import date

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logger import LogManager


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Attributes:
        app_name (str): Name of the application
        dev (bool): Debug mode flag
        log_dir (str): Directory for log files
        log_level (int): Logging level (default: debug)
        github_token (SecretStr): GitHub API authentication token
        openai_api_key (SecretStr): OpenAI API key
        openai_base_url (str): Base URL of the chat completion endpoint
        openai_llm_model (str): Model used for the summary
        openai_encoding_name (str): Tokenizer used to measure prompts
        openai_timeout (float): Transport timeout for the completion request
        summary_language (str): Language the summary is written in
        default_since (str): Default start of the reporting window
        default_until (str): Default end of the reporting window
    """

    # Application settings
    app_name: str = Field(default="Perfyzer", description="Application name")
    dev: bool = Field(default=False, description="Debug mode")
    log_dir: str = Field(default="logs", description="Logging directory")
    log_level: int = Field(default=10, description="Logging level, default debug")

    # GitHub configuration
    github_token: SecretStr = Field(..., description="GitHub token")

    # OpenAI configuration
    openai_api_key: SecretStr = Field(..., description="OpenAI API key")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", description="Completion endpoint"
    )
    openai_llm_model: str = Field(
        default="gpt-4.1-mini-2025-04-14", description="OpenAI LLM model"
    )
    openai_encoding_name: str = Field(default="o200k_base", description="Encoding name")
    openai_timeout: float = Field(
        default=120.0, description="Completion request timeout in seconds"
    )

    # Summary configuration
    summary_language: str = Field(
        default="English", description="Language of the generated summary"
    )
    default_since: str = Field(
        default="2025-01-01", description="Default start date (YYYY-MM-DD)"
    )
    default_until: str = Field(
        default="2025-06-30", description="Default end date (YYYY-MM-DD)"
    )

    @field_validator("default_since", "default_until")
    def ensure_iso_date(cls, v: str) -> str:
        """
        Ensure window defaults are calendar dates.

        Args:
            v (str): Date string to validate

        Returns:
            str: The unchanged date string
        """
        date.fromisoformat(v)
        return v

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Create global settings instance
settings = Settings()

# Initialize logging configuration
logger = LogManager(
    app_name=settings.app_name.lower(),
    log_dir=settings.log_dir,
    development=settings.dev,
    level=settings.log_level,
).logger
