from pydantic_settings import BaseSettings, SettingsConfigDict


URL_SAFE_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Mijikaku URL Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database (usually supplied by the platform as DATABASE_URL)
    database_url: str = "sqlite:///./mijikaku.db"
    database_echo: bool = False

    # URL Shortener specific
    base_url: str = "http://127.0.0.1:8000"
    short_code_length: int = 6
    short_code_alphabet: str = URL_SAFE_ALPHABET
    max_retries: int = 5  # Insert attempts when a generated id already exists
    distinguish_not_found: bool = False  # True answers unknown ids with 404 instead of 500

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
