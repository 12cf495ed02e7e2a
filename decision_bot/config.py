from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Decision Bot"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    # Slack
    slack_bot_token: str = ""
    slack_user_token: str = ""  # Optional, bot token is used when empty
    slack_signing_secret: str = ""
    slack_workspace_url: str = "https://slack.com"

    # Notion (decision record store)
    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"

    # OpenAI (via gen_ai_hub proxy)
    # No API key needed - uses gen_ai_hub proxy
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.0

    # Timeouts (seconds)
    capability_timeout: int = 30
    store_timeout: int = 15

    # Acceptance thresholds (0-100)
    extraction_confidence_threshold: int = 50
    similarity_threshold: int = 70
    update_confidence_threshold: int = 70
    summary_confidence_threshold: int = 50

    # Pending deletion expiry, 0 keeps confirmations open until resolved
    pending_deletion_ttl_seconds: int = 0

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
