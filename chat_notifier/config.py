from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the chat message notifier"""

    # Application settings
    service_name: str = "chat-notifier"
    log_level: str = "INFO"
    environment: str = "dev"

    # Firebase settings
    # Service account JSON; the Functions runtime uses default credentials when unset
    firebase_secret: Optional[str] = None
    users_collection: str = "users"

    # Notification settings
    away_threshold_seconds: int = 300  # recipient counts as away after 5 minutes
    default_notification_title: str = "New message"
    notification_body: str = "You have a new message"
    click_action: str = "FLUTTER_NOTIFICATION_CLICK"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# Create settings instance
settings = Settings()
