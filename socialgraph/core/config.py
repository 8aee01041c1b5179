import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings.
    Read from environment variables (.env file)
    """
    APP_NAME: str = "Social Graph Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "False") == "True"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # "memory" or "database"
    STORE_BACKEND: str = "memory"

    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./socialgraph.db"
    )

    # Declining / unfriending through delete_friend_request also wipes the chat
    DELETE_MESSAGES_WITH_FRIENDSHIP: bool = True
    PURGE_CHAT_ON_UNFRIEND: bool = False

    MESSAGE_MAX_LENGTH: int = 1000
    NOTIFICATION_MAX_LENGTH: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
