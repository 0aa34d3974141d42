from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "CMS Meta Tags"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str

    # Site settings
    site_root: str = "http://localhost:8000/"
    admin_path_prefix: str = "/admin"

    # Meta tags plugin
    metatags_enabled: bool = True
    metatags_config_file: str = "data/metatags_config.json"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Redis (page cache invalidation)
    redis_url: str | None = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
