from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    database_url: str = "sqlite:///./lionscout.db"
    secret_key: str = "change-me"
    jwt_secret_key: Optional[str] = None
    admin_password: str = "admin"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Security
    access_token_expire_minutes: int = 60

    # Video view telemetry
    view_sample_interval_seconds: float = 5.0
    view_min_watch_delta_seconds: float = 2.0

    # Video view analytics
    recent_viewers_limit: int = 20
    most_watched_default_limit: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False

    def model_post_init(self, __context):
        if not self.jwt_secret_key:
            self.jwt_secret_key = self.secret_key


settings = Settings()
