from pathlib import Path
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root

ENV_FILE = os.getenv("ENV_FILE", str(BASE_DIR / ".env"))

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    APP_ENV: str = "local"
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'perfboard.db'}"
    CORS_ORIGINS: str = "*"  # Comma-separated list of allowed origins, or "*" for all

    # sql | memory | json
    STORAGE_BACKEND: str = "sql"
    JSON_STORE_PATH: str = str(BASE_DIR / "perfboard.json")
    SEED_DEMO_DATA: bool = False  # memory backend only
    STORAGE_TIMEOUT_SECONDS: int = 15

    # department | admin_sees_all
    VISIBILITY_POLICY: str = "department"
    AVATAR_URL_TEMPLATE: str = "https://i.pravatar.cc/150?u={email}"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list, handling '*' for development"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def avatar_url(self, email: str) -> str:
        return self.AVATAR_URL_TEMPLATE.format(email=email)

settings = Settings()
