from pydantic_settings import BaseSettings, NoDecode
from pydantic import field_validator
from typing import List, Union
from typing_extensions import Annotated
import json

class Settings(BaseSettings):
    PROJECT_NAME: str = "Aqua Alert API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Durable local state (the browser "localStorage" equivalent).
    # One key/value table; only the signed-in user lives here.
    STORAGE_URL: str = "sqlite:///./aqua_alert.db"
    AUTH_STORAGE_KEY: str = "aqua-alert-user"

    # CORS Configuration
    # BACKEND_CORS_ORIGINS=https://portal.example.org (single URL)
    # OR: BACKEND_CORS_ORIGINS=https://url1.com,https://url2.com (comma-separated)
    # OR: BACKEND_CORS_ORIGINS=["https://portal.example.org"] (JSON array)
    # NoDecode prevents pydantic-settings from JSON-parsing before our validator runs
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS origins from various formats: JSON array, comma-separated, or single URL."""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            if v.startswith("["):
                try:
                    parsed = json.loads(v)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            if "," in v:
                return [url.strip() for url in v.split(",") if url.strip()]
            if v.strip():
                return [v.strip()]
        return []

    @property
    def is_production(self) -> bool:
        return not self.STORAGE_URL.startswith("sqlite")

    # Notifications
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0   # Toast display duration

    # IoT dashboard
    SENSOR_REFRESH_SECONDS: int = 5             # Auto-refresh interval per open view

    # Hazard report form (simulated, no real transport)
    REPORT_SUBMISSION_DELAY_SECONDS: float = 2.0
    TRANSCRIPTION_DELAY_SECONDS: float = 3.0
    SUBMISSION_FAILURE_RATE: float = 0.0        # Probability in [0, 1]
    MAX_ATTACHMENTS: int = 10
    MAX_ATTACHMENT_BYTES: int = 10 * 1024 * 1024

    class Config:
        case_sensitive = True
        env_file = ".env"

settings = Settings()
