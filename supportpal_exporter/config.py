"""
SupportPal Exporter - Configuration Management
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # SupportPal API
    api_base_path: str
    api_token: str
    request_timeout: float = 30.0
    page_size: int = 2000

    # Exporter HTTP server
    exporter_host: str = "0.0.0.0"
    exporter_port: int = 20000

    # Synchronization
    sync_interval_seconds: float = 60.0
    retry_base_delay_seconds: float = 5.0
    retry_max_delay_seconds: float = 300.0
    max_ticket_age_days: int = 365
    missing_organization_label: str = ""

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @property
    def API_BASE_URL(self) -> str:
        """Base path without trailing slash"""
        return self.api_base_path.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
