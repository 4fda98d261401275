"""
Application configuration using Pydantic Settings
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Notice Aggregator"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development", description="Environment: development, staging, production")
    DEBUG: bool = Field(default=True, description="Debug mode")

    @field_validator('DEBUG', 'NEWS_WARM_ON_STARTUP', 'SCRAPER_VERIFY_TLS', mode='before')
    @classmethod
    def validate_bool_flags(cls, v):
        """Allow boolean flags to be passed as strings"""
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on')
        return bool(v)

    # CORS
    ALLOWED_HOSTS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator('ALLOWED_HOSTS', mode='before')
    @classmethod
    def validate_allowed_hosts(cls, v):
        """Validate ALLOWED_HOSTS field to handle JSON string inputs"""
        if isinstance(v, str):
            try:
                import json
                return json.loads(v)
            except json.JSONDecodeError:
                # If not JSON, treat as comma-separated string
                return [host.strip() for host in v.split(',') if host.strip()]
        return v

    # News sources
    NEWS_CONFIG_PATH: str = Field(default="config.json", description="Path to JSON/YAML sources configuration file")
    NEWS_DEFAULT_DAYS: int = Field(default=3, ge=1, description="Day window used when the sources config is invalid")
    NEWS_CACHE_TTL_MINUTES: int = Field(default=30, ge=1, description="Cache TTL used when the sources config is invalid")
    NEWS_OUTPUT_PATH: Optional[str] = Field(default=None, description="Where to persist the last served result as JSON")
    NEWS_WARM_ON_STARTUP: bool = Field(default=True, description="Run one aggregation when the API starts")

    # Scraping
    SCRAPER_USER_AGENT: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
        ),
        description="User agent for web scrapers"
    )
    SCRAPER_TIMEOUT: float = Field(default=10.0, gt=0, description="Total time allowed for one source fetch, in seconds")
    SCRAPER_MAX_REDIRECTS: int = Field(default=5, ge=0, description="Maximum redirect hops per request")
    SCRAPER_VERIFY_TLS: bool = Field(default=False, description="Validate TLS certificates of sources")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOG_FILE: Optional[str] = Field(default="app.log", description="Log file path, empty to disable")

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()
