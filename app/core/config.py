"""
Application Configuration for SkillShareHub Backend
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "skillsharehub"
    DATABASE_USERNAME: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"  # Default for development

    # Full DSN override, e.g. sqlite:///./skillsharehub.db
    DATABASE_DSN: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL from components"""
        if self.DATABASE_DSN:
            return self.DATABASE_DSN
        return (
            f"postgresql://{self.DATABASE_USERNAME}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # JWT Configuration
    JWT_SECRET_KEY: str = "dev-secret-key-change-in-production"  # Default for development
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 1 day

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "SkillShareHub API"
    DEBUG: bool = True

    # CORS Configuration
    ALLOWED_ORIGINS: str = "*"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from string"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Social graph limits
    SUGGESTION_LIMIT: int = 10
    FEED_LIMIT: int = 20
    USER_SEARCH_LIMIT: int = 20

    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


# Global settings instance
settings = Settings()
