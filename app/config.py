import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    # App Settings
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SAMD Care"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Auth provider (tokens are issued externally, only verified here)
    SUPABASE_JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    # PostgreSQL Settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "samd_care"
    POSTGRES_PORT: str = "5432"
    DATABASE_URL: str | None = None
    DB_ECHO_QUERIES: bool = False

    # AI analysis
    AI_ANALYSIS_MODEL: str = "openai/gpt-4o"
    AI_ANALYSIS_MAX_TOKENS: int = 3000
    AI_ANALYSIS_TIMEOUT_SECONDS: float = 60.0
    AI_ANALYSIS_TEMPERATURE: float = 0.5

    # Reporting windows
    ANALYSIS_WINDOW_DAYS: int = 30
    PROGRESS_WINDOW_DAYS: int = 60

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT in ("prod", "production")

    @property
    def DATABASE_URI(self) -> str:
        """Builds database URI dynamically."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def NEON_ENDPOINT_ID(self) -> str:
        """Extract Neon endpoint ID from server name."""
        if self.is_production:
            return self.POSTGRES_SERVER.split(".")[0]
        return ""

    @classmethod
    def load_from_env_file(cls):
        """Load settings from .env file in local development."""
        from pathlib import Path

        from dotenv import load_dotenv

        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file, override=True)

        return cls()


settings = Settings.load_from_env_file()
