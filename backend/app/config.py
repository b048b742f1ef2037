"""Application configuration using Pydantic settings."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    environment: str = "development"

    # Security
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 30

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"

    # Contact inbox
    default_contact_email: str = "contato@tkprod.com.br"

    # SMTP (contact notifications, production only)
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None

    # Rate limiting (per client address)
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
