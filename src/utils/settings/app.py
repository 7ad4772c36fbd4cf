from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DEBUG: bool = False
    ENVIRONMENT: str = "DEV"
    API_VERSION: str = "0.0.1"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
    ]

    # Shared secret for service-to-service calls into the credit gate
    INTERNAL_API_KEY: SecretStr = SecretStr("dev-internal-key")

    # Security settings
    MAX_REQUEST_SIZE: int = 1 * 1024 * 1024  # 1MB

    def validate_prod(self) -> None:
        """Sanity checks for production environment."""
        if self.ENVIRONMENT.upper() == "PROD":
            if not self.CORS_ORIGINS:
                raise ValueError("CORS_ORIGINS must be set in production")
            if self.INTERNAL_API_KEY.get_secret_value() == "dev-internal-key":
                raise ValueError("INTERNAL_API_KEY must be set in production")
