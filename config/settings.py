from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Database — no default: the connection string (and its credentials) must
    # come from the environment. When unset the API starts in degraded mode.
    DATABASE_URL: str | None = None
    DB_CONNECT_TIMEOUT_SECONDS: float = 5.0
    DB_IDLE_TIMEOUT_SECONDS: int = 45
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5

    # Receipt uploads (served as static files under UPLOAD_URL_PREFIX)
    UPLOAD_DIR: str = "public/uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"

    # Admin gate — bcrypt hash of the shared admin password, no default
    ADMIN_PASSWORD_HASH: str | None = None

    # JWT — no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 480

    # App
    APP_NAME: str = "Community Fund Ledger"
    PORT: int = 5000
    CORS_ORIGINS: list[str] = ["*"]
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"


settings = Settings()
