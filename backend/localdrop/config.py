"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config comes from env vars or .env.localdrop file."""

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 9999
    CORS_ORIGINS: str = "*"

    # Blob area: flat directory, filenames are generated storage keys
    FILE_STORAGE_PATH: str = "./uploads"
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024
    UPLOAD_CHUNK_BYTES: int = 1024 * 1024

    MAX_MESSAGE_LENGTH: int = 100_000
    ANONYMOUS_NAME: str = "anonymous"

    # Optional browser UI, mounted at / when the directory exists
    STATIC_DIR: str = ""

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env.localdrop"
        env_file_encoding = "utf-8"


settings = Settings()
