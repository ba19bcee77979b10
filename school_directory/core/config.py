import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional, List, Dict, Set


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "School Directory"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False)

    # Database Settings
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./schools.db")

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ]
    )

    # File Upload Settings
    UPLOAD_FOLDER: str = Field(default=os.path.join("public", "schoolImages"))
    STATIC_URL_PATH: str = Field(default="/schoolImages")
    MAX_UPLOAD_SIZE: int = Field(default=5 * 1024 * 1024)
    UPLOAD_CHUNK_SIZE: int = Field(default=64 * 1024)
    ALLOWED_IMAGE_TYPES: Set[str] = Field(
        default={"image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"}
    )

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: Optional[str] = Field(default=None)

    @field_validator('STATIC_URL_PATH')
    @classmethod
    def validate_static_url_path(cls, v: str) -> str:
        if not v.startswith('/'):
            v = f'/{v}'
        return v.rstrip('/') or '/schoolImages'

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return v

    @field_validator('ALLOWED_IMAGE_TYPES')
    @classmethod
    def normalize_image_types(cls, v: Set[str]) -> Set[str]:
        return {content_type.strip().lower() for content_type in v}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )


# Initialize settings
settings = Settings()


# Helper Functions
def get_database_url() -> str:
    return settings.DATABASE_URL


def get_upload_folder() -> str:
    folder = os.path.abspath(settings.UPLOAD_FOLDER)
    os.makedirs(folder, exist_ok=True)
    return folder


def get_logging_config() -> Dict[str, Optional[str]]:
    return {
        "log_level": settings.LOG_LEVEL,
        "log_dir": settings.LOG_DIR
    }
