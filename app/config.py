from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str

    # API
    API_TITLE: str = "Samachar API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    RESET_CODE_EXPIRE_MINUTES: int = 15
    SESSION_COOKIE_NAME: str = "samachar-auth-token"

    # Public site
    SITE_URL: str = "https://europe-visa-blog.com"

    # Storage
    UPLOAD_DIR: str = "storage"
    STORAGE_PUBLIC_URL: str = "http://localhost:8000/storage"
    MAX_IMAGE_SIZE_MB: int = 5

    # SMTP (password reset codes)
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: Optional[int] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM: Optional[str] = None
    SMTP_FROM_NAME: str = "Samachar"
    SMTP_USE_TLS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
