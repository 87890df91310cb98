from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Fine-tune Dataset Studio"
    API_PREFIX: str = Field(default="/api")
    DEBUG: bool = Field(default=False)

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./dataset_service.db")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: str = Field(
        default=os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs")
    )

    # CORS
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Identity (client IP stands in for a login)
    DEFAULT_CLIENT_IP: str = Field(default="127.0.0.1")

    # Tool execution
    TOOL_EXECUTION_TIMEOUT: float = Field(default=30.0)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


settings = Settings()
