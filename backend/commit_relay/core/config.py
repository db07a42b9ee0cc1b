from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional

class Settings(BaseSettings):
    #app settings
    APP_NAME: str = "commit-relay"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    #server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    #github webhooks, unset means unsigned payloads are accepted
    GITHUB_WEBHOOK_SECRET: Optional[str] = None

    #openai
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    MAX_TOKENS: int = 500
    TEMPERATURE: float = 0.7

    #google docs sync
    GOOGLE_DOCS_ID: Optional[str] = None
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None

    #commit logs
    LOGS_DIR: str = "logs"
    GIT_TIMEOUT: float = 10.0

    #CORS
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def signature_required(self) -> bool:
        return bool(self.GITHUB_WEBHOOK_SECRET)

    @property
    def docs_sync_enabled(self) -> bool:
        return bool(self.GOOGLE_DOCS_ID and self.GOOGLE_APPLICATION_CREDENTIALS)

    class Config:
        env_file = ".env"
        case_sensitive = True
        frozen = True
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    """settings are read from the environment once per process"""
    return Settings()
