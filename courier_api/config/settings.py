# courier_api/config/settings.py
from pydantic_settings import BaseSettings
from typing import List
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "Courier Gateway API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database - MySQL (stored procedures live here)
    database_url: str = os.getenv("DATABASE_URL", "mysql+pymysql://root@localhost:3306/courier_db")

    # Pool
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: int = 30
    db_pool_recycle: int = 300

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 5000))
    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]

    @property
    def database_host(self) -> str:
        """Database host without credentials, safe for logs"""
        if "@" in self.database_url:
            return self.database_url.split("@", 1)[1]
        return "localhost"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
