from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Centralized application configuration.
    Values are loaded automatically from environment variables or `.env` file.
    """

    # --- Server Settings ---
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"

    # Request bodies above this size are rejected before parsing
    max_body_bytes: int = 1024 * 1024

    # --- CORS (Cross-Origin Resource Sharing) ---
    # Wide open for the prototype; restrict to the extension origin in production.
    allow_origins: List[str] = ["*"]

    # --- Model provider ---
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.2
    request_timeout: float = 60.0

    # --- Panel client ---
    api_base_url: str = "http://localhost:3000"

    class Config:
        """
        Pydantic Settings configuration:
        - Reads values from a `.env` file in the working directory
        - UTF-8 encoding for environment variables
        """
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate settings so it can be imported directly
settings = Settings()
