"""
Application configuration using environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Local storage settings
    sqlite_db: str = Field(default="littlechef.db", alias="SQLITE_DB")

    # AI/LLM settings
    llm_provider: str = Field(default="gemini", alias="LLM_PROVIDER")
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    recipe_model_name: str = Field(
        default="gemini-3-flash-preview", alias="RECIPE_MODEL_NAME"
    )
    image_model_name: str = Field(
        default="gemini-2.5-flash-image", alias="IMAGE_MODEL_NAME"
    )
    image_aspect_ratio: str = Field(default="16:9", alias="IMAGE_ASPECT_RATIO")

    # FastAPI settings
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_reload: bool = Field(default=False, alias="API_RELOAD")

    # Development settings
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
