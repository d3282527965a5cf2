import os
from pydantic import Field
from typing import List
from pydantic_settings import BaseSettings  # Correct import for Pydantic v2
from dotenv import load_dotenv

# Load environment variables from the .env file.
# This ensures that settings can be managed outside the codebase.
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Pydantic's BaseSettings handles type validation automatically.
    """

    # Project Info
    PROJECT_NAME: str = "Storefront API"
    VERSION: str = "1.0.0"

    # Database Configuration
    DATABASE_URL: str = Field(
        ..., description="URL for the application database."
    )

    # Authentication settings
    SECRET_KEY: str = os.getenv(
        "SECRET_KEY", "a_very_secret_key_that_should_be_replaced"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    LOG_LEVEL: str = Field("INFO", description="Root logging level.")

    # i18n
    DEFAULT_LANGUAGE: str = "en"
    SUPPORTED_LANGUAGES: List[str] = ["en", "ar"]

    # Checkout
    SHIPPING_COST: float = Field(50, description="Flat shipping cost per order.")

    # Server-side caps for catalog queries, in milliseconds
    QUERY_TIMEOUT_MS: int = 5000
    AUTOCOMPLETE_TIMEOUT_MS: int = 2000

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        """
        Configuration for Pydantic's BaseSettings.
        """

        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Instantiate the settings object to be used throughout the application.
settings = Settings()
