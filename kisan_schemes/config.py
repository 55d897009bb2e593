"""
Configuration settings for the Kisan Scheme Matcher
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="bpfis")
    profiles_collection: str = Field(default="farmer_scheme_profiles")

    # Ruleset Configuration
    dataset_path: str = Field(
        default="Government_Scheme_Applicability_Dataset.xlsx",
        description="Workbook holding one scheme per row, first sheet is used"
    )

    # Application Configuration
    app_name: str = Field(default="Kisan Scheme Matcher")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # API Configuration
    api_prefix: str = Field(default="/api")
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:8080")

    # Profiles
    profile_name_max_length: int = Field(default=100)

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
