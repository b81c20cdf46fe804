"""
Configuration management for the job board API.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Runtime
    app_env: str = "production"
    cors_origins: str = "http://localhost:3000"

    # Document store
    database_url: str = "sqlite:///./jobboard.sqlite3"
    jobs_table: str = "jobs"
    sarkari_jobs_table: str = "sarkari_jobs"
    internships_table: str = "internships"
    certifications_table: str = "certifications"
    walking_table: str = "walking"
    subscriptions_table: str = "subscriptions"
    admins_table: str = "admins"
    activities_table: str = "admin_activities"

    # Admin auth
    jwt_secret: str = ""
    jwt_expires_minutes: int = 24 * 60
    admin_email: str = ""
    admin_password: str = ""

    # LLM
    deepseek_api_key: str = ""
    llm_model: str = "deepseek-chat"
    llm_timeout: float = 30.0

    # Logo lookup
    logo_base_url: str = "https://logo.clearbit.com"
    logo_timeout: float = 5.0
    placeholder_logo: str = "/placeholder-logo.svg"

    # Blob store
    aws_region: str = "us-east-1"
    s3_bucket_name: str = ""
    presign_expires: int = 300

    # Rate limits (per client IP)
    rate_limit_public: str = "1000/15minutes"
    rate_limit_sensitive: str = "50/15minutes"
    rate_limit_analyze: str = "1/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in ("dev", "development")

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
