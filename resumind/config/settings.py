from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "resumind"
    db_username: str = "resumind"
    db_password: str = "secret"
    db_pool_max_size: int = Field(default=10, gt=0)

    blob_store: str = "local"
    blob_root: str = "/app/files"
    record_store: str = "postgres"
    record_key_prefix: str = "resume:"

    raster_engine: str = "pymupdf"
    raster_scale_factor: float = Field(default=4.0, gt=0)
    raster_image_format: str = "png"
    raster_image_quality: float = Field(default=1.0, ge=0, le=1)

    max_upload_size_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    accepted_media_type: str = "application/pdf"

    analysis_provider: str = "openai"
    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o"
    analysis_openai_timeout_seconds: int = 60
    analysis_openai_base_url: str | None = None
