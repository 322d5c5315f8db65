from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "legalscan"
    db_username: str = "legalscan"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    pdf_engine: str = "pdfplumber"
    pdf_render_dpi: int = 300

    ocr_engine: str = "tesseract"
    ocr_language: str = "eng"
    ocr_page_segmentation_mode: int = 6
    ocr_page_timeout_seconds: int = 30
    ocr_page_workers: int = 1

    preprocess_max_dimension: int = 1500
    preprocess_blur_radius: float = 2.0

    output_format: str = "json"
