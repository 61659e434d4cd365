"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Storefront API")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(
        default="Catalog, order capture and admin login backend for the storefront and its dashboard"
    )
    environment: str = Field(default="development")

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=True)

    # Database settings
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="storefront_db")

    # MongoDB connection settings
    server_selection_timeout_ms: int = Field(default=30000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS")
    connect_timeout_ms: int = Field(default=30000, alias="MONGODB_CONNECT_TIMEOUT_MS")
    socket_timeout_ms: int = Field(default=45000, alias="MONGODB_SOCKET_TIMEOUT_MS")
    max_pool_size: int = Field(default=10, alias="MONGODB_MAX_POOL_SIZE")
    min_pool_size: int = Field(default=1, alias="MONGODB_MIN_POOL_SIZE")
    retry_writes: bool = Field(default=True, alias="MONGODB_RETRY_WRITES")

    # Logging settings
    log_level: str = Field(default="INFO")

    # CORS settings
    cors_origins: List[str] = Field(
        default=[
            "http://127.0.0.1:5173",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://localhost:3000",
        ]
    )

    # Pagination defaults
    default_page_size: int = Field(default=10)
    default_order_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Upload settings
    upload_dir: Path = Field(default=Path("uploads"))
    product_image_folder: str = Field(default="Products")
    max_upload_files: int = Field(default=7)
    max_upload_size_mb: int = Field(default=5)

    # Admin login settings
    admin_email: Optional[str] = Field(default=None)
    admin_password: Optional[str] = Field(default=None)
    jwt_secret: Optional[str] = Field(default=None)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_in: str = Field(default="24h")

    @property
    def product_upload_path(self) -> Path:
        """Directory holding uploaded product images."""
        return self.upload_dir / self.product_image_folder

    @property
    def product_image_url_prefix(self) -> str:
        return f"/uploads/{self.product_image_folder}"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
