"""Application settings."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


PACKAGE_DIR = Path(__file__).parent


class FolioSettings(BaseSettings):
    """Folio configuration settings."""

    backend: str = "yaml"
    data_dir: Path = PACKAGE_DIR / "data"
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    backend_timeout: int = 15
    default_locale: str = "pt"
    default_grace_days: int = 3
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


_settings: Optional[FolioSettings] = None


def get_settings() -> FolioSettings:
    """
    Get or create the settings singleton.

    Returns:
        FolioSettings: The settings instance
    """
    global _settings
    if _settings is None:
        _settings = FolioSettings()
    return _settings
