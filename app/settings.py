from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    debug: bool = False
    app_name: str = "blog"
    base_url: str = "/"
    content_dir: Path = Path("content")
    output_dir: Path = Path("public")
    default_timezone: str = "UTC"
    duplicate_threshold: float = 0.9
    include_drafts: bool = False
    include_future: bool = False
    page_size: int = 10
    ssh_host: str | None = None
    ssh_password: str | None = None
    ssh_root_path: str = "/var/www/html"
    ssh_username: str | None = None
    stage: str = "local"
