from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    youtube_api_key: str = ""
    zyte_api_key: str = ""
    zyte_api_url: str = "https://api.zyte.com/v1/extract"
    # Passed to requests as the connect timeout and the per-read timeout; it
    # does not cap the total duration of a slow, trickling response.
    transcript_timeout: float = 90.0
    store_file: Path = Path("vidboard.json")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
