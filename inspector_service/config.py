"""
Settings for the WBXML inspector service.
"""
import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    HOST: str = os.getenv("INSPECTOR_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("INSPECTOR_PORT", "9010"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    MAX_PAYLOAD_BYTES: int = int(os.getenv("WBXML_MAX_PAYLOAD_BYTES", str(10 * 1024 * 1024)))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
