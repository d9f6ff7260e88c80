"""
Settings for the WBXML codec, its CLI and the inspector service.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class Settings:
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("WBXML_LOG_DIR", "")

    # Diagnostic view defaults
    SHOW_NAMESPACES: bool = _env_flag("WBXML_SHOW_NAMESPACES", "true")
    SHOW_DOC_REFS: bool = _env_flag("WBXML_SHOW_DOC_REFS", "false")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


@dataclass(frozen=True)
class ViewOptions:
    """
    Diagnostic view of a decoded payload.

    show_namespaces: write elements as ``prefix:Tag`` with xmlns declarations
    show_doc_refs: attach the protocol documentation URL to known tags

    Neither option changes the binary encoding.
    """

    show_namespaces: bool = True
    show_doc_refs: bool = False

    @classmethod
    def from_settings(cls, current: Optional[Settings] = None) -> "ViewOptions":
        current = current or get_settings()
        return cls(
            show_namespaces=current.SHOW_NAMESPACES,
            show_doc_refs=current.SHOW_DOC_REFS,
        )
