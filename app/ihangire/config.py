"""
Runtime configuration.

Values come from the environment (optionally a local .env file) with safe
defaults so the app starts without extra setup; only the OpenAI key is needed
for the AI features, and it can also be typed into the sidebar.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_STORAGE_QUOTA_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    data_dir: Path
    text_model: str = "gpt-4o-mini"
    analysis_model: str = "gpt-4o"
    image_model: str = "gpt-image-1"
    storage_quota_bytes: int = DEFAULT_STORAGE_QUOTA_BYTES
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        return self.data_dir / "local_storage.json"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the process environment after loading .env."""
    load_dotenv(env_file)
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        data_dir=Path(os.getenv("IHANGIRE_DATA_DIR", ".ihangire_data")),
        text_model=os.getenv("IHANGIRE_TEXT_MODEL", "gpt-4o-mini"),
        analysis_model=os.getenv("IHANGIRE_ANALYSIS_MODEL", "gpt-4o"),
        image_model=os.getenv("IHANGIRE_IMAGE_MODEL", "gpt-image-1"),
        storage_quota_bytes=int(
            os.getenv("IHANGIRE_STORAGE_QUOTA_BYTES", str(DEFAULT_STORAGE_QUOTA_BYTES))
        ),
        log_level=os.getenv("IHANGIRE_LOG_LEVEL", "INFO").upper(),
    )
