import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_PORT = 3000
STORAGE_KEY = "ai-new-year-storage"


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_base_url: str = DEFAULT_BASE_URL
    ai_model: str = DEFAULT_MODEL
    port: int = DEFAULT_PORT
    node_env: str = "development"
    static_dir: str = "dist"
    api_url: str = f"http://localhost:{DEFAULT_PORT}"
    storage_path: str = os.path.join("~", ".festival", "storage.json")

    @property
    def serve_static(self) -> bool:
        return self.node_env == "production"


def load_settings() -> Settings:
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_base_url=os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        ai_model=os.getenv("AI_MODEL") or DEFAULT_MODEL,
        port=port,
        node_env=os.getenv("NODE_ENV", "development"),
        static_dir=os.getenv("STATIC_DIR", "dist"),
        api_url=os.getenv("FESTIVAL_API_URL", f"http://localhost:{port}"),
        storage_path=os.path.expanduser(
            os.getenv("FESTIVAL_STORAGE_PATH", Settings.storage_path)
        ),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
