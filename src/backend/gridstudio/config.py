import os
import yaml
from pydantic import BaseModel
from typing import Optional
from pathlib import Path


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'configs' / 'app-config.yaml'


class AppConfig(BaseModel):
    ANALYSIS_MODEL: str = "gemini-3-flash-preview"
    SHOT_MODEL: str = "gemini-3-pro-preview"
    REQUEST_TIMEOUT_SECONDS: float = 90
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024
    INGEST_WORKERS: int = 4
    MAX_SESSIONS: int = 100
    FRONTEND_URL: str = "http://localhost:5173"
    USE_VERTEXAI: bool = False
    PROJECT_ID: Optional[str] = None
    LOCATION: str = "us-central1"


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    if config_path is None:
        config_path = Path(os.environ.get('GRID_STUDIO_CONFIG', DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        return AppConfig()
    with open(config_path, 'r') as config_file:
        config_data = yaml.safe_load(config_file) or {}
    # Blank yaml keys come through as None; let the model defaults apply.
    return AppConfig(**{k: v for k, v in config_data.items() if v is not None})


settings = load_config()
