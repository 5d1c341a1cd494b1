"""
Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

import json
from io import BytesIO
from typing import Any, Dict, List

import pytest
from PIL import Image

from gridstudio.config import AppConfig
from gridstudio.services import GenerationService


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModels:
    def __init__(self, outcomes: List[Any]):
        self.outcomes = list(outcomes)
        self.calls: List[Dict[str, Any]] = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, (dict, list)):
            outcome = json.dumps(outcome, ensure_ascii=False)
        return FakeResponse(outcome)


class FakeGenaiClient:
    """Stands in for genai.Client; replays queued outcomes in order."""

    def __init__(self, *outcomes):
        self.models = FakeModels(outcomes)

    @property
    def calls(self):
        return self.models.calls


@pytest.fixture
def test_config() -> AppConfig:
    return AppConfig(ANALYSIS_MODEL="analysis-model", SHOT_MODEL="shot-model", MAX_IMAGE_BYTES=1024 * 1024)


@pytest.fixture
def make_service(test_config):
    def _make(*outcomes):
        client = FakeGenaiClient(*outcomes)
        return GenerationService(client, test_config), client
    return _make


def image_bytes(fmt: str = "PNG", color=(200, 30, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_upload() -> Dict[str, Any]:
    return {"file_bytes": image_bytes("PNG"), "file_content_type": "image/png", "file_filename": "ref.png"}


@pytest.fixture
def jpeg_upload() -> Dict[str, Any]:
    return {"file_bytes": image_bytes("JPEG"), "file_content_type": "image/jpeg", "file_filename": "ref.jpg"}


@pytest.fixture
def broken_upload() -> Dict[str, Any]:
    return {"file_bytes": b"definitely not an image", "file_content_type": "image/png", "file_filename": "broken.png"}


@pytest.fixture
def nine_captions() -> Dict[str, List[str]]:
    return {
        "shotsEN": [f"shot {i}" for i in range(1, 10)],
        "shotsCN": [f"镜头描述{i}" for i in range(1, 10)],
    }
