import os
from functools import lru_cache

import google.genai as genai
from google.genai import types

from gridstudio.config import settings


@lru_cache()
def get_genai_client():
    http_options = types.HttpOptions(timeout=int(settings.REQUEST_TIMEOUT_SECONDS * 1000))
    if settings.USE_VERTEXAI:
        return genai.Client(
            vertexai=True,
            project=settings.PROJECT_ID,
            location=settings.LOCATION,
            http_options=http_options,
        )
    api_key = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY')
    return genai.Client(api_key=api_key, http_options=http_options)
