import time
import logging
from typing import Callable, List

import httpx
from google.auth import exceptions as google_auth_exceptions
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from gridstudio.config import AppConfig, settings
from gridstudio.dependencies import get_genai_client
from gridstudio.exceptions import (UpstreamConfigurationError, UpstreamContractError,
                                   UpstreamTransportError)
from gridstudio.ingestion import parse_data_uri
from gridstudio.prompts import SCENE_ANALYSIS_PROMPT, SHOT_GENERATION_PROMPT
from gridstudio.schemas import SHOT_COUNT, SceneAnalysis, ShotCaptions, ShotType

logger = logging.getLogger(__name__)


SCENE_ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "descriptionEN": types.Schema(type=types.Type.STRING),
        "descriptionCN": types.Schema(type=types.Type.STRING),
    },
    required=["descriptionEN", "descriptionCN"],
)

SHOT_CAPTIONS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "shotsEN": types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)),
        "shotsCN": types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)),
    },
    required=["shotsEN", "shotsCN"],
)


class GenerationService:
    """
    Talks to Gemini for the two storyboard calls.

    The client is injected; anything exposing `models.generate_content` with
    the google-genai signature will do. Without one, `client_factory` builds
    it on the first call, so a missing key only fails the call that needs it.
    """

    def __init__(self, genai_client=None, config: AppConfig = settings,
                 client_factory: Callable = get_genai_client):
        self._genai_client = genai_client
        self.config = config
        self.client_factory = client_factory

    @property
    def genai_client(self):
        if self._genai_client is None:
            try:
                self._genai_client = self.client_factory()
            except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
                logger.error(f"Failed to initialize the Gemini client. Error: {e}")
                raise UpstreamConfigurationError(f"Gemini client is not configured: {e}") from e
        return self._genai_client

    def _generate(self, operation: str, model: str, contents, response_schema: types.Schema) -> str:
        client = self.genai_client
        start_time = time.time()
        try:
            response = client.models.generate_content(
                model=model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=response_schema,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.error(f"{operation} call to {model} failed. Error: {e}")
            raise UpstreamTransportError(f"{operation} request failed: {e}") from e

        logger.info(f"{operation} call to {model} finished in {time.time() - start_time:.2f}s.")
        text = response.text
        if not text:
            raise UpstreamContractError(f"{operation} returned an empty response.")
        return text

    def describe_scene(self, images: List[str]) -> SceneAnalysis:
        """
        Sends every reference image with the scene analysis instruction and
        returns the bilingual description.
        """
        image_parts = []
        for uri in images:
            try:
                mime_type, data = parse_data_uri(uri)
            except ValueError as e:
                raise UpstreamContractError(f"Stored image is not a valid data URI: {e}") from e
            image_parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))

        logger.info(f"Describing scene from {len(image_parts)} image(s) using model {self.config.ANALYSIS_MODEL}.")
        text = self._generate(
            "Scene analysis",
            self.config.ANALYSIS_MODEL,
            image_parts + [types.Part.from_text(text=SCENE_ANALYSIS_PROMPT)],
            SCENE_ANALYSIS_SCHEMA,
        )
        try:
            return SceneAnalysis.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Failed to parse AI response for scene analysis: {e}")
            raise UpstreamContractError("Failed to parse AI response for scene analysis.") from e

    def caption_shots(self, analysis: SceneAnalysis, shot_types: List[ShotType]) -> ShotCaptions:
        """Asks for one caption per shot type, grounded in the English scene description."""
        if len(shot_types) != SHOT_COUNT:
            raise ValueError(f"Expected {SHOT_COUNT} shot types, got {len(shot_types)}")

        prompt = SHOT_GENERATION_PROMPT.format(
            scene_description=analysis.descriptionEN,
            shot_types=", ".join(ShotType(t).value for t in shot_types),
        )
        logger.info(f"Generating {SHOT_COUNT} shot captions using model {self.config.SHOT_MODEL}.")
        text = self._generate("Shot generation", self.config.SHOT_MODEL, prompt, SHOT_CAPTIONS_SCHEMA)
        try:
            return ShotCaptions.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Failed to parse AI response for shots generation: {e}")
            raise UpstreamContractError("Failed to parse AI response for shots generation.") from e


def get_generation_service() -> GenerationService:
    return GenerationService(config=settings)
