import threading
import uuid
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from gridstudio.config import settings
from gridstudio.compositor import compose
from gridstudio.exceptions import (AnalysisFailedError, ShotGenerationFailedError,
                                   UpstreamError)
from gridstudio.ingestion import encode_batch
from gridstudio.schemas import (Language, SceneAnalysis, SessionState, ShotCaptions,
                                ShotType, StoryboardShot, default_shots)
from gridstudio.task_manager import OperationGuard

logger = logging.getLogger(__name__)


def _slot(values: List[Optional[str]], index: int) -> str:
    if index < len(values) and values[index]:
        return values[index]
    return ""


def map_captions(shots: List[StoryboardShot], captions: ShotCaptions) -> List[StoryboardShot]:
    """
    Positional, best-effort mapping of generated captions onto the shots.

    Index i of each array goes to the i-th shot. A slot missing in either
    language leaves both descriptions of that shot empty.
    """
    mapped = []
    for i, shot in enumerate(shots):
        en = _slot(captions.shotsEN, i)
        cn = _slot(captions.shotsCN, i)
        if not (en and cn):
            en = cn = ""
        mapped.append(shot.model_copy(update={"descriptionEN": en, "descriptionCN": cn}))
    return mapped


class StoryboardSession:
    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.images: List[str] = []
        self.scene_analysis: Optional[SceneAnalysis] = None
        self.shots: List[StoryboardShot] = default_shots()
        self.language = Language.CN
        self.analysis_guard = OperationGuard("analyze")
        self.generation_guard = OperationGuard("generate_shots")
        self._lock = threading.RLock()

    @property
    def is_analyzing(self) -> bool:
        return self.analysis_guard.is_pending

    @property
    def is_generating(self) -> bool:
        return self.generation_guard.is_pending

    def ingest(self, files: List[Dict[str, Any]]) -> List[str]:
        """Encodes the batch and appends it only if every file succeeded."""
        encoded = encode_batch(files)
        with self._lock:
            self.images = self.images + encoded
            return list(self.images)

    def remove_image(self, index: int) -> List[str]:
        with self._lock:
            if 0 <= index < len(self.images):
                self.images = self.images[:index] + self.images[index + 1:]
            return list(self.images)

    def analyze(self, service) -> Optional[SceneAnalysis]:
        with self._lock:
            images = list(self.images)
        if not images:
            return None

        with self.analysis_guard.run():
            try:
                analysis = service.describe_scene(images)
            except UpstreamError as e:
                logger.error(f"Analysis failed for session {self.session_id}: {e}")
                raise AnalysisFailedError(str(e)) from e
            with self._lock:
                self.scene_analysis = analysis
        logger.info(f"Scene analysis updated for session {self.session_id}.")
        return analysis

    def generate_shots(self, service) -> Optional[List[StoryboardShot]]:
        with self._lock:
            analysis = self.scene_analysis
            shot_types = [shot.type for shot in self.shots]
        if analysis is None:
            return None

        with self.generation_guard.run():
            try:
                captions = service.caption_shots(analysis, shot_types)
            except UpstreamError as e:
                logger.error(f"Shot generation failed for session {self.session_id}: {e}")
                raise ShotGenerationFailedError(str(e)) from e
            with self._lock:
                self.shots = map_captions(self.shots, captions)
                shots = list(self.shots)
        logger.info(f"Shot descriptions updated for session {self.session_id}.")
        return shots

    def set_shot_type(self, shot_id: int, shot_type: ShotType) -> StoryboardShot:
        with self._lock:
            for i, shot in enumerate(self.shots):
                if shot.id == shot_id:
                    self.shots[i] = shot.model_copy(update={"type": ShotType(shot_type)})
                    return self.shots[i]
        raise KeyError(shot_id)

    def toggle_language(self) -> Language:
        with self._lock:
            self.language = Language.EN if self.language == Language.CN else Language.CN
            return self.language

    def compose(self) -> str:
        with self._lock:
            return compose(self.scene_analysis, self.shots, self.language)

    def to_state(self) -> SessionState:
        with self._lock:
            return SessionState(
                session_id=self.session_id,
                images=list(self.images),
                sceneAnalysis=self.scene_analysis,
                shots=list(self.shots),
                isAnalyzing=self.is_analyzing,
                isGenerating=self.is_generating,
                language=self.language,
            )


# ==============================================================================
# In-Memory Session Store
# ==============================================================================

# Sessions are ephemeral and never persisted. Least recently used first;
# the oldest are dropped once MAX_SESSIONS is exceeded.
_session_store: "OrderedDict[str, StoryboardSession]" = OrderedDict()
_store_lock = threading.Lock()


def create_session() -> StoryboardSession:
    session = StoryboardSession()
    with _store_lock:
        _session_store[session.session_id] = session
        while len(_session_store) > settings.MAX_SESSIONS:
            evicted_id, _ = _session_store.popitem(last=False)
            logger.info(f"Evicted idle storyboard session {evicted_id}.")
    logger.info(f"Created storyboard session {session.session_id}.")
    return session


def get_session(session_id: str) -> Optional[StoryboardSession]:
    with _store_lock:
        session = _session_store.get(session_id)
        if session is not None:
            _session_store.move_to_end(session_id)
        return session


def delete_session(session_id: str) -> bool:
    with _store_lock:
        return _session_store.pop(session_id, None) is not None
