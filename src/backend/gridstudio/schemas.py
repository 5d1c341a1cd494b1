from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Optional, List

SHOT_COUNT = 9


class ShotType(str, Enum):
    WIDE = "Wide Shot (全景)"
    MEDIUM = "Medium Shot (中景)"
    CLOSE_UP = "Close-up (特写)"
    EXTREME_CLOSE_UP = "Extreme Close-up (大特写)"
    LOW_ANGLE = "Low Angle (仰拍)"
    HIGH_ANGLE = "High Angle (俯拍)"
    BIRDS_EYE = "Bird's Eye View (鸟瞰)"
    OVER_THE_SHOULDER = "Over the Shoulder (过肩)"
    PROFILE = "Profile Shot (侧面)"
    DUTCH_ANGLE = "Dutch Angle (倾斜镜头)"
    TRACKING = "Tracking Shot (追踪镜头)"
    FULL_BODY = "Full Body Shot (全身)"

    @property
    def english_label(self) -> str:
        """The label without its parenthetical Chinese term."""
        return self.value.split('(')[0].strip()


class Language(str, Enum):
    CN = "CN"
    EN = "EN"


class SceneAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    descriptionEN: str
    descriptionCN: str


class ShotCaptions(BaseModel):
    shotsEN: List[Optional[str]]
    shotsCN: List[Optional[str]]


class StoryboardShot(BaseModel):
    id: int
    type: ShotType = ShotType.MEDIUM
    descriptionEN: str = ""
    descriptionCN: str = ""


def default_shots() -> List[StoryboardShot]:
    return [StoryboardShot(id=i + 1) for i in range(SHOT_COUNT)]


class SessionState(BaseModel):
    session_id: str
    images: List[str]
    sceneAnalysis: Optional[SceneAnalysis] = None
    shots: List[StoryboardShot]
    isAnalyzing: bool = False
    isGenerating: bool = False
    language: Language = Language.CN


class ShotTypeUpdateRequest(BaseModel):
    type: ShotType


class PromptResponse(BaseModel):
    language: Language
    prompt: str
