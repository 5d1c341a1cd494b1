from typing import List, Optional

from gridstudio.prompts import MASTER_PROMPT_CN, MASTER_PROMPT_EN, SHOT_LINE
from gridstudio.schemas import Language, SceneAnalysis, StoryboardShot


def compose(analysis: Optional[SceneAnalysis], shots: List[StoryboardShot], language: Language) -> str:
    """
    Renders the master prompt for the 3x3 grid.

    Returns an empty string until a scene analysis exists; the caller shows
    its own placeholder in that case.
    """
    if analysis is None:
        return ""

    is_cn = language == Language.CN
    if is_cn:
        text = MASTER_PROMPT_CN.format(description=analysis.descriptionCN)
    else:
        text = MASTER_PROMPT_EN.format(description=analysis.descriptionEN)

    for index, shot in enumerate(sorted(shots, key=lambda s: s.id), start=1):
        text += SHOT_LINE.format(
            index=index,
            label=shot.type.value if is_cn else shot.type.english_label,
            description=shot.descriptionCN if is_cn else shot.descriptionEN,
        )
    return text
