from gridstudio.compositor import compose
from gridstudio.schemas import Language, SceneAnalysis, ShotType, StoryboardShot, default_shots


def _shots():
    shots = default_shots()
    shots[0] = StoryboardShot(id=1, type=ShotType.WIDE, descriptionEN="wide view", descriptionCN="全景视图")
    return shots


def test_compose_without_analysis_is_empty():
    assert compose(None, default_shots(), Language.CN) == ""
    assert compose(None, default_shots(), Language.EN) == ""


def test_compose_english_trims_label_at_parenthesis():
    text = compose(SceneAnalysis(descriptionEN="X", descriptionCN="甲"), _shots(), Language.EN)
    lines = text.split("\n")

    assert lines[0].startswith("Based on (X), generate a cohesive (3*3) grid image")
    assert "8K resolution, (16:9) aspect ratio." in lines[0]
    assert lines[1] == "镜头01: Wide Shot - wide view"
    assert lines[2] == "镜头02: Medium Shot - "


def test_compose_chinese_uses_full_label():
    text = compose(SceneAnalysis(descriptionEN="X", descriptionCN="甲"), _shots(), Language.CN)
    lines = text.split("\n")

    assert lines[0].startswith("根据（甲），生成一张具有凝聚力的（3*3）网格图像")
    assert lines[1] == "镜头01: Wide Shot (全景) - 全景视图"
    assert lines[9] == "镜头09: Medium Shot (中景) - "


def test_compose_has_header_nine_lines_and_trailing_newline():
    text = compose(SceneAnalysis(descriptionEN="X", descriptionCN="甲"), _shots(), Language.EN)

    assert text.endswith("\n")
    lines = text.splitlines()
    assert len(lines) == 10
    for i in range(1, 10):
        assert lines[i].startswith(f"镜头{i:02d}: ")


def test_compose_orders_by_shot_id():
    shots = list(reversed(_shots()))
    text = compose(SceneAnalysis(descriptionEN="X", descriptionCN="甲"), shots, Language.EN)

    assert text.splitlines()[1] == "镜头01: Wide Shot - wide view"


def test_english_label_splits_at_first_parenthesis():
    assert ShotType.BIRDS_EYE.english_label == "Bird's Eye View"
    assert ShotType.EXTREME_CLOSE_UP.english_label == "Extreme Close-up"
    assert len(list(ShotType)) == 12
