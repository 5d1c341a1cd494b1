SCENE_ANALYSIS_PROMPT = """
Act as an expert visual analyst preparing the base context for a film storyboard. Analyze the provided reference images together and describe them as one cohesive scene.

Cover, in one continuous description:
1. Core scene and subject: what is happening and who or what is the focus.
2. Character details: clothing, accessories, facial and physical features.
3. Lighting environment: light sources, quality of light, time of day, color temperature.
4. Artistic style: medium, rendering style, color palette, overall mood.

The description will be reused verbatim as the base for every shot of the storyboard, so it must be precise enough to keep characters, clothing, environment and lighting consistent.

**Output Format (JSON):**
{
  "descriptionEN": "The scene description in English.",
  "descriptionCN": "The same scene description in Simplified Chinese."
}
"""


SHOT_GENERATION_PROMPT = """
Base scene description: {scene_description}

You are a professional cinematographer. Generate 9 specific camera shot descriptions for a 3x3 grid storyboard.
The 9 camera types, in grid order, are: {shot_types}.

Ensure strict consistency in character, clothing, environment, and lighting across all 9 shots.
Each description should be concise but visual, and must match the camera type at the same position.

**Output Format (JSON):**
{{
  "shotsEN": ["9 strings in English, one per camera type, same order"],
  "shotsCN": ["9 strings in Simplified Chinese, one per camera type, same order"]
}}
"""


MASTER_PROMPT_CN = "根据（{description}），生成一张具有凝聚力的（3*3）网格图像，包含在同一个环境中的（9）个不同的摄像机镜头，严格保持人物或者物体，还有光线服装的一致性，8K分辨率，（16:9）画幅。\n"

MASTER_PROMPT_EN = "Based on ({description}), generate a cohesive (3*3) grid image containing (9) different camera shots in the same environment, strictly maintaining character/object, lighting, and clothing consistency, 8K resolution, (16:9) aspect ratio.\n"

SHOT_LINE = "镜头{index:02d}: {label} - {description}\n"
