"""생성형 AI 프롬프트 (순수 문자열 생성)"""
from ..models.domain import Project, Room

BEFORE = "before"
AFTER = "after"
ROOM_MODES = (BEFORE, AFTER)

ASSISTANT_SYSTEM_INSTRUCTION = (
    "You are ZeroBuild AI Assistant. Help with residential buildings only. "
    "If the user asks for engineering drawings, say: 'ZeroBuild.AI provides conceptual "
    "architectural visualization, not construction drawings.'"
)

CHAT_FALLBACK_REPLY = "I'm sorry, I couldn't process that."
BRIEF_FALLBACK = "Failed to generate blueprint reasoning."


def _fmt(value: float) -> str:
    """20.0 -> '20', 12.5 -> '12.5'"""
    return f"{value:g}"


def exterior_prompt(project: Project) -> str:
    return f"""SYSTEM: ZeroBuild.AI Architectural Visualization Engine.
MODE: EXTERIOR AFTER.
OBJECT: A {project.architectural_style} style {project.building_type.value} with {project.floors} floors.
COLOR THEME: {project.building_color}.
SETTING: A professional architectural site photo in an {project.location_type.value} landscape.
LIGHTING: Late afternoon golden hour, soft shadows, photorealistic.
DETAILS: Large glass windows, modern textures, landscaping, 8k resolution.
RULES: High-quality 3D render, photorealistic. No sketches. No cartoons."""


def room_prompt(room: Room, mode: str) -> str:
    """before: 가구 없는 빈 방 / after: 가구 + 방 색상 강제"""
    if mode == BEFORE:
        return f"""SYSTEM: You are the ZeroBuild.AI Interior Visualization Engine.
TASK: Generate a photorealistic 3D render of a BEFORE view.
ROOM TYPE: {room.type}.
MODE: BEFORE
STRICT RULES:
- Show an EMPTY room, strictly NO furniture or decor.
- Plain concrete or white-washed walls, neutral flooring (concrete or light wood).
- Natural daylight from a single window.
- High-resolution architectural bare shell style."""

    if mode == AFTER:
        return f"""SYSTEM: You are the ZeroBuild.AI Interior Visualization Engine.
TASK: Generate a photorealistic 3D render of an AFTER view.
ROOM TYPE: {room.type} (Residential)
MODE: AFTER
COLOR ENFORCEMENT: Apply EXACT color "{room.color}" to walls and accents.
STRICT RULES:
- Photorealistic 3D render of a fully furnished {room.type}.
- Furniture: Matching modern high-end pieces for {room.type}.
- Lighting: Recessed warm lighting combined with natural light.
- High resolution, professional interior photography style."""

    raise ValueError(f"Unknown room visual mode: {mode}")


def floor_plan_prompt(project: Project) -> str:
    length = _fmt(project.length)
    breadth = _fmt(project.breadth)
    room_names = ", ".join(r.name for r in project.rooms)
    return f"""You are the ZeroBuild.AI Technical Drafting Engine.
Generate a conceptual 2D Floor Plan in SVG format for a {project.building_type.value} on a {length}x{breadth} plot.
Rooms to include: {room_names}.

SVG STYLING RULES:
- Background: Light gray or white.
- Lines: Thin, precise dark blue or black lines (0.5px - 1px).
- Aesthetic: Technical blueprint / CAD drafting style.
- Include: Wall thickness (double lines), door swing arcs, window markers.
- Labels: All rooms must be clearly labeled with their names and estimated areas.
- Dimensions: Show dimension lines with arrows and numbers matching the {length}x{breadth} plot.
- Aspect Ratio: The SVG viewBox must exactly match {length} / {breadth}.

Return ONLY the raw SVG code. No text before or after."""


def architect_brief_prompt(project: Project) -> str:
    return f"""Act as an expert architect for ZeroBuild.AI.
Based on this plot ({_fmt(project.length)}x{_fmt(project.breadth)} ft, {_fmt(project.plot_area)} sq ft) in an {project.location_type.value} area, for a {project.building_type.value} with {project.floors} floors.
Style: {project.architectural_style}.
Provide a professional conceptual architectural recommendation focusing on structural integrity and spatial flow.
DISCLAIMER: This is for visualization only, not for construction drawings."""
