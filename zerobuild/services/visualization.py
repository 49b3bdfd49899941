"""시각화 요청 인터페이스 + 응답 파싱

도메인 로직은 이 인터페이스만 알고, 실제 공급자(Gemini)는 어댑터로 교체 가능.
"""
import re
from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Optional

from ..models.domain import ChatMessage, Project, Room

SVG_PATTERN = re.compile(r"<svg[\s\S]*</svg>")


class InlineImage(NamedTuple):
    data: bytes
    mime_type: str


class VisualizationProvider(ABC):
    """외부 생성형 AI 서비스와의 요청/응답 계약"""

    @abstractmethod
    async def render_exterior(self, project: Project) -> str:
        """외관 렌더 data URI. 이미지가 없으면 빈 문자열."""

    @abstractmethod
    async def render_room(self, project: Project, room: Room, mode: str) -> str:
        """방 before/after 렌더 data URI. 이미지가 없으면 VisualizationError."""

    @abstractmethod
    async def render_floor_plan(self, project: Project) -> str:
        """SVG 도면 원문. 인식 못하면 빈 문자열."""

    @abstractmethod
    async def chat(self, message: str, history: List[ChatMessage]) -> str:
        """어시스턴트 답변. 빈 응답이면 고정 문구."""

    @abstractmethod
    async def architect_brief(self, project: Project) -> str:
        """개념 설계 설명 텍스트"""


def extract_inline_image(response: Any) -> Optional[InlineImage]:
    """응답에서 첫 번째 inline 이미지 추출"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data and inline_data.data:
            return InlineImage(
                data=inline_data.data,
                mime_type=getattr(inline_data, "mime_type", None) or "image/png"
            )
    return None


def extract_svg(text: Optional[str]) -> str:
    """텍스트에서 <svg>...</svg> 문서만 잘라낸다"""
    match = SVG_PATTERN.search(text or "")
    return match.group(0) if match else ""
