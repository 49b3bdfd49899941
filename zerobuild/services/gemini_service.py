import asyncio
from typing import Any, List, Optional

from google import genai
from google.genai import types

from ..config import settings
from ..exceptions import VisualizationError
from ..models.domain import ChatMessage, Project, Room
from ..utils.images import is_image, to_data_uri
from ..utils.logger import logger
from .prompts import (
    ASSISTANT_SYSTEM_INSTRUCTION,
    BRIEF_FALLBACK,
    CHAT_FALLBACK_REPLY,
    ROOM_MODES,
    architect_brief_prompt,
    exterior_prompt,
    floor_plan_prompt,
    room_prompt,
)
from .visualization import InlineImage, VisualizationProvider, extract_inline_image, extract_svg


class GeminiService(VisualizationProvider):
    """Google Gemini API 어댑터"""

    def __init__(self, client: Optional[Any] = None):
        if client is None:
            # 설정에서 API 키 로드
            if not settings.gemini_api_key:
                raise ValueError("GEMINI_API_KEY is not configured.")
            client = genai.Client(api_key=settings.gemini_api_key)

        self.client = client
        logger.info("GeminiService initialized")

    async def _generate(self, model: str, contents: Any, config: Optional[types.GenerateContentConfig] = None):
        """동기 SDK 호출을 스레드에서 실행"""
        return await asyncio.to_thread(
            self.client.models.generate_content,
            model=model,
            contents=contents,
            config=config,
        )

    async def _generate_image(self, prompt: str):
        return await self._generate(
            settings.image_model,
            prompt,
            types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=settings.image_aspect_ratio)
            ),
        )

    @staticmethod
    def _image_from(response: Any) -> Optional[InlineImage]:
        image = extract_inline_image(response)
        if image is not None and not is_image(image.data):
            logger.warning(f"Inline payload is not a readable image ({image.mime_type})")
            return None
        return image

    async def render_exterior(self, project: Project) -> str:
        """외관 3D 렌더 (이미지 없으면 빈 문자열)"""
        try:
            logger.info(f"Rendering exterior for project {project.id}")
            response = await self._generate_image(exterior_prompt(project))
        except Exception as e:
            logger.error(f"Exterior render failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise VisualizationError(f"Exterior render failed: {str(e)}")

        image = self._image_from(response)
        if image is None:
            logger.warning(f"No exterior image returned for project {project.id}")
            return ""

        logger.info(f"Exterior render completed for project {project.id}")
        return to_data_uri(image.data, image.mime_type)

    async def render_room(self, project: Project, room: Room, mode: str) -> str:
        """방 before/after 렌더 (이미지 없으면 예외)"""
        if mode not in ROOM_MODES:
            raise ValueError(f"Unknown room visual mode: {mode}")

        try:
            logger.info(f"Rendering room {room.id} ({room.type}) mode={mode}")
            response = await self._generate_image(room_prompt(room, mode))
        except Exception as e:
            logger.error(f"Room render failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise VisualizationError(f"Room render failed: {str(e)}")

        image = self._image_from(response)
        if image is None:
            logger.error(f"No {mode} image returned for room {room.id}")
            raise VisualizationError(
                "Visualization engine could not generate image. Scope: conceptual residential only."
            )

        logger.info(f"Room {room.id} {mode} render completed")
        return to_data_uri(image.data, image.mime_type)

    async def render_floor_plan(self, project: Project) -> str:
        """개념 평면도 SVG (인식 못하면 빈 문자열)"""
        try:
            logger.info(f"Drafting floor plan for project {project.id}")
            response = await self._generate(settings.fast_model, floor_plan_prompt(project))
        except Exception as e:
            logger.error(f"Floor plan request failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise VisualizationError(f"Floor plan request failed: {str(e)}")

        svg = extract_svg(getattr(response, "text", None))
        if not svg:
            logger.warning(f"No SVG document in floor plan response for project {project.id}")
        return svg

    async def architect_brief(self, project: Project) -> str:
        try:
            response = await self._generate(settings.text_model, architect_brief_prompt(project))
        except Exception as e:
            logger.error(f"Architect brief failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise VisualizationError(f"Architect brief failed: {str(e)}")

        return getattr(response, "text", None) or BRIEF_FALLBACK

    async def chat(self, message: str, history: List[ChatMessage]) -> str:
        """residential 전용 어시스턴트"""
        try:
            chat = self.client.chats.create(
                model=settings.fast_model,
                config=types.GenerateContentConfig(system_instruction=ASSISTANT_SYSTEM_INSTRUCTION),
                history=[
                    types.Content(role=m.role, parts=[types.Part(text=m.text)])
                    for m in history
                ],
            )
            response = await asyncio.to_thread(chat.send_message, message)
        except Exception as e:
            logger.error(f"Chat request failed: {type(e).__name__}: {str(e)}", exc_info=True)
            raise VisualizationError(f"Chat request failed: {str(e)}")

        reply = getattr(response, "text", None)
        if not reply:
            logger.warning("Empty chat reply, using fallback")
            return CHAT_FALLBACK_REPLY
        return reply


# 싱글톤 인스턴스
_gemini_service = None

def get_gemini_service() -> GeminiService:
    """GeminiService 인스턴스 가져오기"""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
