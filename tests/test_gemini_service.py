"""GeminiService 어댑터 (SDK 클라이언트는 mock)"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from zerobuild.config import settings
from zerobuild.exceptions import VisualizationError
from zerobuild.models.domain import ChatMessage, RoomType
from zerobuild.services.catalog import create_room
from zerobuild.services.gemini_service import GeminiService
from zerobuild.services.prompts import AFTER, BEFORE, CHAT_FALLBACK_REPLY
from zerobuild.utils.images import decode_data_uri


def _image_response(data: bytes):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png"))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))], text=None)


def _text_response(text):
    return SimpleNamespace(candidates=[], text=text)


@pytest.fixture
def sdk():
    return MagicMock()


@pytest.fixture
def service(sdk):
    return GeminiService(client=sdk)


class TestExterior:

    @pytest.mark.asyncio
    async def test_returns_data_uri(self, service, sdk, project, png_bytes):
        sdk.models.generate_content.return_value = _image_response(png_bytes)

        uri = await service.render_exterior(project)

        assert uri.startswith("data:image/png;base64,")
        assert decode_data_uri(uri)[0] == png_bytes
        kwargs = sdk.models.generate_content.call_args.kwargs
        assert "EXTERIOR AFTER" in kwargs["contents"]

    @pytest.mark.asyncio
    async def test_missing_image_degrades_to_empty(self, service, sdk, project):
        sdk.models.generate_content.return_value = _text_response("I cannot draw that")
        assert await service.render_exterior(project) == ""

    @pytest.mark.asyncio
    async def test_unreadable_payload_degrades_to_empty(self, service, sdk, project):
        sdk.models.generate_content.return_value = _image_response(b"not an image")
        assert await service.render_exterior(project) == ""


class TestRoom:

    @pytest.mark.asyncio
    async def test_both_modes(self, service, sdk, project, png_bytes):
        sdk.models.generate_content.return_value = _image_response(png_bytes)
        room = create_room("Master", RoomType.BEDROOM, "#ff0000")

        assert (await service.render_room(project, room, BEFORE)).startswith("data:image/png")
        assert (await service.render_room(project, room, AFTER)).startswith("data:image/png")
        prompts = [c.kwargs["contents"] for c in sdk.models.generate_content.call_args_list]
        assert "MODE: BEFORE" in prompts[0]
        assert '"#ff0000"' in prompts[1]

    @pytest.mark.asyncio
    async def test_missing_image_is_hard_failure(self, service, sdk, project):
        sdk.models.generate_content.return_value = _text_response("filtered")
        room = create_room("Master", RoomType.BEDROOM)

        with pytest.raises(VisualizationError, match="could not generate image"):
            await service.render_room(project, room, AFTER)

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self, service, sdk, project):
        sdk.models.generate_content.side_effect = RuntimeError("503 UNAVAILABLE")

        with pytest.raises(VisualizationError, match="503"):
            await service.render_room(project, create_room("", RoomType.KITCHEN), BEFORE)


class TestFloorPlan:

    @pytest.mark.asyncio
    async def test_extracts_svg(self, service, sdk, project):
        sdk.models.generate_content.return_value = _text_response('```svg\n<svg viewBox="0 0 20 20"></svg>\n```')
        assert await service.render_floor_plan(project) == '<svg viewBox="0 0 20 20"></svg>'

    @pytest.mark.asyncio
    async def test_no_svg_is_empty(self, service, sdk, project):
        sdk.models.generate_content.return_value = _text_response(None)
        assert await service.render_floor_plan(project) == ""


class TestChat:

    @pytest.mark.asyncio
    async def test_history_forwarded(self, service, sdk):
        chat = sdk.chats.create.return_value
        chat.send_message.return_value = _text_response("Go for a courtyard.")
        history = [ChatMessage(role="user", text="hi"), ChatMessage(role="model", text="hello")]

        reply = await service.chat("Ideas for a villa?", history)

        assert reply == "Go for a courtyard."
        sent_history = sdk.chats.create.call_args.kwargs["history"]
        assert [c.role for c in sent_history] == ["user", "model"]
        chat.send_message.assert_called_once_with("Ideas for a villa?")

    @pytest.mark.asyncio
    async def test_empty_reply_uses_fallback(self, service, sdk):
        sdk.chats.create.return_value.send_message.return_value = _text_response("")
        assert await service.chat("hello", []) == CHAT_FALLBACK_REPLY


def test_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    with pytest.raises(ValueError):
        GeminiService()
