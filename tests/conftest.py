"""공통 fixture: 임시 저장소, 가짜 AI 공급자, TestClient"""
from io import BytesIO
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from zerobuild.config import settings
from zerobuild.exceptions import VisualizationError
from zerobuild.main import app
from zerobuild.models.domain import ChatMessage, Project, Room
from zerobuild.routes.deps import get_visualization_provider
from zerobuild.services.auth_service import session_registry
from zerobuild.services.storage_service import StorageService, get_storage_service
from zerobuild.services.visualization import VisualizationProvider
from zerobuild.utils.images import to_data_uri


def make_png(color: str = "red") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeProvider(VisualizationProvider):
    """호출 기록 + 결과 지정 가능한 가짜 공급자"""

    def __init__(self):
        self.exterior = to_data_uri(make_png("blue"))
        self.room_images = {
            "before": to_data_uri(make_png("gray")),
            "after": to_data_uri(make_png("green")),
        }
        self.failing_modes = set()
        self.svg = '<svg viewBox="0 0 20 15"><rect/></svg>'
        self.reply = "Hello from the assistant"
        self.calls: List[tuple] = []
        # 지정하면 외관/채팅에서 그대로 던진다 (예상 못 한 오류)
        self.error: Optional[Exception] = None

    async def render_exterior(self, project: Project) -> str:
        self.calls.append(("exterior", project.id))
        if self.error:
            raise self.error
        return self.exterior

    async def render_room(self, project: Project, room: Room, mode: str) -> str:
        self.calls.append(("room", room.id, mode))
        if mode in self.failing_modes:
            raise VisualizationError("Visualization engine could not generate image.")
        return self.room_images[mode]

    async def render_floor_plan(self, project: Project) -> str:
        self.calls.append(("floor_plan", project.id))
        return self.svg

    async def chat(self, message: str, history: List[ChatMessage]) -> str:
        self.calls.append(("chat", message, len(history)))
        if self.error:
            raise self.error
        return self.reply

    async def architect_brief(self, project: Project) -> str:
        self.calls.append(("brief", project.id))
        return "Use a central courtyard."


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def storage(tmp_path) -> StorageService:
    return StorageService(str(tmp_path / "data"))


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(storage, provider):
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_visualization_provider] = lambda: provider
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    session_registry.clear()


def _headers(session_id: str) -> dict:
    return {"X-Session-Id": session_id}


@pytest.fixture
def client_headers(client) -> dict:
    resp = client.post("/api/auth/signup", json={"email": "a@x.com", "password": "pw"})
    assert resp.status_code == 200
    return _headers(resp.json()["sessionId"])


@pytest.fixture
def developer_headers(client) -> dict:
    resp = client.post("/api/auth/login", json={
        "email": settings.admin_email,
        "password": settings.admin_password,
        "role": "DEVELOPER",
    })
    assert resp.status_code == 200
    return _headers(resp.json()["sessionId"])


@pytest.fixture
def project_id(client, client_headers) -> str:
    resp = client.post(
        "/api/projects",
        json={"title": "Skyview", "length": 20, "breadth": 20},
        headers=client_headers,
    )
    assert resp.status_code == 201
    return resp.json()["id"]


def build_project(**overrides) -> Project:
    data = dict(client_id="a@x.com", title="Skyview", plot_area=400, length=20, breadth=20)
    data.update(overrides)
    return Project(**data)


@pytest.fixture
def project() -> Project:
    return build_project()
