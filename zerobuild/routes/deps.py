"""공통 의존성 (세션, 저장소, AI 공급자)"""
from typing import Optional

from fastapi import Depends, Header, HTTPException

from ..exceptions import ProjectNotFoundError
from ..models.domain import Project
from ..services.auth_service import Session, session_registry
from ..services.gemini_service import get_gemini_service
from ..services.project_service import ProjectService
from ..services.storage_service import StorageService, get_storage_service
from ..services.visualization import VisualizationProvider


def get_visualization_provider() -> VisualizationProvider:
    try:
        return get_gemini_service()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_project_service(storage: StorageService = Depends(get_storage_service)) -> ProjectService:
    return ProjectService(storage)


def get_session(x_session_id: Optional[str] = Header(default=None)) -> Session:
    session = session_registry.get(x_session_id)
    if session is None:
        raise HTTPException(status_code=401, detail="Login required.")
    return session


def require_client(session: Session = Depends(get_session)) -> Session:
    """쓰기 권한 (클라이언트만)"""
    if not session.can_edit:
        raise HTTPException(status_code=403, detail="This portal is read-only.")
    return session


def load_project(project_id: str, session: Session, service: ProjectService) -> Project:
    """세션이 볼 수 있는 프로젝트만 (아니면 404)"""
    try:
        project = service.get(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found.")

    if not session.can_view(project):
        raise HTTPException(status_code=404, detail="Project not found.")
    return project
