import re
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..exceptions import RoomNotFoundError
from ..models.domain import Project, Room
from ..models.schemas import ProjectCreate, ProjectUpdate, RatingRequest, RoomCreate, RoomUpdate
from ..services.auth_service import Session
from ..services.budget import BudgetReport, budget_report
from ..services.project_service import ProjectService
from ..services.prompts import ROOM_MODES
from ..services.storage_service import StorageService, get_storage_service
from ..utils.images import decode_data_uri, to_png_bytes
from ..utils.logger import logger
from .deps import get_project_service, get_session, load_project, require_client

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _png_download(data_uri: str, filename: str) -> Response:
    """data URI -> PNG 첨부파일"""
    try:
        data, _ = decode_data_uri(data_uri)
        png = to_png_bytes(data)
    except (ValueError, OSError) as e:
        logger.error(f"Stored image is not decodable: {e}")
        raise HTTPException(status_code=500, detail="Stored image is corrupted.")

    # 헤더는 latin-1만 허용: ASCII 대체 이름 + RFC 5987 원래 이름
    ascii_name = re.sub(r"[^A-Za-z0-9._-]+", "_", filename)
    return Response(
        content=png,
        media_type="image/png",
        headers={
            "Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
        }
    )


@router.get("", response_model=List[Project])
async def list_projects(
    session: Session = Depends(get_session),
    storage: StorageService = Depends(get_storage_service)
):
    """클라이언트는 본인 것, 개발자는 전체"""
    return session.visible_projects(storage)


@router.post("", response_model=Project, status_code=201)
async def create_project(
    request: ProjectCreate,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    try:
        return service.create_project(session.email, request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("")
async def delete_my_projects(
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    """본인 프로젝트 전부 삭제"""
    removed = service.delete_client_projects(session.email)
    return {"success": True, "deleted": removed}


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service)
):
    return load_project(project_id, session, service)


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    request: ProjectUpdate,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    project = load_project(project_id, session, service)
    try:
        return service.update_project(project, request.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    project = load_project(project_id, session, service)
    service.delete_project(project.id)
    return {"success": True}


@router.post("/{project_id}/rating", response_model=Project)
async def rate_project(
    project_id: str,
    request: RatingRequest,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    """렌더 정확도 만족도"""
    project = load_project(project_id, session, service)
    return service.rate_project(project, request.satisfaction)


@router.get("/{project_id}/budget", response_model=BudgetReport)
async def get_budget(
    project_id: str,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service)
):
    """매 요청마다 다시 계산"""
    return budget_report(load_project(project_id, session, service))


@router.post("/{project_id}/rooms", response_model=Room, status_code=201)
async def add_room(
    project_id: str,
    request: RoomCreate,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    project = load_project(project_id, session, service)
    return service.add_room(project, request.name, request.type, request.color)


@router.patch("/{project_id}/rooms/{room_id}", response_model=Room)
async def update_room(
    project_id: str,
    room_id: str,
    request: RoomUpdate,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    project = load_project(project_id, session, service)
    try:
        return service.update_room(project, room_id, name=request.name, color=request.color)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found.")


@router.delete("/{project_id}/rooms/{room_id}", response_model=Project)
async def remove_room(
    project_id: str,
    room_id: str,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service)
):
    project = load_project(project_id, session, service)
    try:
        return service.remove_room(project, room_id)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found.")


@router.get("/{project_id}/visuals/exterior.png")
async def download_exterior(
    project_id: str,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service)
):
    """외관 렌더 다운로드"""
    try:
        project = load_project(project_id, session, service)
        if not project.visual_image:
            raise HTTPException(status_code=404, detail="No exterior render yet.")
        return _png_download(project.visual_image, f"ZeroBuild_{project.title}_3D_Render.png")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Exterior download failed for {project_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Download failed: {str(e)}")


@router.get("/{project_id}/rooms/{room_id}/visuals/{mode}.png")
async def download_room_visual(
    project_id: str,
    room_id: str,
    mode: str,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service)
):
    """방 before/after 렌더 다운로드"""
    try:
        if mode not in ROOM_MODES:
            raise HTTPException(status_code=404, detail="Unknown view.")

        project = load_project(project_id, session, service)
        room = project.find_room(room_id)
        if room is None:
            raise HTTPException(status_code=404, detail="Room not found.")

        image = room.before_image if mode == "before" else room.after_image
        if not image:
            raise HTTPException(status_code=404, detail=f"No {mode} render yet.")
        return _png_download(image, f"ZeroBuild_{room.name}_{mode.title()}.png")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Room download failed for {room_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Download failed: {str(e)}")
