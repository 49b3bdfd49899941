from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..exceptions import VisualizationError
from ..models.schemas import BriefResponse, FloorPlanResponse, VisualResponse
from ..services.auth_service import Session
from ..services.project_service import ProjectService
from ..services.prompts import AFTER, BEFORE
from ..services.visualization import VisualizationProvider
from ..utils.logger import logger
from .deps import (
    get_project_service,
    get_session,
    get_visualization_provider,
    load_project,
    require_client,
)

router = APIRouter(prefix="/api/projects", tags=["visuals"])


@router.post("/{project_id}/visuals/exterior", response_model=VisualResponse)
async def generate_exterior(
    project_id: str,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service),
    provider: VisualizationProvider = Depends(get_visualization_provider)
):
    """외관 3D 렌더 생성 (실패해도 기존 이미지 유지)"""
    try:
        project = load_project(project_id, session, service)
        image = await provider.render_exterior(project)

        if not image:
            return VisualResponse(
                success=False,
                message="The visualization engine is currently busy or the request was filtered. Please try again.",
                project=project
            )

        updated = service.apply_exterior_visual(project_id, image)
        if updated is None:
            raise HTTPException(status_code=404, detail="Project no longer exists; render discarded.")

        return VisualResponse(success=True, message="Exterior render generated.", project=updated)

    except HTTPException:
        raise
    except VisualizationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Exterior render failed for {project_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Exterior render failed: {str(e)}")


@router.post("/{project_id}/rooms/{room_id}/visuals", response_model=VisualResponse)
async def generate_room_visuals(
    project_id: str,
    room_id: str,
    session: Session = Depends(require_client),
    service: ProjectService = Depends(get_project_service),
    provider: VisualizationProvider = Depends(get_visualization_provider)
):
    """방 before(빈 방) / after(가구 배치) 렌더. 하나라도 실패하면 저장하지 않는다."""
    try:
        project = load_project(project_id, session, service)
        room = project.find_room(room_id)
        if room is None:
            raise HTTPException(status_code=404, detail="Room not found.")

        before = await provider.render_room(project, room, BEFORE)
        after = await provider.render_room(project, room, AFTER)

        updated = service.apply_room_visuals(project_id, room_id, before=before, after=after)
        if updated is None:
            raise HTTPException(status_code=404, detail="Room no longer exists; render discarded.")

        return VisualResponse(success=True, message="Room visuals generated.", project=updated)

    except HTTPException:
        raise
    except VisualizationError as e:
        logger.warning(f"Room visuals failed for {room_id}: {str(e)}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Room visuals failed for {room_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Room render failed: {str(e)}")


@router.post("/{project_id}/visuals/floor-plan")
async def generate_floor_plan(
    project_id: str,
    download: bool = False,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service),
    provider: VisualizationProvider = Depends(get_visualization_provider)
):
    """개념 평면도 SVG (저장하지 않음)"""
    try:
        project = load_project(project_id, session, service)
        svg = await provider.render_floor_plan(project)

        if download:
            if not svg:
                raise HTTPException(status_code=502, detail="No floor plan was generated.")
            return Response(
                content=svg,
                media_type="image/svg+xml",
                headers={"Content-Disposition": 'attachment; filename="ZeroBuild_CAD_Layout.svg"'}
            )

        return FloorPlanResponse(success=bool(svg), svg=svg)

    except HTTPException:
        raise
    except VisualizationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Floor plan failed for {project_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Floor plan failed: {str(e)}")


@router.post("/{project_id}/brief", response_model=BriefResponse)
async def generate_brief(
    project_id: str,
    session: Session = Depends(get_session),
    service: ProjectService = Depends(get_project_service),
    provider: VisualizationProvider = Depends(get_visualization_provider)
):
    """개념 설계 설명"""
    try:
        project = load_project(project_id, session, service)
        return BriefResponse(brief=await provider.architect_brief(project))

    except HTTPException:
        raise
    except VisualizationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Brief failed for {project_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Brief failed: {str(e)}")
