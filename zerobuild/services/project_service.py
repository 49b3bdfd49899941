"""프로젝트/방 변경 + 개발자 포트폴리오 집계

모든 변경은 저장소에서 다시 읽고 id로 병합한 뒤 통째로 저장한다.
"""
from typing import Any, Dict, List, Optional

from ..exceptions import ProjectNotFoundError, RoomNotFoundError
from ..models.domain import BuildingType, CamelModel, Project, Room, SatisfactionRating
from ..utils.logger import logger
from . import plot
from .budget import calculate_budget, portfolio_valuation
from .catalog import create_room
from .storage_service import StorageService

# 소수점 2자리 반올림 오차 허용
AREA_TOLERANCE = 0.01


class PortfolioRow(CamelModel):
    id: str
    title: str
    client_id: str
    building_type: BuildingType
    plot_area: float
    rooms: int
    satisfaction: Optional[SatisfactionRating] = None
    total_budget: float


class PortfolioSummary(CamelModel):
    """개발자 대시보드 집계"""
    total_projects: int
    total_rooms: int
    global_valuation: float
    ratings: Dict[str, int]
    projects: List[PortfolioRow]


class ProjectService:

    def __init__(self, storage: StorageService):
        self.storage = storage

    def get(self, project_id: str) -> Project:
        project = self.storage.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def create_project(self, client_id: str, data: Dict[str, Any]) -> Project:
        """새 프로젝트 (방은 항상 빈 목록으로 시작)"""
        length, breadth, plot_area = plot.reconcile(
            data.pop("length", None),
            data.pop("breadth", None),
            data.pop("plot_area", None)
        )
        project = Project(
            client_id=client_id,
            length=length,
            breadth=breadth,
            plot_area=plot_area,
            rooms=[],
            **data
        )
        self.storage.save_project(project)
        logger.info(f"Project created: {project.id} ({project.title}) for {client_id}")
        return project

    def update_project(self, project: Project, changes: Dict[str, Any]) -> Project:
        """부분 수정.

        면적만 오면 정사각형 치수로, 길이/폭이 오면 면적을 다시 계산한다.
        길이/폭과 함께 온 면적은 계산값과 맞을 때만 허용 (아니면 ValueError).
        """
        dims = {k: changes.pop(k) for k in ("length", "breadth", "plot_area") if k in changes}
        if dims:
            if "plot_area" in dims and not ("length" in dims or "breadth" in dims):
                length, breadth, plot_area = plot.reconcile(None, None, dims["plot_area"])
            else:
                length, breadth, plot_area = plot.reconcile(
                    dims.get("length", project.length),
                    dims.get("breadth", project.breadth),
                    None
                )
                sent_area = dims.get("plot_area")
                if sent_area is not None and abs(sent_area - plot_area) > AREA_TOLERANCE:
                    raise ValueError(
                        f"plotArea {sent_area:g} does not match length x breadth ({plot_area:g})"
                    )
            changes.update(length=length, breadth=breadth, plot_area=plot_area)

        updated = project.model_copy(update=changes)
        # model_copy는 검증하지 않으므로 한 번 더 검증
        updated = Project.model_validate(updated.model_dump())
        self.storage.save_project(updated)
        return updated

    def add_room(self, project: Project, name: str, room_type: str, color: Optional[str] = None) -> Room:
        room = create_room(name, room_type, color, existing_count=len(project.rooms))
        project.rooms.append(room)
        self.storage.save_project(project)
        logger.info(f"Room added to {project.id}: {room.id} ({room.type}, {len(room.furniture)} items)")
        return room

    def update_room(self, project: Project, room_id: str, name: Optional[str] = None, color: Optional[str] = None) -> Room:
        room = project.find_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        if name is not None:
            room.name = name
        if color is not None:
            room.color = color
        self.storage.save_project(project)
        return room

    def remove_room(self, project: Project, room_id: str) -> Project:
        if project.find_room(room_id) is None:
            raise RoomNotFoundError(room_id)
        project.rooms = [r for r in project.rooms if r.id != room_id]
        self.storage.save_project(project)
        return project

    def rate_project(self, project: Project, rating: SatisfactionRating) -> Project:
        project.satisfaction = rating
        self.storage.save_project(project)
        logger.info(f"Project {project.id} rated: {rating.value}")
        return project

    def apply_exterior_visual(self, project_id: str, image: str) -> Optional[Project]:
        """외관 렌더 결과 반영. 그 사이 삭제됐으면 버린다."""
        project = self.storage.get_project(project_id)
        if project is None:
            logger.warning(f"Project {project_id} gone before exterior render completed, dropping result")
            return None
        project.visual_image = image
        self.storage.save_project(project)
        return project

    def apply_room_visuals(
        self,
        project_id: str,
        room_id: str,
        before: Optional[str] = None,
        after: Optional[str] = None
    ) -> Optional[Project]:
        """방 렌더 결과를 room id 기준으로 병합 (마지막 응답이 이김)"""
        project = self.storage.get_project(project_id)
        room = project.find_room(room_id) if project else None
        if room is None:
            logger.warning(f"Room {room_id} in {project_id} gone before render completed, dropping result")
            return None

        if before is not None:
            room.before_image = before
        if after is not None:
            room.after_image = after
        self.storage.save_project(project)
        return project

    def delete_project(self, project_id: str) -> None:
        self.storage.delete_project(project_id)
        logger.info(f"Project deleted: {project_id}")

    def delete_client_projects(self, client_id: str) -> int:
        """클라이언트 본인 프로젝트 전부 삭제. 남는 게 없으면 저장소 자체를 비운다."""
        projects = self.storage.get_projects()
        remaining = [p for p in projects if p.client_id != client_id]
        removed = len(projects) - len(remaining)

        if remaining:
            self.storage.replace_projects(remaining)
        else:
            self.storage.delete_all_projects()

        logger.info(f"Deleted {removed} projects for {client_id}")
        return removed


def portfolio_summary(projects: List[Project]) -> PortfolioSummary:
    ratings = {rating.value: 0 for rating in SatisfactionRating}
    for p in projects:
        if p.satisfaction:
            ratings[p.satisfaction.value] += 1

    return PortfolioSummary(
        total_projects=len(projects),
        total_rooms=sum(len(p.rooms) for p in projects),
        global_valuation=portfolio_valuation(projects),
        ratings=ratings,
        projects=[
            PortfolioRow(
                id=p.id,
                title=p.title,
                client_id=p.client_id,
                building_type=p.building_type,
                plot_area=p.plot_area,
                rooms=len(p.rooms),
                satisfaction=p.satisfaction,
                total_budget=calculate_budget(p).total
            )
            for p in projects
        ]
    )
