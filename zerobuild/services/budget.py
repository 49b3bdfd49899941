"""예산 계산 (순수 함수, 캐시 없음)

    base      = plotArea x 2150
    furniture = 모든 방 가구 가격 합
    labor     = 방 개수 x 45000
    total     = base + furniture + labor
"""
from typing import Iterable, List, Optional

from ..models.domain import BudgetLevel, CamelModel, Project, Room

BASE_RATE_PER_SQFT = 2150
LABOR_PER_ROOM = 45000


class BudgetBreakdown(CamelModel):
    base: float
    furniture: float
    labor: float
    total: float


class RoomBudget(CamelModel):
    room_id: str
    name: str
    furniture: float


class BudgetReport(CamelModel):
    """예산 탭 응답"""
    breakdown: BudgetBreakdown
    rooms: List[RoomBudget]
    budget_level: BudgetLevel
    manual_budget: Optional[float] = None
    variance: Optional[float] = None


def calculate_room_budget(room: Room) -> float:
    return sum(item.price for item in room.furniture)


def calculate_budget(project: Project) -> BudgetBreakdown:
    base = project.plot_area * BASE_RATE_PER_SQFT
    furniture = sum(calculate_room_budget(room) for room in project.rooms)
    labor = len(project.rooms) * LABOR_PER_ROOM
    return BudgetBreakdown(
        base=base,
        furniture=furniture,
        labor=labor,
        total=base + furniture + labor
    )


def portfolio_valuation(projects: Iterable[Project]) -> float:
    """전체 프로젝트 합계 (개발자 대시보드용)"""
    return sum(calculate_budget(p).total for p in projects)


def budget_report(project: Project) -> BudgetReport:
    breakdown = calculate_budget(project)

    # 수동 예산일 때만 차액 계산 (양수면 여유)
    variance = None
    if project.budget_level == BudgetLevel.MANUAL and project.manual_budget is not None:
        variance = project.manual_budget - breakdown.total

    return BudgetReport(
        breakdown=breakdown,
        rooms=[
            RoomBudget(room_id=r.id, name=r.name, furniture=calculate_room_budget(r))
            for r in project.rooms
        ],
        budget_level=project.budget_level,
        manual_budget=project.manual_budget,
        variance=variance
    )
