from pydantic import Field, model_validator
from typing import Optional, List

from .domain import (
    BudgetLevel,
    BuildingType,
    CamelModel,
    ChatMessage,
    LocationType,
    Project,
    RoomType,
    SatisfactionRating,
    UserRole,
)

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class SignupRequest(CamelModel):
    """클라이언트 가입"""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginRequest(CamelModel):
    """로그인 (역할별 포털)"""
    email: str
    password: str
    role: UserRole = UserRole.CLIENT


class SessionResponse(CamelModel):
    session_id: str
    role: UserRole
    email: str


class ProjectCreate(CamelModel):
    """프로젝트 생성 폼"""
    title: str = Field(min_length=1)
    length: Optional[float] = Field(default=None, ge=0)
    breadth: Optional[float] = Field(default=None, ge=0)
    plot_area: Optional[float] = Field(default=None, ge=0)
    location_type: LocationType = LocationType.URBAN
    budget_level: BudgetLevel = BudgetLevel.MEDIUM
    manual_budget: Optional[float] = Field(default=None, ge=0)
    building_color: str = Field(default="#ffffff", pattern=HEX_COLOR)
    architectural_style: str = "Modern"
    building_type: BuildingType = BuildingType.HOUSE
    floors: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_plot(self):
        has_dims = bool(self.length and self.breadth)
        if not has_dims and not self.plot_area:
            raise ValueError("Provide length and breadth, or plotArea")
        return self


class ProjectUpdate(CamelModel):
    """프로젝트 수정 (보낸 필드만 반영)"""
    title: Optional[str] = Field(default=None, min_length=1)
    length: Optional[float] = Field(default=None, gt=0)
    breadth: Optional[float] = Field(default=None, gt=0)
    plot_area: Optional[float] = Field(default=None, gt=0)
    location_type: Optional[LocationType] = None
    budget_level: Optional[BudgetLevel] = None
    manual_budget: Optional[float] = Field(default=None, ge=0)
    building_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    architectural_style: Optional[str] = None
    building_type: Optional[BuildingType] = None
    floors: Optional[int] = Field(default=None, ge=1)


class RoomCreate(CamelModel):
    """방 추가 (가구는 타입으로 결정)"""
    name: str = ""
    type: str = RoomType.BEDROOM.value
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class RoomUpdate(CamelModel):
    name: Optional[str] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class RatingRequest(CamelModel):
    satisfaction: SatisfactionRating


class VisualResponse(CamelModel):
    """렌더 결과"""
    success: bool
    message: str
    project: Optional[Project] = None


class FloorPlanResponse(CamelModel):
    success: bool
    svg: str


class BriefResponse(CamelModel):
    brief: str


class ChatRequest(CamelModel):
    message: str = Field(min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)


class ChatResponse(CamelModel):
    reply: str
