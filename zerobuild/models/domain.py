"""도메인 엔티티 (Account, Project, Room, FurnitureItem)

저장 포맷은 camelCase(JSON), 파이썬 속성은 snake_case.
"""
import time
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """9자리 랜덤 ID"""
    return uuid.uuid4().hex[:9]


def now_millis() -> int:
    return int(time.time() * 1000)


class UserRole(str, Enum):
    CLIENT = "CLIENT"
    DEVELOPER = "DEVELOPER"


class LocationType(str, Enum):
    URBAN = "Urban"
    RURAL = "Rural"
    COASTAL = "Coastal"


class BuildingType(str, Enum):
    HOUSE = "House"
    APARTMENT = "Apartment"
    VILLA = "Villa"
    SCHOOL = "School"
    HOSPITAL = "Hospital"


class RoomType(str, Enum):
    BEDROOM = "Master Bedroom"
    GUEST_ROOM = "Guest Room"
    KITCHEN = "Kitchen"
    LIVING_ROOM = "Living Room"
    BATHROOM = "Bathroom"
    DINING = "Dining Room"
    OFFICE = "Home Office"
    KIDS_ROOM = "Kids Room"


class BudgetLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    MANUAL = "Manual"


class SatisfactionRating(str, Enum):
    """만족도 (낮은 순서)"""
    BAD = "Not Accurate"
    AVERAGE = "Somewhat Accurate"
    GOOD = "Good Accuracy"
    EXCELLENT = "High Accuracy"
    OUTSTANDING = "Perfect Visualization"


class FurnitureSource(str, Enum):
    AMAZON = "Amazon"
    FLIPKART = "Flipkart"
    IKEA = "IKEA"
    MYNTRA = "Myntra"


class CamelModel(BaseModel):
    """camelCase 별칭을 쓰는 기본 모델"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Account(CamelModel):
    """사용자 계정 (email이 키)"""
    email: str
    password: str
    role: UserRole = UserRole.CLIENT


class FurnitureItem(CamelModel):
    """고정 가격 카탈로그 항목"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    type: str
    price: float
    link: str
    source: FurnitureSource


class Room(CamelModel):
    """프로젝트 안의 방

    type은 RoomType 값이지만, 카탈로그에 없는 타입도 허용하기 위해 문자열로 저장한다.
    """
    id: str = Field(default_factory=new_id)
    name: str
    type: str
    color: str = "#4f46e5"
    furniture: List[FurnitureItem] = Field(default_factory=list)
    before_image: Optional[str] = None
    after_image: Optional[str] = None


class Project(CamelModel):
    """건축 프로젝트 하나 (방과 가구를 내장)"""
    id: str = Field(default_factory=new_id)
    client_id: str
    title: str
    plot_area: float
    length: float
    breadth: float
    location_type: LocationType = LocationType.URBAN
    budget_level: BudgetLevel = BudgetLevel.MEDIUM
    building_color: str = "#ffffff"
    architectural_style: str = "Modern"
    building_type: BuildingType = BuildingType.HOUSE
    floors: int = Field(default=1, ge=1)
    rooms: List[Room] = Field(default_factory=list)
    created_at: int = Field(default_factory=now_millis)
    visual_image: Optional[str] = None
    satisfaction: Optional[SatisfactionRating] = None
    manual_budget: Optional[float] = None

    def find_room(self, room_id: str) -> Optional[Room]:
        return next((r for r in self.rooms if r.id == room_id), None)


class ChatMessage(CamelModel):
    """어시스턴트 대화 한 턴"""
    role: str = Field(pattern="^(user|model)$")
    text: str
