"""방 타입별 기본 가구 카탈로그 (정적 테이블)"""
from typing import Dict, List, Optional, Tuple, Union

from ..models.domain import FurnitureItem, FurnitureSource, Room, RoomType

DEFAULT_ROOM_COLOR = "#4f46e5"

IKEA = "https://www.ikea.com/in/en/"
AMAZON = "https://www.amazon.in/"
FLIPKART = "https://www.flipkart.com/"


def _item(id: str, name: str, type: str, price: float, link: str, source: FurnitureSource) -> FurnitureItem:
    return FurnitureItem(id=id, name=name, type=type, price=price, link=link, source=source)


ROOM_FURNITURE_CATALOG: Dict[RoomType, Tuple[FurnitureItem, ...]] = {
    RoomType.BEDROOM: (
        _item("b1", "Premium Teak Bed", "Bedding", 72500, IKEA, FurnitureSource.IKEA),
        _item("b2", "Memory Foam Mattress", "Bedding", 45000, AMAZON, FurnitureSource.AMAZON),
        _item("b3", "Smart Wardrobe 4-Door", "Storage", 85000, FLIPKART, FurnitureSource.FLIPKART),
    ),
    RoomType.LIVING_ROOM: (
        _item("l1", "Italian Leather Sofa", "Seating", 145000, AMAZON, FurnitureSource.AMAZON),
        _item("l2", "Marble Top Coffee Table", "Furniture", 28000, IKEA, FurnitureSource.IKEA),
        _item("l3", '85" QLED Display', "Electronics", 195000, FLIPKART, FurnitureSource.FLIPKART),
    ),
    RoomType.KITCHEN: (
        _item("k1", "Modular Cabinetry Set", "Kitchen", 350000, IKEA, FurnitureSource.IKEA),
        _item("k2", "Smart Dishwasher", "Appliance", 62000, AMAZON, FurnitureSource.AMAZON),
    ),
    RoomType.BATHROOM: (
        _item("ba1", "Granite Vanity Unit", "Sanitary", 42000, AMAZON, FurnitureSource.AMAZON),
        _item("ba2", "Hydro-Massage Shower", "Fixture", 88000, FLIPKART, FurnitureSource.FLIPKART),
    ),
    RoomType.GUEST_ROOM: (
        _item("g1", "Compact Queen Bed", "Bedding", 38000, IKEA, FurnitureSource.IKEA),
    ),
    RoomType.DINING: (
        _item("d1", "8-Seater Walnut Table", "Dining", 115000, IKEA, FurnitureSource.IKEA),
    ),
    RoomType.OFFICE: (
        _item("o1", "Adjustable Standing Desk", "Office", 42000, AMAZON, FurnitureSource.AMAZON),
        _item("o2", "High-Back Executive Chair", "Office", 28500, IKEA, FurnitureSource.IKEA),
    ),
    RoomType.KIDS_ROOM: (
        _item("kr1", "Bunk Bed with Storage", "Bedding", 58000, IKEA, FurnitureSource.IKEA),
    ),
}


def parse_room_type(value: Union[RoomType, str]) -> Optional[RoomType]:
    try:
        return RoomType(value)
    except ValueError:
        return None


def starter_furniture(room_type: Union[RoomType, str]) -> List[FurnitureItem]:
    """방 타입의 기본 가구 목록 복사본. 모르는 타입이면 빈 목록."""
    key = parse_room_type(room_type)
    if key is None:
        return []
    return [item.model_copy() for item in ROOM_FURNITURE_CATALOG.get(key, ())]


def create_room(
    name: str,
    room_type: Union[RoomType, str],
    color: Optional[str] = None,
    existing_count: int = 0
) -> Room:
    """새 방 생성 (가구는 타입으로만 결정)"""
    key = parse_room_type(room_type)
    return Room(
        name=name.strip() or f"Unit {existing_count + 1}",
        type=key.value if key else str(room_type),
        color=color or DEFAULT_ROOM_COLOR,
        furniture=starter_furniture(room_type)
    )
