"""대지 치수 동기화 (길이 x 폭 = 면적)"""
import math
from typing import Optional, Tuple


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def area_from_dimensions(length: float, breadth: float) -> float:
    """길이/폭 편집 시 면적 재계산"""
    return length * breadth


def dimensions_from_area(area: float) -> Tuple[float, float]:
    """면적 편집 시 정사각형 대지로 가정 (소수점 2자리)"""
    side = round_half_up(math.sqrt(area), 2) if area > 0 else 0.0
    return side, side


def reconcile(
    length: Optional[float],
    breadth: Optional[float],
    plot_area: Optional[float]
) -> Tuple[float, float, float]:
    """세 값 중 편집된 쪽을 기준으로 나머지를 맞춘다.

    길이와 폭이 모두 양수면 그것이 우선, 아니면 면적에서 치수를 만든다.
    """
    if length and breadth and length > 0 and breadth > 0:
        return length, breadth, area_from_dimensions(length, breadth)

    if plot_area and plot_area > 0:
        side_l, side_b = dimensions_from_area(plot_area)
        return side_l, side_b, plot_area

    raise ValueError("Either length and breadth or plotArea must be positive")
