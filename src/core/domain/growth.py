"""
GrowthPoint — Точка траектории роста

Immutable Pydantic модель одной месячной точки для charting/export.
Порождается только Growth Trajectory Generator; engine её не хранит.
"""

from pydantic import BaseModel, Field, TypeAdapter


class GrowthPoint(BaseModel):
    """
    Стоимость позиции на конец месяца month.

    value может быть отрицательной, если sell-ноги превышают текущую
    стоимость (траектория восстанавливается без clamp).
    """

    month: int = Field(..., ge=0, description="Месяц от начала инвестиции")
    value: float = Field(..., allow_inf_nan=False, description="Стоимость (валюта)")

    model_config = {"frozen": True}


_GROWTH_POINTS_ADAPTER = TypeAdapter(list[GrowthPoint])


def growth_points_to_json(points: list[GrowthPoint]) -> str:
    """
    Сериализация траектории для persistence.

    Examples:
        >>> growth_points_to_json([GrowthPoint(month=0, value=100.0)])
        '[{"month":0,"value":100.0}]'
    """
    return _GROWTH_POINTS_ADAPTER.dump_json(list(points)).decode("utf-8")


def growth_points_from_json(payload: str | bytes) -> list[GrowthPoint]:
    """
    Десериализация траектории из persistence.

    Raises:
        pydantic.ValidationError: если payload не соответствует модели
    """
    return _GROWTH_POINTS_ADAPTER.validate_json(payload)
