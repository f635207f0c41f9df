"""
Contract Validation Module

Модуль для валидации JSON контрактов, которые engine отдаёт collaborators.
"""

from .validators import (
    CalculationResultValidator,
    ContractValidator,
    GrowthSeriesValidator,
    SchemaLoader,
    check_growth_series_order,
    validate_calculation_result,
    validate_growth_series,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GrowthSeriesValidator",
    "CalculationResultValidator",
    # Functions
    "check_growth_series_order",
    "validate_growth_series",
    "validate_calculation_result",
]
