"""
JSON Schema Contract Validators

Модуль для валидации JSON данных, которые engine отдаёт collaborators
(persistence, charting, export), согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- growth_series.json (помесячная траектория)
- calculation_result.json (скаляр + траектория + fee waterfall)
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'growth_series')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        try:
            self.validate(data)
        except ValidationError:
            return False
        return True

    def iter_errors(self, data: Any):
        """
        Итератор по всем ошибкам валидации схемы.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


def check_growth_series_order(points: List[Dict[str, Any]]) -> None:
    """
    Проверка порядка траектории: month = 0, 1, 2, ... без пропусков.

    Raises:
        ValidationError: Если месяцы не отсортированы или есть пропуски
    """
    for expected, point in enumerate(points):
        if point["month"] != expected:
            raise ValidationError(
                f"growth series must be sorted by month without gaps: "
                f"expected month {expected}, got {point['month']}"
            )


class GrowthSeriesValidator(ContractValidator):
    """Валидатор для growth_series контракта (схема + порядок месяцев)."""

    def __init__(self):
        super().__init__("growth_series")

    def validate(self, data: Any) -> None:
        super().validate(data)
        check_growth_series_order(data)


class CalculationResultValidator(ContractValidator):
    """Валидатор для calculation_result контракта (схема + порядок месяцев)."""

    def __init__(self):
        super().__init__("calculation_result")

    def validate(self, data: Any) -> None:
        super().validate(data)
        check_growth_series_order(data["growth_points"])


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_growth_series(data: List[Dict[str, Any]]) -> None:
    """
    Валидация growth_series данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    GrowthSeriesValidator().validate(data)


def validate_calculation_result(data: Dict[str, Any]) -> None:
    """
    Валидация calculation_result данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CalculationResultValidator().validate(data)
