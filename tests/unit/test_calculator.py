"""
Тесты для Calculator — единая точка входа по режимам

Проверяемые инварианты:
1. Каждый режим возвращает скаляр и траекторию
2. Ошибки domain логируются (WARNING) и пробрасываются без изменений
3. CalculationResult сериализуется в calculation_result контракт
"""

import logging
from datetime import date

import pytest
from pydantic import ValidationError

from src.core.contracts import validate_calculation_result
from src.core.domain import FollowOnInvestment, PortfolioParameters, RelativeTiming
from src.core.errors import (
    NonPositiveAmount,
    PercentageOutOfRange,
    ResultOutOfRange,
    UnresolvableTiming,
)
from src.engine.calculator import (
    CalculationMode,
    CalculationResult,
    calculate_blended,
    calculate_initial,
    calculate_irr,
    calculate_outcome,
    calculate_portfolio,
)


@pytest.fixture
def portfolio_params():
    return PortfolioParameters(
        initial_investment=100_000.0,
        unit_price=1_000.0,
        success_rate_percent=80.0,
        outcome_per_unit=5_000.0,
        top_line_fee_percent=5.0,
        management_fee_percent=40.0,
        investor_share_percent=42.5,
        horizon_years=3.0,
    )


# =============================================================================
# ТЕСТЫ: Режимы
# =============================================================================


class TestModes:
    """Тесты режимов расчёта."""

    def test_calculate_irr(self):
        result = calculate_irr(100.0, 150.0, 2.0)

        assert result.mode == CalculationMode.CALCULATE_IRR
        assert abs(result.result - 22.4745) < 1e-3
        assert len(result.growth_points) == 25
        assert result.growth_points[-1].value == pytest.approx(150.0)
        assert result.waterfall is None

    def test_calculate_outcome(self):
        result = calculate_outcome(100.0, 15.0, 3.0)

        assert result.mode == CalculationMode.CALCULATE_OUTCOME
        assert abs(result.result - 152.0875) < 1e-3
        assert result.growth_points[0].value == 100.0

    def test_calculate_initial(self):
        result = calculate_initial(200.0, 10.0, 5.0)

        assert result.mode == CalculationMode.CALCULATE_INITIAL
        assert abs(result.result - 124.1843) < 1e-3
        assert result.growth_points[0].value == result.result
        assert result.growth_points[-1].value == pytest.approx(200.0)

    def test_calculate_blended(self):
        follow_ons = [FollowOnInvestment(amount=500.0, timing=RelativeTiming(amount=1))]
        result = calculate_blended(
            1000.0, 2000.0, 2.0, follow_ons, initial_date=date(2024, 1, 1)
        )

        assert result.mode == CalculationMode.CALCULATE_BLENDED
        assert result.result < calculate_irr(1000.0, 2000.0, 2.0).result
        assert result.growth_points[12].value > result.growth_points[11].value + 400.0

    def test_calculate_portfolio(self, portfolio_params):
        result = calculate_portfolio(portfolio_params)

        assert result.mode == CalculationMode.PORTFOLIO_UNIT_INVESTMENT
        assert result.waterfall is not None
        assert result.waterfall.net_investor_proceeds == pytest.approx(96_900.0)
        assert len(result.growth_points) == 37

    def test_result_immutable(self):
        result = calculate_irr(100.0, 150.0, 2.0)
        with pytest.raises(ValidationError):
            result.result = 0.0


# =============================================================================
# ТЕСТЫ: Ошибки
# =============================================================================


class TestErrors:
    """Ошибки domain проходят сквозь calculator."""

    def test_irr_error_logged_and_raised(self, caplog):
        with caplog.at_level(logging.WARNING, logger="src.engine.calculator"):
            with pytest.raises(NonPositiveAmount):
                calculate_irr(0.0, 100.0, 1.0)

        assert "calculate_irr aborted" in caplog.text
        assert "field=initial" in caplog.text

    def test_blended_batch_error(self, caplog):
        follow_ons = [FollowOnInvestment(amount=500.0, timing=RelativeTiming(amount=5))]

        with caplog.at_level(logging.WARNING, logger="src.engine.calculator"):
            with pytest.raises(UnresolvableTiming) as exc_info:
                calculate_blended(1000.0, 2000.0, 2.0, follow_ons, initial_date=date(2024, 1, 1))

        assert exc_info.value.batch_index == 0
        assert "batch_index=0" in caplog.text

    @pytest.mark.parametrize(
        "calculate,args",
        [
            (calculate_outcome, (100.0, 999.0, 300.0)),
            (calculate_irr, (100.0, 1e6, 0.01)),
            (calculate_initial, (200.0, 999.0, 300.0)),
        ],
    )
    def test_float_overflow_logged_and_raised(self, caplog, calculate, args):
        """Переполнение float приходит как ResultOutOfRange и логируется."""
        with caplog.at_level(logging.WARNING, logger="src.engine.calculator"):
            with pytest.raises(ResultOutOfRange):
                calculate(*args)

        assert "aborted" in caplog.text

    def test_portfolio_error(self, portfolio_params):
        params = portfolio_params.model_copy(update={"management_fee_percent": 120.0})
        with pytest.raises(PercentageOutOfRange):
            calculate_portfolio(params)


# =============================================================================
# ТЕСТЫ: Контракт
# =============================================================================


class TestContract:
    """CalculationResult → calculation_result.json."""

    def test_irr_result_matches_contract(self):
        validate_calculation_result(calculate_irr(100.0, 150.0, 2.0).model_dump(mode="json"))

    def test_portfolio_result_matches_contract(self, portfolio_params):
        payload = calculate_portfolio(portfolio_params).model_dump(mode="json")

        assert payload["mode"] == "portfolio_unit_investment"
        validate_calculation_result(payload)

    def test_round_trip_through_json(self, portfolio_params):
        result = calculate_portfolio(portfolio_params)
        restored = CalculationResult.model_validate_json(result.model_dump_json())
        assert restored == result
