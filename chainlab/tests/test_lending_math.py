"""
Lending Math 테스트

Health Factor와 청산 시뮬레이션을 테스트합니다.
"""

import math

import pytest

from ..math.lending_math import (
    calc_health_factor,
    health_status,
    liquidation_price,
    simulate_liquidation,
    liquidation_steps,
)


class TestHealthFactor:
    """calc_health_factor 테스트"""

    def test_boundary(self):
        assert calc_health_factor(2000, 1000, 0.5) == 1.0

    def test_no_debt(self):
        assert calc_health_factor(2000, 0, 0.825) == math.inf

    def test_reference_position(self):
        """10 ETH @ $2,000, 부채 12,000, LT 82.5%"""
        assert calc_health_factor(20_000, 12_000, 0.825) == pytest.approx(1.375)
        assert calc_health_factor(14_000, 12_000, 0.825) == pytest.approx(0.9625)

    def test_monotonic_in_collateral(self):
        values = [calc_health_factor(c, 1000, 0.8) for c in range(500, 3000, 250)]
        assert values == sorted(values)


class TestHealthStatus:
    """health_status 테스트"""

    def test_statuses(self):
        assert health_status(0.99) == "LIQUIDATED"
        assert health_status(1.0) == "DANGER"
        assert health_status(1.19) == "DANGER"
        assert health_status(1.2) == "WARNING"
        assert health_status(1.5) == "SAFE"
        assert health_status(math.inf) == "SAFE"


class TestLiquidation:
    """청산 테스트"""

    def test_liquidation_price(self):
        price = liquidation_price(10, 12_000, 0.825)
        assert price == pytest.approx(12_000 / 8.25)
        assert calc_health_factor(10 * price, 12_000, 0.825) == pytest.approx(1.0)

    def test_liquidation_price_invalid(self):
        with pytest.raises(ValueError):
            liquidation_price(0, 12_000, 0.825)
        with pytest.raises(ValueError):
            liquidation_price(10, 12_000, 0)

    def test_simulate(self):
        outcome = simulate_liquidation(12_000, 1_400)
        assert outcome.debt_repaid == pytest.approx(6_000)
        assert outcome.collateral_seized == pytest.approx(4.5)
        assert outcome.collateral_value == pytest.approx(6_300)
        assert outcome.liquidator_profit == pytest.approx(300)

    def test_simulate_invalid(self):
        with pytest.raises(ValueError):
            simulate_liquidation(12_000, 0)
        with pytest.raises(ValueError):
            simulate_liquidation(12_000, 1_400, close_factor=1.5)

    def test_steps(self):
        steps = liquidation_steps(10, 12_000, 2_000, 1_400, 0.825)
        assert len(steps) == 5
        assert steps[0].values[2].value == "1.375 (WARNING)"
        assert steps[1].values[1].value.endswith("(LIQUIDATED)")
        assert steps[2].title == "Step 3: liquidation allowed"
        assert steps[4].values[2].value.startswith("1.059")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
