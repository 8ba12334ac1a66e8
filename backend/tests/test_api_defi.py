"""
API tests for the DeFi endpoints
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


class TestImpermanentLoss:
    """POST /defi/impermanent-loss"""

    def test_price_4x(self):
        data = client.post("/api/v1/defi/impermanent-loss", json={"price_ratio": 4.0}).json()
        assert data["il"] == pytest.approx(-0.2)
        assert data["hodl_value"] == pytest.approx(10000.0)
        assert data["lp_value"] == pytest.approx(8000.0)
        assert data["breakeven_low"] is None

    def test_breakeven(self):
        data = client.post(
            "/api/v1/defi/impermanent-loss",
            json={"price_ratio": 2.0, "fee_apr": 0.05}
        ).json()
        assert data["breakeven_low"] < 1 < data["breakeven_high"]
        assert data["net_with_fees"] == pytest.approx(0.05 + data["il"])

    def test_non_positive_ratio(self):
        response = client.post("/api/v1/defi/impermanent-loss", json={"price_ratio": 0})
        assert response.status_code == 422


class TestHealthFactor:
    """POST /defi/health-factor"""

    def test_reference_position(self):
        payload = {
            "collateral_value": 20000.0,
            "debt_value": 12000.0,
            "liquidation_threshold": 0.825,
            "collateral_amount": 10.0
        }
        data = client.post("/api/v1/defi/health-factor", json=payload).json()
        assert data["health_factor"] == pytest.approx(1.375)
        assert data["status"] == "WARNING"
        assert data["status_range"] == "1.2 <= HF < 1.5"
        assert data["liquidation_price"] == pytest.approx(12000 / 8.25)

    def test_no_debt(self):
        payload = {"collateral_value": 1000.0, "debt_value": 0, "liquidation_threshold": 0.8}
        data = client.post("/api/v1/defi/health-factor", json=payload).json()
        assert data["health_factor"] is None
        assert data["status"] == "SAFE"
        assert data["status_range"] == "HF >= 1.5"

    def test_threshold_bounds(self):
        payload = {"collateral_value": 1000.0, "debt_value": 500.0, "liquidation_threshold": 1.5}
        response = client.post("/api/v1/defi/health-factor", json=payload)
        assert response.status_code == 422


class TestSwapAndLiquidation:
    """POST /defi/swap and /defi/liquidation"""

    def test_swap(self):
        payload = {"amount_in": 10, "reserve_in": 1000, "reserve_out": 2000000}
        data = client.post("/api/v1/defi/swap", json=payload).json()
        assert data["amount_out"] == 19743
        assert data["k_after"] >= data["k_before"]
        assert data["price_impact"] < 0

    def test_swap_validation(self):
        payload = {"amount_in": 0, "reserve_in": 1000, "reserve_out": 2000000}
        assert client.post("/api/v1/defi/swap", json=payload).status_code == 422

    def test_liquidation(self):
        payload = {"debt_value": 12000.0, "collateral_price": 1400.0}
        data = client.post("/api/v1/defi/liquidation", json=payload).json()
        assert data["debt_repaid"] == pytest.approx(6000)
        assert data["collateral_seized"] == pytest.approx(4.5)
        assert data["liquidator_profit"] == pytest.approx(300)


class TestReferenceTables:
    """GET fixture tables"""

    def test_bridge_hacks(self):
        data = client.get("/api/v1/defi/bridge-hacks").json()
        assert len(data["records"]) == 5
        assert data["total_loss_musd"] == 1810

    def test_price_feeds(self):
        data = client.get("/api/v1/defi/price-feeds").json()
        pairs = [r["pair"] for r in data["records"]]
        assert "ETH/USD" in pairs

    def test_il_reference(self):
        data = client.get("/api/v1/defi/il-reference").json()
        assert len(data["records"]) == 7
        assert all(r["il"] <= 0 for r in data["records"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
