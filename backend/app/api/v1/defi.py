"""
DeFi Endpoints

Impermanent loss, health factor, Uniswap V2 swaps, liquidations and the
static reference tables (bridge hacks, Chainlink feeds, IL reference points).
"""
from fastapi import APIRouter, HTTPException
from dataclasses import asdict
from typing import List
import math

from chainlab.constants import HF_STATUS_LABELS
from chainlab.data.fixtures import bridge_hacks, price_feeds, il_reference
from chainlab.math.amm_math import (
    lp_vs_hodl,
    fee_breakeven,
    breakeven_ratios,
    swap,
    price_impact,
)
from chainlab.math.lending_math import (
    calc_health_factor,
    health_status,
    liquidation_price,
    simulate_liquidation,
)

from app.api.schemas import (
    ImpermanentLossRequest,
    ImpermanentLossResponse,
    HealthFactorRequest,
    HealthFactorResponse,
    SwapRequest,
    SwapResponse,
    LiquidationRequest,
    LiquidationResponse,
)
from app.config import settings

router = APIRouter()


@router.post("/defi/impermanent-loss", response_model=ImpermanentLossResponse)
async def impermanent_loss(request: ImpermanentLossRequest):
    """
    V2 impermanent loss for a price ratio

    Compares an LP position with holding 1 token + its value in stablecoins.
    When fee_apr > 0 also returns the price ratios where fees cover IL.
    """
    values = lp_vs_hodl(request.price_ratio, initial_price=request.initial_price)
    response = ImpermanentLossResponse(
        price_ratio=request.price_ratio,
        il=values.il,
        hodl_value=values.hodl_value,
        lp_value=values.lp_value,
        net_with_fees=fee_breakeven(request.price_ratio, request.fee_apr)
    )
    if request.fee_apr > 0:
        response.breakeven_low, response.breakeven_high = breakeven_ratios(request.fee_apr)
    return response


@router.post("/defi/health-factor", response_model=HealthFactorResponse)
async def health_factor(request: HealthFactorRequest):
    """Lending health factor, status band and (optionally) liquidation price"""
    hf = calc_health_factor(
        request.collateral_value,
        request.debt_value,
        request.liquidation_threshold
    )

    status = health_status(hf)
    liq_price = None
    if request.collateral_amount is not None:
        liq_price = liquidation_price(
            request.collateral_amount,
            request.debt_value,
            request.liquidation_threshold
        )

    return HealthFactorResponse(
        # JSON has no Infinity
        health_factor=None if math.isinf(hf) else hf,
        status=status,
        status_range=HF_STATUS_LABELS[status],
        liquidation_price=liq_price
    )


@router.post("/defi/swap", response_model=SwapResponse)
async def v2_swap(request: SwapRequest):
    """Uniswap V2 getAmountOut with integer rounding"""
    try:
        result = swap(request.amount_in, request.reserve_in, request.reserve_out, request.fee_bps)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result.amount_out == 0:
        print(f"[DeFi] Swap of {request.amount_in} rounds down to zero output")

    return SwapResponse(
        **result._asdict(),
        price_impact=price_impact(request.amount_in, request.reserve_in, request.reserve_out, request.fee_bps)
    )


@router.post("/defi/liquidation", response_model=LiquidationResponse)
async def liquidation(request: LiquidationRequest):
    """One liquidationCall with close factor and bonus"""
    try:
        outcome = simulate_liquidation(
            request.debt_value,
            request.collateral_price,
            request.close_factor,
            request.bonus
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return LiquidationResponse(**outcome._asdict())


def _load_table(loader, name: str) -> List[dict]:
    try:
        return [asdict(record) for record in loader(settings.FIXTURE_DIR)]
    except (FileNotFoundError, ValueError) as e:
        print(f"[Fixtures] Error loading {name}: {e}")
        raise HTTPException(status_code=500, detail=f"Fixture table unavailable: {name}")


@router.get("/defi/bridge-hacks")
async def get_bridge_hacks():
    """Major bridge exploits (loss in million USD)"""
    records = _load_table(bridge_hacks, "bridge_hacks")
    return {
        "records": records,
        "total_loss_musd": sum(r["loss_musd"] for r in records)
    }


@router.get("/defi/price-feeds")
async def get_price_feeds():
    """Chainlink mainnet feed addresses, heartbeats and deviation thresholds"""
    return {"records": _load_table(price_feeds, "price_feeds")}


@router.get("/defi/il-reference")
async def get_il_reference():
    """IL reference points with the computed loss for each ratio"""
    records = _load_table(il_reference, "il_reference")
    for record in records:
        record["il"] = lp_vs_hodl(record["r"]).il
    return {"records": records}
