"""
AMM Math - Impermanent Loss 및 Uniswap V2 스왑

References:
- IL 공식: IL = 2·√r / (1 + r) − 1,  r = P_new / P_initial
- Uniswap V2 Core: UniswapV2Library.getAmountOut (정수 연산, 997/1000)

핵심 공식:
    amountInWithFee = amountIn × 997
    amountOut = amountInWithFee × reserveOut / (reserveIn × 1000 + amountInWithFee)
"""

import math
from typing import List, NamedTuple, Tuple

import numpy as np

from ..constants import V2_FEE_BPS, BPS_DENOMINATOR
from ..data.types import Step, StepValue


class PositionValues(NamedTuple):
    """LP vs HODL 가치 비교 결과"""
    hodl_value: float
    lp_value: float
    il: float


class SwapResult(NamedTuple):
    """V2 스왑 결과"""
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def calc_impermanent_loss(r: float) -> float:
    """V2 (무한 범위) Impermanent Loss

    Args:
        r: 가격 비율 P_new / P_initial (> 0)

    Returns:
        IL 비율, (-1, 0] 범위. r <= 0 이면 NaN (정의역 밖)

    Example:
        >>> calc_impermanent_loss(4.0)
        -0.2
    """
    if r <= 0:
        return float("nan")
    return 2 * math.sqrt(r) / (1 + r) - 1


def lp_vs_hodl(
    r: float,
    initial_price: float = 2000.0,
    token_amount: float = 1.0
) -> PositionValues:
    """동일 가치 예치 (token_amount ETH + token_amount × initial_price USDC) 비교

    HODL = ETH × 새 가격 + USDC
    LP = HODL × (1 + IL)
    """
    final_price = initial_price * r
    hodl_value = token_amount * final_price + token_amount * initial_price
    il = calc_impermanent_loss(r)
    return PositionValues(hodl_value=hodl_value, lp_value=hodl_value * (1 + il), il=il)


def il_curve(
    r_min: float = 0.1,
    r_max: float = 10.0,
    num: int = 199
) -> Tuple[np.ndarray, np.ndarray]:
    """차트용 IL 곡선 샘플 (r, IL)"""
    if r_min <= 0 or r_max <= r_min:
        raise ValueError(f"잘못된 r 범위: [{r_min}, {r_max}]")
    rs = np.linspace(r_min, r_max, num)
    return rs, 2 * np.sqrt(rs) / (1 + rs) - 1


def fee_breakeven(r: float, fee_apr: float) -> float:
    """수수료 수익 + IL (양수면 LP가 이득)

    Args:
        r: 가격 비율
        fee_apr: 연 수수료 수익률 (0.05 = 5%)
    """
    return fee_apr + calc_impermanent_loss(r)


def breakeven_ratios(fee_apr: float) -> Tuple[float, float]:
    """IL = -fee_apr 가 되는 두 가격 비율 (r_low, r_high)

    IL(r) = -f  →  2√r = (1 - f)(1 + r)
    t = √r 로 두면 (1 - f)t^2 - 2t + (1 - f) = 0, 두 근은 역수 관계.
    """
    if not 0 <= fee_apr < 1:
        raise ValueError(f"fee_apr는 [0, 1) 범위여야 합니다: {fee_apr}")
    c = 1 - fee_apr
    disc = 1 - c * c
    t_high = (1 + math.sqrt(disc)) / c
    r_high = t_high ** 2
    return 1 / r_high, r_high


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = V2_FEE_BPS
) -> int:
    """Uniswap V2 getAmountOut (정수 나눗셈, 내림)

    Raises:
        ValueError: amount_in <= 0 또는 reserve <= 0
    """
    if amount_in <= 0:
        raise ValueError(f"amount_in은 양수여야 합니다: {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"유동성이 부족합니다: reserves=({reserve_in}, {reserve_out})")

    # fee_bps=30 → 9970/10000 == 997/1000
    amount_in_with_fee = amount_in * (BPS_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * BPS_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


def swap(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int = V2_FEE_BPS) -> SwapResult:
    """스왑 후 리저브와 k 변화 (수수료가 풀에 남아 k가 증가)"""
    amount_out = get_amount_out(amount_in, reserve_in, reserve_out, fee_bps)
    new_in = reserve_in + amount_in
    new_out = reserve_out - amount_out
    return SwapResult(
        amount_out=amount_out,
        new_reserve_in=new_in,
        new_reserve_out=new_out,
        k_before=reserve_in * reserve_out,
        k_after=new_in * new_out,
    )


def price_impact(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int = V2_FEE_BPS) -> float:
    """실행가 vs 현물가 차이 (음수 = 불리)"""
    spot = reserve_out / reserve_in
    effective = get_amount_out(amount_in, reserve_in, reserve_out, fee_bps) / amount_in
    return effective / spot - 1


def swap_steps(amount_in: int, reserve_in: int, reserve_out: int) -> List[Step]:
    """V2 스왑 step-through 레코드 (기본 0.3% 수수료)"""
    result = swap(amount_in, reserve_in, reserve_out)
    with_fee = amount_in * 997
    numerator = reserve_out * with_fee
    denominator = reserve_in * 1000 + with_fee
    effective = result.amount_out / amount_in
    impact = price_impact(amount_in, reserve_in, reserve_out)

    return [
        Step(
            title="Pool state",
            description="Reserves set the spot price. All numbers are uint256 integers.",
            values=(
                StepValue("reserveIn", f"{reserve_in:,}"),
                StepValue("reserveOut", f"{reserve_out:,}"),
                StepValue("k = reserveIn * reserveOut", f"{result.k_before:,}"),
                StepValue("Spot price", f"{reserve_out / reserve_in:,.1f}"),
            ),
        ),
        Step(
            title="Step 1: input and fee",
            description="Multiply by 997 instead of subtracting 0.3%; there is no float in Solidity.",
            formula="amountIn * 997",
            values=(
                StepValue("amountIn", f"{amount_in:,}"),
                StepValue("amountInWithFee", f"{amount_in:,} * 997 = {with_fee:,}"),
            ),
        ),
        Step(
            title="Step 2: numerator",
            description="Output reserve times fee-adjusted input.",
            formula="reserveOut * amountInWithFee",
            values=(StepValue("numerator", f"{numerator:,}"),),
        ),
        Step(
            title="Step 3: denominator",
            description="Input reserve scaled by 1000 plus fee-adjusted input.",
            formula="reserveIn * 1000 + amountInWithFee",
            values=(StepValue("denominator", f"{denominator:,}"),),
        ),
        Step(
            title="Step 4: integer division",
            description="Solidity integer division rounds down.",
            formula="numerator / denominator",
            values=(
                StepValue("amountOut", f"{result.amount_out:,}"),
                StepValue("Effective price", f"{effective:,.1f}"),
                StepValue("Price impact + fee", f"{impact * 100:.2f}%"),
            ),
        ),
        Step(
            title="Step 5: new reserves and k check",
            description="The whole input (fee included) stays in the pool, so k grows.",
            formula="k_after >= k_before",
            values=(
                StepValue("New reserveIn", f"{result.new_reserve_in:,}"),
                StepValue("New reserveOut", f"{result.new_reserve_out:,}"),
                StepValue("New k", f"{result.k_after:,}"),
                StepValue("k grew?", str(result.k_after >= result.k_before)),
            ),
        ),
    ]
