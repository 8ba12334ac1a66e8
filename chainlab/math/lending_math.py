"""
Lending Math - Health Factor 및 청산

Aave 스타일 대출 포지션의 표시용 계산. 상태 변경이나 실제 청산은 없음.

핵심 공식:
    HF = (collateral × liquidation_threshold) / debt
    liquidation_price = debt / (collateral_amount × liquidation_threshold)
    seized_value = debt_repaid × (1 + bonus)
"""

import math
from typing import List, NamedTuple

from ..constants import (
    HF_LIQUIDATION,
    HF_DANGER,
    HF_WARNING,
    DEFAULT_CLOSE_FACTOR,
    DEFAULT_LIQUIDATION_BONUS,
)
from ..data.types import Step, StepValue


class LiquidationOutcome(NamedTuple):
    """청산 시뮬레이션 결과"""
    debt_repaid: float        # 청산자가 상환한 부채 (USD)
    collateral_seized: float  # 청산자가 가져간 담보 수량
    collateral_value: float   # 가져간 담보 가치 (USD)
    liquidator_profit: float  # 보너스 = debt_repaid × bonus


def calc_health_factor(
    collateral_value: float,
    debt_value: float,
    liquidation_threshold: float
) -> float:
    """Health Factor

    Args:
        collateral_value: 담보 가치 (USD)
        debt_value: 부채 가치 (USD)
        liquidation_threshold: 청산 임계값 (0, 1]

    Returns:
        HF. 부채가 0이면 math.inf

    Example:
        >>> calc_health_factor(2000, 1000, 0.5)
        1.0
    """
    if debt_value == 0:
        return math.inf
    return (collateral_value * liquidation_threshold) / debt_value


def health_status(hf: float) -> str:
    """HF → LIQUIDATED / DANGER / WARNING / SAFE"""
    if hf < HF_LIQUIDATION:
        return "LIQUIDATED"
    if hf < HF_DANGER:
        return "DANGER"
    if hf < HF_WARNING:
        return "WARNING"
    return "SAFE"


def liquidation_price(
    collateral_amount: float,
    debt_value: float,
    liquidation_threshold: float
) -> float:
    """HF = 1 이 되는 담보 토큰 가격

    Raises:
        ValueError: collateral_amount 또는 liquidation_threshold <= 0
    """
    if collateral_amount <= 0 or liquidation_threshold <= 0:
        raise ValueError("담보 수량과 청산 임계값은 양수여야 합니다")
    return debt_value / (collateral_amount * liquidation_threshold)


def simulate_liquidation(
    debt_value: float,
    collateral_price: float,
    close_factor: float = DEFAULT_CLOSE_FACTOR,
    bonus: float = DEFAULT_LIQUIDATION_BONUS
) -> LiquidationOutcome:
    """청산자 관점의 한 번의 liquidationCall

    Example:
        부채 12,000 USDC, ETH $1,400, close factor 50%, 보너스 5%
        → 6,000 상환, 4.5 ETH ($6,300) 획득, 이익 $300
    """
    if collateral_price <= 0:
        raise ValueError(f"담보 가격은 양수여야 합니다: {collateral_price}")
    if not 0 < close_factor <= 1:
        raise ValueError(f"close_factor는 (0, 1] 범위여야 합니다: {close_factor}")

    debt_repaid = debt_value * close_factor
    collateral_value = debt_repaid * (1 + bonus)
    return LiquidationOutcome(
        debt_repaid=debt_repaid,
        collateral_seized=collateral_value / collateral_price,
        collateral_value=collateral_value,
        liquidator_profit=debt_repaid * bonus,
    )


def liquidation_steps(
    collateral_amount: float,
    debt_value: float,
    start_price: float,
    crash_price: float,
    liquidation_threshold: float,
    close_factor: float = DEFAULT_CLOSE_FACTOR,
    bonus: float = DEFAULT_LIQUIDATION_BONUS
) -> List[Step]:
    """대출 → 가격 하락 → 청산 step-through 레코드"""
    hf_start = calc_health_factor(collateral_amount * start_price, debt_value, liquidation_threshold)
    hf_crash = calc_health_factor(collateral_amount * crash_price, debt_value, liquidation_threshold)
    outcome = simulate_liquidation(debt_value, crash_price, close_factor, bonus)

    remaining_collateral = collateral_amount - outcome.collateral_seized
    remaining_debt = debt_value - outcome.debt_repaid
    hf_after = calc_health_factor(remaining_collateral * crash_price, remaining_debt, liquidation_threshold)

    return [
        Step(
            title="Step 1: borrow",
            description="Collateral is deposited and a loan is taken against it.",
            formula="HF = (collateral * threshold) / debt",
            values=(
                StepValue("Collateral", f"{collateral_amount:g} @ ${start_price:,.0f}"),
                StepValue("Debt", f"{debt_value:,.0f}"),
                StepValue("Health Factor", f"{hf_start:.3f} ({health_status(hf_start)})"),
            ),
        ),
        Step(
            title="Step 2: price drop",
            description="Collateral price falls while the debt stays the same.",
            values=(
                StepValue("Price", f"${start_price:,.0f} -> ${crash_price:,.0f}"),
                StepValue("Health Factor", f"{hf_crash:.3f} ({health_status(hf_crash)})"),
            ),
        ),
        Step(
            title="Step 3: liquidation allowed" if hf_crash < HF_LIQUIDATION else "Step 3: position still healthy",
            description="Any address may call liquidationCall() once HF < 1.",
            values=(
                StepValue("Close factor", f"{close_factor:.0%} = max {outcome.debt_repaid:,.0f}"),
                StepValue("Liquidation bonus", f"{bonus:.0%}"),
            ),
        ),
        Step(
            title="Step 4: liquidator repays debt",
            description="The liquidator receives collateral worth debt_repaid * (1 + bonus).",
            formula="seized = debt_repaid * (1 + bonus) / price",
            values=(
                StepValue("Debt repaid", f"{outcome.debt_repaid:,.0f}"),
                StepValue("Collateral seized", f"{outcome.collateral_seized:.2f} (${outcome.collateral_value:,.0f})"),
                StepValue("Liquidator profit", f"${outcome.liquidator_profit:,.0f}"),
            ),
        ),
        Step(
            title="Step 5: position after liquidation",
            description="Part of the debt is gone and the health factor recovers.",
            values=(
                StepValue("Remaining collateral", f"{remaining_collateral:.2f}"),
                StepValue("Remaining debt", f"{remaining_debt:,.0f}"),
                StepValue("Health Factor", f"{hf_after:.3f} ({health_status(hf_after)})"),
            ),
        ),
    ]
