#!/usr/bin/env python
"""
Health factor sweep over collateral prices.

Default scenario: 10 ETH collateral, 12,000 USDC debt, WETH liquidation
threshold 82.5%, ETH from $1,000 to $3,000.

Usage:
  python -m chainlab.scripts.health_factor_table
  python -m chainlab.scripts.health_factor_table --collateral 5 --debt 6000 --step 100
"""
import argparse

import numpy as np
import pandas as pd

from chainlab.constants import HF_STATUS_LABELS, WETH_LIQUIDATION_THRESHOLD
from chainlab.math.lending_math import calc_health_factor, health_status, liquidation_price


def build_health_table(
    collateral_amount: float,
    debt_value: float,
    liquidation_threshold: float,
    price_min: float,
    price_max: float,
    step: float
) -> pd.DataFrame:
    """Health factor and status band for each price in [price_min, price_max]."""
    prices = np.arange(price_min, price_max + step / 2, step)
    rows = []
    for price in prices:
        hf = calc_health_factor(collateral_amount * price, debt_value, liquidation_threshold)
        status = health_status(hf)
        rows.append({
            'price': float(price),
            'collateral_value': collateral_amount * float(price),
            'health_factor': hf,
            'status': status,
            'band': HF_STATUS_LABELS[status],
        })
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description='Health factor sweep')
    parser.add_argument('--collateral', type=float, default=10.0, help='Collateral amount (ETH)')
    parser.add_argument('--debt', type=float, default=12000.0, help='Debt (USD)')
    parser.add_argument('--threshold', type=float, default=WETH_LIQUIDATION_THRESHOLD,
                        help='Liquidation threshold (0-1]')
    parser.add_argument('--price-min', type=float, default=1000.0)
    parser.add_argument('--price-max', type=float, default=3000.0)
    parser.add_argument('--step', type=float, default=250.0)
    args = parser.parse_args()

    table = build_health_table(
        args.collateral, args.debt, args.threshold,
        args.price_min, args.price_max, args.step
    )
    liq_price = liquidation_price(args.collateral, args.debt, args.threshold)

    print("=" * 60)
    print(f"Health factor: {args.collateral:g} ETH collateral, {args.debt:,.0f} USD debt, "
          f"threshold {args.threshold:.1%}")
    print("=" * 60)
    print(table.to_string(index=False, float_format=lambda v: f"{v:,.3f}"))
    print(f"\nLiquidation price: ${liq_price:,.0f}")


if __name__ == '__main__':
    main()
