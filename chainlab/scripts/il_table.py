#!/usr/bin/env python
"""
Impermanent loss reference table and curve.

Prints IL / HODL / LP values for the reference price ratios and, optionally,
saves the IL curve against a flat fee line as a PNG.

Usage:
  python -m chainlab.scripts.il_table
  python -m chainlab.scripts.il_table --fee-apr 0.05 --plot il_curve.png
  python -m chainlab.scripts.il_table --csv il_table.csv
"""
import argparse

import pandas as pd

from chainlab.data.fixtures import il_reference
from chainlab.math.amm_math import lp_vs_hodl, il_curve, breakeven_ratios


def build_il_table(initial_price: float = 2000.0) -> pd.DataFrame:
    """IL reference rows sorted by price ratio."""
    rows = []
    for ref in il_reference():
        values = lp_vs_hodl(ref.r, initial_price=initial_price)
        rows.append({
            'label': ref.label,
            'r': ref.r,
            'il_pct': values.il * 100,
            'hodl_value': values.hodl_value,
            'lp_value': values.lp_value,
        })
    return pd.DataFrame(rows).sort_values('r').reset_index(drop=True)


def plot_il_curve(save_path: str, fee_apr: float, r_min: float = 0.1, r_max: float = 10.0):
    """IL curve (red) vs flat fee revenue (green)."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    rs, il = il_curve(r_min, r_max)
    r_low, r_high = breakeven_ratios(fee_apr)

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(rs, il * 100, color='#f43f5e', label='Impermanent loss')
    ax.axhline(fee_apr * 100, color='#22c55e', linestyle='--', label=f'Fee APR {fee_apr:.0%}')
    ax.axhline(0, color='grey', linewidth=0.5)
    for r in (r_low, r_high):
        if r_min <= r <= r_max:
            ax.axvline(r, color='grey', linestyle=':', linewidth=0.8)
    ax.set_xlabel('Price ratio (r)')
    ax.set_ylabel('%')
    ax.set_title('Impermanent loss vs fee revenue')
    ax.legend()
    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(description='Impermanent loss reference table')
    parser.add_argument('--initial-price', type=float, default=2000.0, help='Initial ETH price (USD)')
    parser.add_argument('--fee-apr', type=float, default=0.05, help='Annual fee revenue (0.05 = 5%%)')
    parser.add_argument('--plot', type=str, default=None, help='Save IL curve PNG to this path')
    parser.add_argument('--csv', type=str, default=None, help='Save table CSV to this path')
    args = parser.parse_args()

    table = build_il_table(args.initial_price)

    print("=" * 60)
    print(f"Impermanent loss (deposit: 1 ETH + {args.initial_price:,.0f} USDC)")
    print("=" * 60)
    print(table.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))

    r_low, r_high = breakeven_ratios(args.fee_apr)
    print(f"\nFee APR {args.fee_apr:.1%} covers IL for r in [{r_low:.3f}, {r_high:.3f}]")

    if args.csv:
        table.to_csv(args.csv, index=False)
        print(f"Saved: {args.csv}")
    if args.plot:
        plot_il_curve(args.plot, args.fee_apr)
        print(f"Saved: {args.plot}")


if __name__ == '__main__':
    main()
