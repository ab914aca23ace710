#!/usr/bin/env python3
# plot_shares.py
# Draw the selected shares and the interpolated polynomial through them.

import argparse, sys
from typing import List, Optional

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from util import interpolate_coeffs, lagrange_at_zero
from solve import lift_int_str_limit, load_share_set, select_points


def plot_shares(points, outfile: str, samples: int = 400, title: Optional[str] = None) -> str:
    coeffs = interpolate_coeffs(points)
    secret = lagrange_at_zero(points)

    xs = [x for x, _ in points]
    lo, hi = min(xs + [0]), max(xs + [0])
    pad = max(1, (hi - lo) * 0.1)
    grid = np.linspace(lo - pad, hi + pad, samples)
    # float only for drawing; the secret itself comes from exact arithmetic
    fc = np.array([float(c) for c in reversed(coeffs)])
    curve = np.polyval(fc, grid)

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(grid, curve, color="black", linewidth=1.5,
            label=f"interpolating polynomial (degree {len(points) - 1})")
    ax.scatter(xs, [float(y) for _, y in points], color="blue", s=40, zorder=5, label="shares")
    ax.scatter([0], [float(secret)], color="red", s=60, zorder=6, label="P(0)")
    ax.annotate(
        f"secret = {secret}",
        xy=(0, float(secret)),
        xytext=(0.05, 0.9), textcoords="axes fraction",
        arrowprops=dict(arrowstyle="->", lw=1),
        fontsize=9,
    )

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title or f"Lagrange reconstruction from {len(points)} shares")
    ax.legend(loc="lower right", fontsize=8)
    ax.grid(alpha=0.2)

    fig.tight_layout()
    fig.savefig(outfile)
    plt.close(fig)
    return outfile


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Plot shares and the reconstructed polynomial.")
    ap.add_argument("path", help="JSON share file")
    ap.add_argument("--out", type=str, default="shares.png")
    ap.add_argument("--samples", type=int, default=400)
    args = ap.parse_args(argv)
    lift_int_str_limit()

    try:
        points = select_points(load_share_set(args.path))
        plot_shares(points, args.out, samples=args.samples)
    except (OSError, ValueError, OverflowError) as e:
        print(f"Error processing file: {e}", file=sys.stderr)
        return 1
    print("saved", args.out)
    return 0

if __name__ == "__main__":
    sys.exit(main())
