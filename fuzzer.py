#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exact-recovery fuzzer for the share decoder and the Lagrange solver.

Each try:
  - draw a random integer polynomial of degree k-1 (constant term may be
    negative and wider than 64 bits),
  - evaluate it on k + extra distinct random x-values (zero and negatives
    allowed),
  - encode every y-value in a random base, build the JSON share object,
  - run it back through parse_share_set / find_secret and compare with the
    constant term.

Negative y-values cannot be written as a digit string, so the polynomial is
shifted up by a constant until every sampled y is non-negative.

On a mismatch the instance is dumped to --outfile and the run stops.
"""

import argparse, json, random, sys
from typing import Any, Dict, List, Optional, Tuple

from util import MAX_BASE, encode_value, interpolate_coeffs, poly_eval
from solve import find_secret, parse_share_set, vprint

# ------------------------------- Generators ----------------------------------
def rand_poly(k: int, coeff_bits: int, rng: random.Random) -> List[int]:
    bound = 1 << coeff_bits
    return [rng.randint(-bound, bound) for _ in range(k)]

def rand_xs(count: int, max_x: int, rng: random.Random) -> List[int]:
    if 2 * max_x + 1 < count:
        raise ValueError(f"cannot pick {count} distinct x in [-{max_x}, {max_x}]")
    return rng.sample(range(-max_x, max_x + 1), count)

def gen_instance(k: int, extra: int, max_x: int, coeff_bits: int,
                 rng: random.Random) -> Tuple[List[int], Dict[str, Any]]:
    """Return (coeffs, share_object) with every y >= 0."""
    xs = rand_xs(k + extra, max_x, rng)
    coeffs = rand_poly(k, coeff_bits, rng)
    ys = [poly_eval(coeffs, x) for x in xs]
    shift = -min(ys)
    if shift > 0:
        # the constant term moves with the shift
        coeffs[0] += shift
        ys = [y + shift for y in ys]

    data: Dict[str, Any] = {"keys": {"n": len(xs), "k": k}}
    for x, y in zip(xs, ys):
        base = rng.randint(2, MAX_BASE)
        # both numeric and string bases occur in share files
        data[str(x)] = {"base": base if rng.random() < 0.5 else str(base),
                        "value": encode_value(y, base)}
    return coeffs, data

# ---------------------------------- Runner -----------------------------------
def check_instance(coeffs: List[int], data: Dict[str, Any], division: str = "exact") -> Dict[str, Any]:
    shares = parse_share_set(data)
    got = find_secret(shares, division=division, out=lambda msg: None)
    points = [(r.x, poly_eval(coeffs, r.x)) for r in shares.records[:shares.k]]
    recovered = interpolate_coeffs(points)
    return {
        "expected": coeffs[0],
        "got": got,
        "ok": got == coeffs[0],
        "coeffs_ok": recovered == coeffs,
    }

def run_fuzz(tries: int = 200, k: int = 4, extra: int = 2, max_x: int = 50,
             coeff_bits: int = 80, division: str = "exact", seed: Optional[int] = None,
             outfile: str = "secret_counterexample.json", verbose: bool = False):
    rng = random.Random(seed)
    for t in range(tries):
        coeffs, data = gen_instance(k, extra, max_x, coeff_bits, rng)
        res = check_instance(coeffs, data, division=division)
        vprint(verbose, f"[try {t}] expected={res['expected']} got={res['got']}")
        if not (res["ok"] and res["coeffs_ok"]):
            info = {"try_index": t, "seed": seed, "division": division,
                    "coeffs": [str(c) for c in coeffs],
                    "expected": str(res["expected"]), "got": str(res["got"])}
            with open(outfile, "w") as f:
                json.dump({"params": info, "shares": data}, f, indent=2)
            print("MISMATCH on try", t, "saved to", outfile)
            print(json.dumps(info, indent=2))
            return False, outfile, info

    print(f"All {tries} tries recovered the constant term (k={k}, division={division}).")
    return True, None, None

# ----------------------------------- CLI -------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Exact secret-recovery fuzzer")
    ap.add_argument("--tries", type=int, default=200)
    ap.add_argument("--k", type=int, default=4)
    ap.add_argument("--extra", type=int, default=2,
                    help="points appended beyond k; they must not change the result")
    ap.add_argument("--max-x", type=int, default=50)
    ap.add_argument("--coeff-bits", type=int, default=80)
    ap.add_argument("--division", choices=["exact", "truncate"], default="exact")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--outfile", type=str, default="secret_counterexample.json")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.k < 1:
        raise SystemExit("Require k >= 1.")

    ok, _, _ = run_fuzz(
        tries=args.tries, k=args.k, extra=args.extra, max_x=args.max_x,
        coeff_bits=args.coeff_bits, division=args.division, seed=args.seed,
        outfile=args.outfile, verbose=args.verbose,
    )
    return 0 if ok else 1

if __name__ == "__main__":
    sys.exit(main())
