#!/usr/bin/env python3
# solve.py
# CLI entrypoint: read a share file, decode the first k points, print P(0).

import argparse, json, sys
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from util import Point, decode_value, lagrange_at_zero, parse_base


class InputFormatError(ValueError):
    pass

class InsufficientSharesError(InputFormatError):
    pass


class PointRecord(NamedTuple):
    x: int
    base: int
    value: str

class ShareSet(NamedTuple):
    n: Optional[int]
    k: int
    records: List[PointRecord]
    available: int


def vprint(verbose: bool, *args, **kwargs):
    if verbose:
        print(*args, file=sys.stderr, **kwargs)

def lift_int_str_limit():
    # Python 3.11+ caps int <-> str conversion at 4300 digits by default
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)


# ---- Parsing ----
def _parse_count(meta: Dict, name: str, required: bool) -> Optional[int]:
    if name not in meta:
        if required:
            raise InputFormatError(f'"keys" has no "{name}"')
        return None
    raw = meta[name]
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise InputFormatError(f'"keys.{name}" must be an integer; got {raw!r}')
    try:
        return int(raw)
    except ValueError:
        raise InputFormatError(f'"keys.{name}" must be an integer; got {raw!r}') from None

def parse_record(key: str, rec) -> PointRecord:
    try:
        x = int(key, 10)
    except ValueError:
        raise InputFormatError(f"point key {key!r} is not a decimal integer") from None
    if not isinstance(rec, dict) or "base" not in rec or "value" not in rec:
        raise InputFormatError(f'point {key!r} needs "base" and "value"')
    if not isinstance(rec["value"], str):
        raise InputFormatError(f'point {key!r}: "value" must be a string')
    return PointRecord(x, parse_base(rec["base"]), rec["value"])

def parse_share_set(data) -> ShareSet:
    """Split the raw JSON object into metadata and the first k point records.

    Entries past the first k are counted but never parsed, so a malformed
    record there does not abort the run.
    """
    if not isinstance(data, dict):
        raise InputFormatError("top-level JSON value must be an object")
    meta = data.get("keys")
    if not isinstance(meta, dict):
        raise InputFormatError('missing "keys" metadata object')
    k = _parse_count(meta, "k", required=True)
    if k < 1:
        raise InputFormatError(f"threshold k must be positive; got {k}")
    n = _parse_count(meta, "n", required=False)

    records = []
    available = 0
    for key, rec in data.items():
        if key == "keys": continue
        available += 1
        if len(records) < k:
            records.append(parse_record(key, rec))
    return ShareSet(n, k, records, available)

def select_points(shares: ShareSet) -> List[Point]:
    if len(shares.records) < shares.k:
        raise InsufficientSharesError(
            f"need {shares.k} points, input has only {len(shares.records)}")
    return [(r.x, decode_value(r.value, r.base)) for r in shares.records[:shares.k]]

def load_share_set(path: str) -> ShareSet:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_share_set(data)


# ---- Orchestration ----
def recover(shares: ShareSet, division: str = "exact",
            out: Callable[[str], None] = print, verbose: bool = False) -> Tuple[List[Point], int]:
    """Decode the first k points once and interpolate; returns (points, secret)."""
    if shares.n is not None and shares.n != shares.available:
        vprint(verbose, f"[info] keys.n={shares.n} but {shares.available} points present")
    points = select_points(shares)
    vprint(verbose, f"[info] decoded points: {points}")
    out(f"Using {shares.k} points for interpolation...")
    return points, lagrange_at_zero(points, division=division)

def find_secret(shares: ShareSet, division: str = "exact",
                out: Callable[[str], None] = print, verbose: bool = False) -> int:
    return recover(shares, division=division, out=out, verbose=verbose)[1]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Recover P(0) from base-encoded polynomial shares by exact Lagrange interpolation.")
    ap.add_argument("path", nargs="?", help="JSON share file")
    ap.add_argument("--division", choices=["exact", "truncate"], default="exact",
                    help="exact: fail on a non-integer result; truncate: per-term division toward zero")
    ap.add_argument("--json", action="store_true", help="Emit the result as a JSON record.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print decoded points to stderr.")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.path is None:
        ap.print_usage(sys.stderr)
        print("Error: Please provide the JSON file as an argument.", file=sys.stderr)
        return 1

    lift_int_str_limit()
    try:
        shares = load_share_set(args.path)
        if args.json:
            points, secret = recover(shares, division=args.division,
                                     out=lambda msg: None, verbose=args.verbose)
            print(json.dumps({
                "k": shares.k, "n": shares.n,
                "points": [[x, str(y)] for x, y in points],
                "secret": str(secret),
            }, indent=2))
        else:
            secret = find_secret(shares, division=args.division, verbose=args.verbose)
            print("\nThe calculated secret is:")
            print(secret)
    except (OSError, ValueError) as e:
        # JSONDecodeError is a ValueError
        print(f"Error processing file: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
