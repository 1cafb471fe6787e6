#!/usr/bin/env python3
# S7_Search.py version 1
"""
Base-7 digit sum conjecture: exhaustive counterexample search

Purpose
-------
For every prime p, let S7(p) be the sum of the digits of p written in base 7.
The (refined) conjecture states that S7(p) is always one of

    1,  a prime,  a semiprime (two prime factors with multiplicity),  a prime power p^k.

This program scans every integer in [2, limit], and for each prime p checks
the four-way disjunction above.  A prime whose digit sum fails all four tests
is a violation; it is printed the moment it is found and collected into the
final report.

Why the search is fast to state and slow to run
-----------------------------------------------
Since 7 = 1 (mod 6), S7(p) = p (mod 6), so for p > 3 the digit sum is odd and
coprime to 3.  The smallest such value with three or more prime factors and two
distinct ones is 175 = 5*5*7, and a digit sum that large needs at least 30
base-7 digits.  A scan to any feasible limit is therefore expected to confirm
the conjecture; the program exists to certify that by brute force.

Parallel layout
---------------
[2, limit] is split into contiguous, disjoint sub-ranges, one per worker
process.  Each worker runs a tight synchronous loop over its range and prints
progress lines and violation blocks while holding a single shared lock (held
only for the print, never across the arithmetic).  Every worker returns its
violations to the driver, which collects them in completion order, waits for
all workers, and returns a SearchReport.  The CLI prints the report and exits 0
whether or not violations were found.

How to run
----------
1) Default scan to 10^10 on every core:
       python3 S7_Search.py
2) Smaller scan, 4 workers, progress every million numbers:
       python3 S7_Search.py 100000000 --workers 4 --progress_interval 1000000
3) Machine-readable report and sympy re-verification of any violation:
       python3 S7_Search.py 1000000 --json --verify

A non-integer (or non-positive, or larger than MAX_LIMIT) limit argument is
ignored and the default limit is used.

Use --version to print a machine-readable environment/version block.

Version 1
---------
* Trial-division predicates for primality, semiprimality, prime powers
* Partitioner that skips empty sub-ranges when limit < workers
* Worker pool with a shared print lock; driver returns a SearchReport
* --json report, --verify re-check with sympy, --debug/--assertions switches
"""

from __future__ import annotations

import argparse
import hashlib
import json
import os
import platform
import subprocess
import sys
import time
from dataclasses import dataclass, field
from multiprocessing import get_context
from typing import Dict, List, Optional, Tuple

import sympy
from sympy.ntheory.digits import digits as sympy_digits


program_name, program_version = "S7_Search", 1

DEFAULT_LIMIT = 10_000_000_000
MAX_LIMIT = 2**63 - 1  # signed 64-bit scan domain
PROGRESS_INTERVAL = 10_000_000
BASE = 7


# ----------------------------- switches (set by args) -----------------------------
DEBUG = False
ASSERTIONS = False
_PRINT_LOCK = None


# ----------------------------- small utilities -----------------------------
def utc_now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

def script_digest(path: str) -> str:
    with open(path, "rb") as f:
        return hashlib.sha256(f.read()).hexdigest()

def git_head(repo_dir: str) -> Optional[str]:
    # None outside a checkout or when git is missing
    try:
        r = subprocess.run(["git", "-C", repo_dir, "rev-parse", "--short=12", "HEAD"],
                           capture_output=True, text=True)
    except OSError:
        return None
    head = r.stdout.strip()
    return head if r.returncode == 0 and head else None

def env_block(script_path: str, argv: List[str]) -> Dict[str, object]:
    return {
        "program": program_name,
        "program_version": program_version,
        "script_path": os.path.abspath(script_path),
        "script_sha256": script_digest(script_path),
        "git_commit": git_head(os.path.dirname(os.path.abspath(script_path))),
        "command_line": " ".join(argv),
        "python_version": sys.version.replace("\n", " "),
        "platform": platform.platform(),
        "sympy_version": sympy.__version__,
        "cpu_count": os.cpu_count(),
    }


# ----------------------------- arithmetic predicates -----------------------------
def is_prime(n: int) -> bool:
    """Deterministic 6k±1 trial division."""
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True

def sum_of_base7_digits(n: int) -> int:
    if n < 0:
        raise ValueError("Negative numbers not supported")
    total = 0
    while n > 0:
        total += n % BASE
        n //= BASE
    return total

def base7_digits(n: int) -> List[int]:
    """Return the base-7 digits of n, least significant first ([0] for n == 0)."""
    if n < 0:
        raise ValueError("Negative numbers not supported")
    if n == 0:
        return [0]
    digits: List[int] = []
    while n > 0:
        digits.append(n % BASE)
        n //= BASE
    return digits

def reconstruct_from_base7(digits: List[int]) -> int:
    n = 0
    for d in reversed(digits):
        n = n * BASE + d
    return n

def is_semiprime(n: int) -> bool:
    """True iff n has exactly two prime factors counted with multiplicity (4 = 2*2 counts)."""
    if n < 4:
        return False
    num = n
    count = 0
    while num % 2 == 0:
        count += 1
        if count > 2:
            return False
        num //= 2
    i = 3
    while i * i <= num:
        while num % i == 0:
            count += 1
            if count > 2:
                return False
            num //= i
        i += 2
    if num > 1:
        count += 1
    return count == 2

def is_prime_power(n: int) -> bool:
    """True iff n = p^k for a prime p and k >= 1.

    Trial division strips each factor completely before the divisor advances,
    so a leftover remainder > 1 is a prime that differs from any factor
    already recorded.
    """
    if n < 2:
        return False
    if is_prime(n):
        return True
    num = n
    if num % 2 == 0:
        while num % 2 == 0:
            num //= 2
        return num == 1
    first: Optional[int] = None
    i = 3
    while i * i <= num:
        if num % i == 0:
            if first is None:
                first = i
            elif first != i:
                return False
            while num % i == 0:
                num //= i
        i += 2
    if num > 1:
        return first is None
    return True

def factorize(n: int) -> List[int]:
    """Ascending prime factors of n with multiplicity ([] for n < 2)."""
    factors: List[int] = []
    d = 2
    while d * d <= n:
        while n % d == 0:
            factors.append(d)
            n //= d
        d += 1 if d == 2 else 2
    if n > 1:
        factors.append(n)
    return factors

def format_factorization(factors: Tuple[int, ...]) -> str:
    return " × ".join(str(p) for p in factors) if factors else "1"

def conjecture_holds(s7: int) -> bool:
    return s7 == 1 or is_prime(s7) or is_semiprime(s7) or is_prime_power(s7)


# ----------------------------- data model -----------------------------
@dataclass(frozen=True)
class WorkerRange:
    worker_id: int
    start: int
    end: int    # inclusive

    @property
    def size(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class WorkerParams:
    progress_interval: int = PROGRESS_INTERVAL


@dataclass(frozen=True)
class Violation:
    prime: int
    digit_sum: int
    factors: Tuple[int, ...] = ()


@dataclass
class WorkerResult:
    worker_id: int
    start: int
    end: int
    numbers_scanned: int
    primes_tested: int
    violations: List[Violation]
    elapsed_sec: float


@dataclass
class SearchReport:
    limit: int
    workers: int
    duration_seconds: float
    violations: List[Violation] = field(default_factory=list)
    primes_tested: int = 0
    numbers_scanned: int = 0
    start_utc: str = ""
    end_utc: str = ""

    @property
    def holds(self) -> bool:
        return not self.violations

    def to_dict(self) -> Dict[str, object]:
        return {
            "program": program_name,
            "program_version": program_version,
            "limit": self.limit,
            "range": [2, self.limit],
            "workers": self.workers,
            "duration_seconds": self.duration_seconds,
            "start_utc": self.start_utc,
            "end_utc": self.end_utc,
            "numbers_scanned": self.numbers_scanned,
            "primes_tested": self.primes_tested,
            "conjecture_holds": self.holds,
            "violations": [
                {"prime": v.prime, "digit_sum": v.digit_sum, "factors": list(v.factors)}
                for v in self.violations
            ],
        }


# ----------------------------- range partitioner -----------------------------
def partition_range(limit: int, workers: int) -> List[WorkerRange]:
    """Split [2, limit] into contiguous, disjoint, non-empty ranges.

    Worker i nominally owns (i*step, (i+1)*step] with step = limit // workers,
    the first range clamped to start at 2 and the last one extended to limit.
    Ranges that come out empty (limit < workers, or step == 1 for worker 0)
    are skipped, so fewer ranges than workers may be returned.  Worker ids are
    renumbered 0.. over the surviving ranges.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if limit < 2:
        return []
    step = limit // workers
    ranges: List[WorkerRange] = []
    for i in range(workers):
        start = max(2, i * step + 1)
        end = limit if i == workers - 1 else (i + 1) * step
        if start > end:
            continue
        ranges.append(WorkerRange(worker_id=len(ranges), start=start, end=end))
    return ranges


# ----------------------------- worker task -----------------------------
def _init_worker(lock, debug: bool, assertions: bool) -> None:
    global _PRINT_LOCK, DEBUG, ASSERTIONS
    _PRINT_LOCK = lock
    DEBUG = debug
    ASSERTIONS = assertions

def _locked_print(text: str) -> None:
    lock = _PRINT_LOCK
    if lock is None:
        print(text, flush=True)
        return
    with lock:
        print(text, flush=True)

def format_violation(v: Violation) -> str:
    rule = "━" * 70
    return "\n".join([
        rule,
        "[!] VIOLATION FOUND",
        f"   Prime (p)      : {v.prime:,}",
        f"   Digit Sum (S7) : {v.digit_sum}",
        "   -> S7 is NOT 1, prime, semiprime, or prime power",
        f"   -> {v.digit_sum} = {format_factorization(v.factors)}",
        rule,
    ])

def format_progress(worker_id: int, p: int, start: int, end: int) -> str:
    percent = (p - start) / (end - start) * 100
    return f"   Thread {worker_id}: {percent:.1f}% ({p:,})"

def scan_range(args: Tuple[WorkerRange, WorkerParams]) -> WorkerResult:
    rng, params = args
    start, end = rng.start, rng.end
    interval = params.progress_interval

    t0 = time.time()
    violations: List[Violation] = []
    primes_tested = 0

    for p in range(start, end + 1):
        if is_prime(p):
            primes_tested += 1
            s7 = sum_of_base7_digits(p)
            if ASSERTIONS:
                assert (s7 - p) % 6 == 0
            if not conjecture_holds(s7):
                v = Violation(prime=p, digit_sum=s7, factors=tuple(factorize(s7)))
                if ASSERTIONS:
                    prod = 1
                    for f in v.factors:
                        prod *= f
                    assert prod == s7
                violations.append(v)
                _locked_print(format_violation(v))

        # progress every `interval` numbers since the worker's start
        if interval > 0 and p > start and (p - start) % interval == 0:
            _locked_print(format_progress(rng.worker_id, p, start, end))

    elapsed = time.time() - t0
    if DEBUG:
        _locked_print(
            f"[debug] worker {rng.worker_id} done range={start}..{end} "
            f"primes={primes_tested} violations={len(violations)} elapsed={elapsed:.2f}s"
        )

    return WorkerResult(
        worker_id=rng.worker_id,
        start=start,
        end=end,
        numbers_scanned=max(0, end - start + 1),
        primes_tested=primes_tested,
        violations=violations,
        elapsed_sec=elapsed,
    )


# ----------------------------- driver / aggregator -----------------------------
def run_search(
    limit: int,
    workers: int,
    progress_interval: int = PROGRESS_INTERVAL,
) -> SearchReport:
    """Scan [2, limit] with a pool of `workers` processes and return the report.

    Blocks until every worker has finished.  Violations are collected in the
    order workers complete, which is not numeric order.
    """
    ranges = partition_range(limit, workers)
    params = WorkerParams(progress_interval=progress_interval)

    start_utc = utc_now_iso()
    t0 = time.time()
    violations: List[Violation] = []
    primes_tested = 0
    numbers_scanned = 0

    if ranges:
        ctx = get_context("fork") if sys.platform == "darwin" else get_context()
        lock = ctx.Lock()
        with ctx.Pool(
            processes=len(ranges),
            initializer=_init_worker,
            initargs=(lock, DEBUG, ASSERTIONS),
        ) as pool:
            async_args = [(r, params) for r in ranges]
            for res in pool.imap_unordered(scan_range, async_args, chunksize=1):
                violations.extend(res.violations)
                primes_tested += res.primes_tested
                numbers_scanned += res.numbers_scanned

    duration = time.time() - t0
    return SearchReport(
        limit=limit,
        workers=len(ranges),
        duration_seconds=duration,
        violations=violations,
        primes_tested=primes_tested,
        numbers_scanned=numbers_scanned,
        start_utc=start_utc,
        end_utc=utc_now_iso(),
    )


def verify_violations(violations: List[Violation]) -> Dict[str, int]:
    """Re-check each reported violation independently with sympy."""
    stats = {"checked": 0, "prime_ok": 0, "digit_sum_ok": 0, "confirmed": 0}
    for v in violations:
        stats["checked"] += 1
        prime_ok = bool(sympy.isprime(v.prime))
        # sympy digits() returns [base, most significant, ..., least significant]
        digit_sum_ok = sum(sympy_digits(v.prime, BASE)[1:]) == v.digit_sum
        f = sympy.factorint(v.digit_sum)
        fails_all = v.digit_sum != 1 and sum(f.values()) > 2 and len(f) > 1
        stats["prime_ok"] += int(prime_ok)
        stats["digit_sum_ok"] += int(digit_sum_ok)
        stats["confirmed"] += int(prime_ok and digit_sum_ok and fails_all)
    return stats


# ----------------------------- console reporting -----------------------------
def print_banner() -> None:
    print("=" * 70)
    print("  Prime Digit Sum Conjecture Verifier")
    print("  Base-7 Refined Conjecture Test")
    print(f"  {program_name} v{program_version}")
    print("=" * 70)
    print()

def print_header(limit: int, workers: int, progress_interval: int) -> None:
    print(f"[+] range: 2 to {limit:,}")
    print(f"[+] workers={workers}")
    print("[+] testing: S7(p) in {1, prime, semiprime, prime power}")
    if progress_interval > 0:
        print(f"[+] progress reports every {progress_interval:,} numbers per worker")
    else:
        print("[+] progress reports disabled")
    print(f"[+] debug={DEBUG} assertions={ASSERTIONS}")
    print(f"[+] start time (UTC): {utc_now_iso()}\n")
    print("Computing... (first update may take a moment)\n", flush=True)

def print_report(report: SearchReport) -> None:
    print()
    print("=" * 70)
    print("Test Complete")
    print(f"   Duration: {report.duration_seconds:.2f} seconds")
    print(f"   Range tested: 2 to {report.limit:,}")
    print(f"   Primes tested: {report.primes_tested:,}")
    if report.holds:
        print("   Result: NO VIOLATIONS FOUND")
        print("   The Refined Conjecture holds for all tested primes.")
    else:
        print(f"   Result: {len(report.violations)} VIOLATION(S) FOUND")
        print()
        print("   Violations:")
        for v in report.violations:
            print(f"      p = {v.prime:,}, S7(p) = {v.digit_sum}")
    print("=" * 70, flush=True)


# ----------------------------- CLI -----------------------------
def parse_limit(text: Optional[str]) -> Optional[int]:
    """Parse the optional limit argument; None means absent or invalid."""
    if text is None:
        return None
    try:
        limit = int(text.strip())
    except ValueError:
        return None
    if limit < 1 or limit > MAX_LIMIT:
        return None
    return limit


def main(argv: Optional[List[str]] = None) -> int:
    global DEBUG, ASSERTIONS

    ap = argparse.ArgumentParser(
        description="S7_Search: scan primes up to a limit for base-7 digit sum conjecture violations.",
    )
    ap.add_argument("limit", nargs="?", default=None,
                    help=f"Inclusive upper bound of the scan (default {DEFAULT_LIMIT:,}). "
                         "Invalid values are ignored and the default is used.")
    ap.add_argument("--version", action="store_true",
                    help="Print version/environment info and exit")
    ap.add_argument("--workers", type=int, default=0,
                    help="Number of worker processes (0 = one per CPU).")
    ap.add_argument("--progress_interval", type=int, default=PROGRESS_INTERVAL,
                    help="Print a progress line every N numbers per worker (<= 0 disables).")
    ap.add_argument("--json", action="store_true",
                    help="Also print the final report as JSON.")
    ap.add_argument("--verify", action="store_true",
                    help="Re-verify every violation with sympy after the search.")
    ap.add_argument("--debug", action="store_true")
    ap.add_argument("--assertions", action="store_true")
    # a dash-prefixed limit such as "-x" is not a flag; it is an invalid limit
    args, unknown = ap.parse_known_args(argv)
    if unknown:
        args.limit = unknown[0] if args.limit is None else args.limit

    if args.version:
        info = env_block(__file__, sys.argv if argv is None else [sys.argv[0]] + list(argv))
        print(json.dumps(info, indent=2, sort_keys=True))
        return 0

    DEBUG = bool(args.debug)
    ASSERTIONS = bool(args.assertions)

    print_banner()

    limit = DEFAULT_LIMIT
    parsed = parse_limit(args.limit)
    if parsed is not None:
        limit = parsed
        print(f"Custom test limit: {limit:,}\n")
    elif args.limit is not None:
        print(f"[!] ignoring invalid limit {args.limit!r}, using default {DEFAULT_LIMIT:,}\n")
    for token in unknown:
        if token != args.limit:
            print(f"[!] ignoring unrecognized argument {token!r}")

    workers = args.workers if args.workers and args.workers > 0 else (os.cpu_count() or 1)

    print_header(limit, workers, args.progress_interval)
    report = run_search(limit, workers, progress_interval=args.progress_interval)
    print_report(report)

    if args.verify:
        vstats = verify_violations(report.violations)
        print(f"[+] sympy verification: checked={vstats['checked']} "
              f"prime_ok={vstats['prime_ok']} digit_sum_ok={vstats['digit_sum_ok']} "
              f"confirmed={vstats['confirmed']}")

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, sort_keys=True))

    print(f"\n[+] Finished. End time (UTC): {utc_now_iso()}")
    return 0


if __name__ == "__main__":
    if sys.platform == "darwin":
        try:
            import multiprocessing as mp
            mp.set_start_method("fork")
        except RuntimeError:
            pass
    sys.exit(main())
