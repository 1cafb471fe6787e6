#!/usr/bin/env python3
"""
Independent check of S7_Search against sympy.

1) Every predicate in S7_Search (is_prime, is_semiprime, is_prime_power,
   factorize, sum_of_base7_digits) is compared with sympy for all n in [0, N].
2) The base-7 digit sum conjecture is re-derived for every prime up to a limit
   using only sympy (primerange, factorint, digits).

Run as: python S7_Checker.py [limit] [n_max]
"""

import sys

import sympy
from sympy.ntheory.digits import digits

import S7_Search


def sympy_digit_sum(n, base=7):
    # digits() puts the base first: digits(35, 7) == [7, 5, 0]
    return sum(digits(n, base)[1:])

def sympy_factor_count(n):
    return sum(sympy.factorint(n).values())

def sympy_conjecture_holds(s):
    """S is 1, prime, semiprime or a prime power."""
    if s == 1:
        return True
    f = sympy.factorint(s)
    return len(f) == 1 or sum(f.values()) == 2

def expand_factors(n):
    out = []
    for p, e in sorted(sympy.factorint(n).items()):
        out.extend([p] * e)
    return out

def check_predicates(n_max):
    """Return a list of (name, n, ours, expected) mismatches for n in [0, n_max]."""
    mismatches = []
    for n in range(0, n_max + 1):
        if n >= 1:
            f = sympy.factorint(n)
            omega_total = sum(f.values())
            expected = {
                'is_prime': bool(sympy.isprime(n)),
                'is_semiprime': omega_total == 2,
                'is_prime_power': len(f) == 1,
                'factorize': expand_factors(n),
            }
        else:
            expected = {'is_prime': False, 'is_semiprime': False,
                        'is_prime_power': False, 'factorize': []}
        expected['sum_of_base7_digits'] = sympy_digit_sum(n) if n > 0 else 0

        for name, want in expected.items():
            got = getattr(S7_Search, name)(n)
            if got != want:
                mismatches.append((name, n, got, want))
    return mismatches

def check_conjecture(limit):
    """Return (primes_checked, violations) for all primes <= limit."""
    violations = []
    checked = 0
    for p in sympy.primerange(2, limit + 1):
        checked += 1
        s = sympy_digit_sum(p)
        if not sympy_conjecture_holds(s):
            violations.append((p, s))
    return checked, violations

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    limit = int(argv[0]) if len(argv) > 0 else 1_000_000
    n_max = int(argv[1]) if len(argv) > 1 else 10_000

    print(f"Checking S7_Search predicates against sympy for n = 0..{n_max:,}...")
    print("=" * 70)
    mismatches = check_predicates(n_max)
    for name, n, got, want in mismatches[:20]:
        print(f"❌ {name}({n}) = {got}, sympy says {want}")

    print(f"\nRe-deriving the conjecture for primes up to {limit:,} with sympy...", flush=True)
    checked, violations = check_conjecture(limit)
    for p, s in violations:
        print(f"   p = {p:,}  S7(p) = {s}  factorization {sympy.factorint(s)}")

    # the search itself must agree on every violation
    disagreements = [(p, s) for p, s in violations
                     if S7_Search.conjecture_holds(S7_Search.sum_of_base7_digits(p))]

    print("\n" + "=" * 70)
    print(f"Checked {checked:,} primes, {len(violations)} violation(s)")

    if mismatches or disagreements:
        print(f"\n⚠️  Found {len(mismatches)} predicate mismatch(es), "
              f"{len(disagreements)} violation disagreement(s)")
    else:
        print("\n✓ S7_Search agrees with sympy on every check!")

    return 0 if not (mismatches or disagreements) else 1

if __name__ == '__main__':
    sys.exit(main())
