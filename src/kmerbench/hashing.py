"""String hash functions used by the chained counters.

Both hashes emulate fixed-width signed integer arithmetic so that bucket
indexes are reproducible across runs and platforms:

- djb2: seed 5381, multiplier 33, 64-bit signed accumulator
- polynomial: seed 0, multiplier 31, 32-bit signed accumulator

Python integers never overflow, so every step is wrapped explicitly.
"""

from __future__ import annotations

DJB2_SEED = 5381
DJB2_MULTIPLIER = 33
POLY_MULTIPLIER = 31

INT32_MIN = -(1 << 31)
INT64_MIN = -(1 << 63)


def wrap_signed(value: int, bits: int) -> int:
    """Reduce an integer to a signed two's-complement value of `bits` width."""
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def wrapping_abs(value: int, bits: int) -> int:
    """Absolute value with fixed-width overflow semantics.

    The minimum representable value has no positive counterpart, so its
    absolute value wraps back to itself and stays negative.
    """
    return wrap_signed(abs(value), bits)


def djb2_hash(key: str) -> int:
    """djb2 hash of `key` as a signed 64-bit value.

    Args:
        key: String to hash; may be empty.

    Returns:
        Hash in [-2**63, 2**63).
    """
    h = DJB2_SEED
    for ch in key:
        h = wrap_signed(h * DJB2_MULTIPLIER + ord(ch), 64)
    return h


def polynomial_hash(key: str) -> int:
    """31-multiplier polynomial rolling hash of `key` as a signed 32-bit value.

    This is the classic default string hash (``s[0]*31**(n-1) + ... + s[n-1]``)
    and, unlike the builtin `hash()`, is not randomized per process.
    """
    h = 0
    for ch in key:
        h = wrap_signed(h * POLY_MULTIPLIER + ord(ch), 32)
    return h


def bucket_index(hash_value: int, table_size: int, bits: int = 64) -> int:
    """Map a signed hash to a bucket in ``[0, table_size)``.

    Computes ``abs(hash) % table_size`` with fixed-width `abs`. When the hash
    is the minimum signed value, `abs` stays negative; floor modulo then folds
    it into range instead of yielding a negative index.

    Args:
        hash_value: Signed hash produced by one of the hash functions.
        table_size: Number of buckets (must be positive).
        bits: Width of the hash accumulator (64 for djb2, 32 for polynomial).

    Returns:
        Bucket index.
    """
    return wrapping_abs(hash_value, bits) % table_size


def djb2_index(key: str, table_size: int) -> int:
    return bucket_index(djb2_hash(key), table_size, bits=64)


def polynomial_index(key: str, table_size: int) -> int:
    return bucket_index(polynomial_hash(key), table_size, bits=32)
