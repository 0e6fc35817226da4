# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Error fingerprinting used to roll up duplicate occurrences.

The fingerprint is a 32-bit FNV-1a hash of the error detail, optionally
mixed with the machine name. It is a similarity key, not an identity:
two different errors may collide and will then be rolled up together.
Values are signed 32-bit integers so they fit an ordinary ``int`` column.
"""

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
MACHINE_MULTIPLIER = 397

_MASK = 0xFFFFFFFF


def to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    value &= _MASK
    return value - 0x100000000 if value & 0x80000000 else value


def string_hash(text: str) -> int:
    """Return the signed 32-bit FNV-1a hash of the UTF-8 encoding of ``text``."""
    result = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        result ^= byte
        result = (result * FNV_PRIME) & _MASK
    return to_int32(result)


def combine_hashes(content_hash: int, machine_hash: int) -> int:
    """Mix a machine-name hash into a content hash.

    The combiner is order-sensitive: ``combine_hashes(a, b)`` and
    ``combine_hashes(b, a)`` differ for almost every pair.
    """
    return to_int32((content_hash * MACHINE_MULTIPLIER) ^ machine_hash)


def compute_fingerprint(detail: str | None, machine_name: str | None, rollup_per_server: bool) -> int | None:
    """Compute the rollup fingerprint of an error.

    Args:
        detail: Full error detail text
        machine_name: Host the error occurred on
        rollup_per_server: Keep occurrences from different hosts apart

    Returns:
        The fingerprint, or None when there is no detail to fingerprint.
        Absent fingerprints never match each other.
    """
    if not detail:
        return None

    result = string_hash(detail)
    if rollup_per_server and machine_name:
        result = combine_hashes(result, string_hash(machine_name))
    return result
