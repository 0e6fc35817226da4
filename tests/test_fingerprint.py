# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Tests for error fingerprinting."""

from exceptional.fingerprint import (
    MACHINE_MULTIPLIER,
    combine_hashes,
    compute_fingerprint,
    string_hash,
    to_int32,
)

DETAIL = "Traceback (most recent call last):\nValueError: disk full\n"


class TestStringHash:
    """Tests for the FNV-1a string hash."""

    def test_known_vectors(self):
        """Test against published 32-bit FNV-1a values."""
        assert string_hash("") == to_int32(0x811C9DC5)
        assert string_hash("a") == to_int32(0xE40C292C)
        assert string_hash("foobar") == to_int32(0xBF9CF968)

    def test_signed_32_bit_range(self):
        """Test that hashes fit a signed 32-bit integer."""
        for text in ("", "a", DETAIL, "ünïcödé"):
            value = string_hash(text)
            assert -(2 ** 31) <= value < 2 ** 31

    def test_to_int32_wraps(self):
        """Test wrapping into the signed range."""
        assert to_int32(0) == 0
        assert to_int32(0x7FFFFFFF) == 2 ** 31 - 1
        assert to_int32(0x80000000) == -(2 ** 31)
        assert to_int32(0x1_0000_0001) == 1


class TestCombineHashes:
    """Tests for the machine-name combiner."""

    def test_multiply_then_xor(self):
        """Test the combiner formula on small values."""
        assert combine_hashes(1, 2) == (1 * MACHINE_MULTIPLIER) ^ 2

    def test_order_sensitive(self):
        """Test that swapping the hash sources changes the result."""
        assert combine_hashes(1, 2) != combine_hashes(2, 1)


class TestComputeFingerprint:
    """Tests for compute_fingerprint."""

    def test_empty_detail_has_no_fingerprint(self):
        """Test that there is no fingerprint without detail."""
        assert compute_fingerprint("", "web01", True) is None
        assert compute_fingerprint("", "", False) is None
        assert compute_fingerprint(None, "web01", True) is None

    def test_deterministic(self):
        """Test that equal inputs give equal fingerprints."""
        assert compute_fingerprint(DETAIL, "web01", True) == compute_fingerprint(DETAIL, "web01", True)
        assert compute_fingerprint(DETAIL, "web01", False) == compute_fingerprint(DETAIL, "web01", False)

    def test_different_detail_changes_fingerprint(self):
        """Test that a different detail yields a different fingerprint."""
        assert compute_fingerprint(DETAIL, "web01", False) != compute_fingerprint(DETAIL + "x", "web01", False)

    def test_without_rollup_per_server_ignores_machine(self):
        """Test that the machine name is ignored unless rollup is per server."""
        assert compute_fingerprint(DETAIL, "web01", False) == string_hash(DETAIL)
        assert compute_fingerprint(DETAIL, "web01", False) == compute_fingerprint(DETAIL, "web02", False)

    def test_rollup_per_server_mixes_machine(self):
        """Test that per-server rollup keeps hosts apart."""
        expected = combine_hashes(string_hash(DETAIL), string_hash("web01"))

        assert compute_fingerprint(DETAIL, "web01", True) == expected
        assert compute_fingerprint(DETAIL, "web01", True) != compute_fingerprint(DETAIL, "web02", True)

    def test_rollup_per_server_without_machine(self):
        """Test that an empty machine name leaves the content hash alone."""
        assert compute_fingerprint(DETAIL, "", True) == string_hash(DETAIL)
        assert compute_fingerprint(DETAIL, None, True) == string_hash(DETAIL)
