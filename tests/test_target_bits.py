"""
Tests for converting between target and bits
"""
from secrets import token_bytes

import pytest

from netparams.core import TargetBitsError
from netparams.data import bits_to_target, target_to_bits, bits_from_int, bits_to_int


def test_known_bits():
    """
    0x1d00ffff is the compact form of the proof of work limit Bitcoin launched with
    """
    target = bits_to_target(bits_from_int(0x1d00ffff))
    assert int.from_bytes(target, "big") == 0xffff << (8 * 26)
    assert bits_to_int(target_to_bits(target)) == 0x1d00ffff


def test_pow_limit_bits():
    assert bits_to_int(target_to_bits(((1 << 256) - 1 >> 1).to_bytes(32, "big"))) == 0x207fffff
    assert bits_to_int(target_to_bits(((1 << 256) - 1 >> 8).to_bytes(32, "big"))) == 0x2000ffff


def test_random_bits():
    """
    Bits with a normalized coefficient survive the round trip through target
    """
    for _ in range(10):
        coeff = int.from_bytes(token_bytes(3), "big") | 0x010000
        coeff &= 0x7fffff
        bits = bytes([0x1c]) + coeff.to_bytes(3, "big")
        assert target_to_bits(bits_to_target(bits)) == bits, f"Bits failed for {bits.hex()}"


def test_lengths():
    with pytest.raises(TargetBitsError):
        bits_to_target(b'\x1d\x00\xff')
    with pytest.raises(TargetBitsError):
        target_to_bits(b'\x00' * 31)
