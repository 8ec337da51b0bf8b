"""
Conversions between 32-byte hashes in internal byte order and their display hex strings

Display strings are big-endian and may be shorter than 64 characters ("0x001" is the hash with value 1), so they are
zero padded on the left before being reversed into internal order.
"""
from netparams.core import DATA, DataEncodingError

__all__ = ["uint256_from_hex", "uint256_to_hex"]


def uint256_from_hex(hex_str: str) -> bytes:
    cleaned = hex_str.strip().lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]

    if len(cleaned) > 2 * DATA.HASH:
        raise DataEncodingError(f"Hex string too long for a 256-bit value: {hex_str}")

    try:
        value = bytes.fromhex(cleaned.rjust(2 * DATA.HASH, "0"))
    except ValueError as e:
        raise DataEncodingError(f"Invalid hex string for a 256-bit value: {hex_str}") from e

    return value[::-1]


def uint256_to_hex(value: bytes) -> str:
    return value[::-1].hex()
