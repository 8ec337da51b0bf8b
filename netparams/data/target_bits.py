"""
Methods for converting between bits and target.
Bits is 4-byte representation of 32-byte target
"""
from netparams.core import DATA, TargetBitsError

__all__ = ["bits_to_target", "target_to_bits", "bits_from_int", "bits_to_int"]


def bits_to_target(target_bits: bytes) -> bytes:
    # --- Validation --- #
    if len(target_bits) != DATA.BITS:
        raise TargetBitsError("Given target bits not of correct length")

    # --- Execution --- #
    exp = target_bits[0]
    coeff = int.from_bytes(target_bits[1:4], 'big')

    target_int = coeff * pow(2, 8 * (exp - 3))

    # Convert to 32 bytes, big-endian
    return target_int.to_bytes(DATA.TARGET, 'big')


def target_to_bits(target: bytes) -> bytes:
    # --- Validation --- #
    if len(target) != DATA.TARGET:
        raise TargetBitsError("Given target not of correct length")

    # --- Execution --- #
    # Find the first significant byte
    first_nonzero = next((i for i, b in enumerate(target) if b != 0), len(target))

    # Exponent is the number of significant bytes
    exp = 32 - first_nonzero

    # First 3 significant bytes, zero padded
    coeff = target[first_nonzero:first_nonzero + 3].ljust(3, b'\x00')

    # A set high bit would read as a sign, so shift the coefficient down one byte
    if coeff[0] >= 0x80:
        coeff = b'\x00' + coeff[:2]
        exp += 1

    return exp.to_bytes(1, "big") + coeff


def bits_from_int(bits: int) -> bytes:
    """
    Returns the 4-byte bits form of an integer written as e.g. 0x1d00ffff
    """
    return bits.to_bytes(DATA.BITS, "big")


def bits_to_int(bits: bytes) -> int:
    return int.from_bytes(bits, "big")
