"""
The CompactSize encoding used for the counts and script lengths of serialized transactions and blocks
"""
from .exceptions import WriteError
from .formats import DATA

__all__ = ["write_compact_size"]


def write_compact_size(num: int) -> bytes:
    """
    Given an integer we return its CompactSize encoding
    """
    # --- Validation --- #
    if num < 0 or num > DATA.MAX_COMPACTSIZE:
        raise WriteError("Given number out of bounds for CompactSize encoding")

    if num <= 0xfc:  # One byte
        return num.to_bytes(1, "little")
    elif num <= 0xffff:  # Two bytes
        return b'\xfd' + num.to_bytes(2, "little")
    elif num <= 0xffffffff:  # Four bytes
        return b'\xfe' + num.to_bytes(4, "little")
    else:  # Eight bytes
        return b'\xff' + num.to_bytes(8, "little")
