"""
The ScriptNum class
"""
from netparams.core import SCRIPT, ScriptNumError

MAX_SCRIPTNUM_BYTES = SCRIPT.MAX_SCRIPTNUM

__all__ = ["ScriptNum"]


class ScriptNum:
    """
    Minimal-encoded signed-magnitude integers for Script.

    Script uses a special encoding for integers:
    - Little-endian representation
    - Negative numbers set the sign bit (0x80) in the last byte
    - Zero is represented as an empty byte array
    - Limited to 4 bytes (32 bits) in standard consensus rules
    """
    __slots__ = ("_value", "_bytes_cache")

    def __init__(self, value: int):
        # --- Validation --- #
        if not isinstance(value, int):
            raise ScriptNumError("ScriptNum value must be an integer")

        self._value = value
        self._bytes_cache = None

    def _encode(self, n: int) -> bytes:
        if n == 0:
            return b""

        neg = n < 0
        a = -n if neg else n
        mag = a.to_bytes((a.bit_length() + 7) // 8, "little")

        # One extra byte iff the top bit would collide with the sign
        predicted_len = len(mag) + (1 if (mag[-1] & 0x80) else 0)
        if predicted_len > MAX_SCRIPTNUM_BYTES:
            raise ScriptNumError("Integer too large to be ScriptNum encoded")

        if mag[-1] & 0x80:
            return mag + (b"\x80" if neg else b"\x00")

        if neg:
            return mag[:-1] + bytes([mag[-1] | 0x80])

        return mag

    @property
    def value(self):
        return self._value

    def to_bytes(self) -> bytes:
        if self._bytes_cache is None:
            self._bytes_cache = self._encode(self._value)
        return self._bytes_cache

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScriptNum):
            return self._value == other.value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __repr__(self):
        return f"ScriptNum({self._value})"
