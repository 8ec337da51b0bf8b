"""
The ScriptBuilder class for assembling scriptsig and scriptpubkey bytes from pushes and opcodes
"""
from netparams.core import SCRIPT, WriteError
from netparams.script.script_num import ScriptNum

__all__ = ["ScriptBuilder", "p2pk_script"]


class ScriptBuilder:
    """
    Builds a script one element at a time:

        script = ScriptBuilder().push_num(ScriptNum(4)).push_data(b'...').build()

    push_int follows the small-integer opcode rule (OP_0, OP_1NEGATE, OP_1..OP_16) whereas push_num always pushes the
    minimal ScriptNum bytes as data.
    """
    # -- Common OP-Codes
    OP_0 = b'\x00'
    OP_PUSHDATA1 = b'\x4c'
    OP_PUSHDATA2 = b'\x4d'
    OP_PUSHDATA4 = b'\x4e'
    OP_1NEGATE = b'\x4f'
    OP_1 = 0x51
    OP_CHECKSIG = b'\xac'

    __slots__ = ("_parts",)

    def __init__(self):
        self._parts = []

    def push_data(self, data: bytes) -> "ScriptBuilder":
        size = len(data)
        if size <= SCRIPT.MAX_SINGLE_PUSH:
            prefix = size.to_bytes(1, "little")
        elif size <= 0xff:
            prefix = self.OP_PUSHDATA1 + size.to_bytes(1, "little")
        elif size <= 0xffff:
            prefix = self.OP_PUSHDATA2 + size.to_bytes(2, "little")
        elif size <= 0xffffffff:
            prefix = self.OP_PUSHDATA4 + size.to_bytes(4, "little")
        else:
            raise WriteError("Push data too large for a single script element")
        self._parts.append(prefix + data)
        return self

    def push_num(self, num: ScriptNum | int) -> "ScriptBuilder":
        num = num if isinstance(num, ScriptNum) else ScriptNum(num)
        return self.push_data(num.to_bytes())

    def push_int(self, n: int) -> "ScriptBuilder":
        if n == 0:
            self._parts.append(self.OP_0)
        elif n == -1:
            self._parts.append(self.OP_1NEGATE)
        elif 1 <= n <= 16:
            self._parts.append((self.OP_1 + n - 1).to_bytes(1, "little"))
        else:
            self.push_num(n)
        return self

    def op(self, opcode: bytes | int) -> "ScriptBuilder":
        opcode = opcode if isinstance(opcode, bytes) else opcode.to_bytes(1, "little")
        self._parts.append(opcode)
        return self

    def build(self) -> bytes:
        return b''.join(self._parts)


def p2pk_script(pubkey: bytes) -> bytes:
    """
    P2PK | OP_PUSHBYTES_ + pubkey + OP_CHECKSIG
    """
    return ScriptBuilder().push_data(pubkey).op(ScriptBuilder.OP_CHECKSIG).build()
