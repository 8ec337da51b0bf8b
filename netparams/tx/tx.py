"""
The classes for legacy (non-segwit) transactions

Only what a genesis block needs is modelled here: a version, inputs, outputs and a locktime, with the txid computed as
hash256 over the full serialization.
"""
from netparams.core import Serializable, write_compact_size, TX, DATA
from netparams.crypto import hash256

__all__ = ["TxInput", "TxOutput", "Transaction"]

# --- CACHE KEYS --- #
TXID_KEY = "txid"
COINBASE_KEY = "is_coinbase"


class TxInput(Serializable):
    """
    =============================================================================
    |   name            |   data type   |   format              |   byte size   |
    =============================================================================
    |   txid            |   bytes       |   natural byte order  |   32          |
    |   vout            |   int         |   little-endian       |   4           |
    |   scriptsig_size  |               |   compactSize         |   var         |
    |   scriptsig       |   bytes       |   script bytes        |   var         |
    |   sequence        |   int         |   little-endian       |   4           |
    =============================================================================
    """
    __slots__ = ("txid", "vout", "scriptsig", "sequence")

    def __init__(self, txid: bytes, vout: int, scriptsig: bytes, sequence: int = TX.FINAL_SEQUENCE):
        self.txid = txid
        self.vout = vout
        self.scriptsig = scriptsig
        self.sequence = sequence

    @classmethod
    def coinbase(cls, scriptsig: bytes):
        """
        The null-prevout input every coinbase transaction spends
        """
        return cls(b'\x00' * TX.TXID, TX.NULL_VOUT, scriptsig, TX.FINAL_SEQUENCE)

    @property
    def outpoint(self):
        return self.txid + self.vout.to_bytes(TX.VOUT, "little")

    def to_bytes(self) -> bytes:
        """
        txid || vout || scriptsig_size || scriptsig || sequence
        """
        parts = [
            self.txid,
            self.vout.to_bytes(TX.VOUT, "little"),
            write_compact_size(len(self.scriptsig)),
            self.scriptsig,
            self.sequence.to_bytes(TX.SEQUENCE, "little")
        ]
        return b''.join(parts)

    def to_dict(self, formatted: bool = True) -> dict:
        return {
            "txid": self.txid[::-1].hex() if formatted else self.txid.hex(),
            "vout": self.vout,
            "scriptsig": self.scriptsig.hex(),
            "sequence": self.sequence.to_bytes(TX.SEQUENCE, "little").hex() if formatted else self.sequence
        }


class TxOutput(Serializable):
    """
    -----------------------------------------------------------------
    |   Field               |   Byte Size   |   Format              |
    -----------------------------------------------------------------
    |   Amount              |   8           |   little-endian       |
    |   scriptpubkey_size   |   var         |   CompactSize         |
    |   scriptpubkey        |   var         |   Script              |
    -----------------------------------------------------------------
    """
    __slots__ = ("amount", "scriptpubkey")

    def __init__(self, amount: int, scriptpubkey: bytes):
        self.amount = amount
        self.scriptpubkey = scriptpubkey

    def to_bytes(self) -> bytes:
        """
        amount || scriptpubkey_size || scriptpubkey
        """
        return self.amount.to_bytes(TX.AMOUNT, "little") + write_compact_size(len(self.scriptpubkey)) + \
            self.scriptpubkey

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "scriptpubkey": self.scriptpubkey.hex()
        }


class Transaction(Serializable):
    """
    -------------------------------------------------------------
    |   Field           |   Byte Size   |   Format              |
    -------------------------------------------------------------
    |   Version         |   4           |   little-endian       |
    |   input_count     |   var         |   CompactSize         |
    |   inputs          |   var         |   TxInput             |
    |   output_count    |   var         |   CompactSize         |
    |   outputs         |   var         |   TxOutput            |
    |   locktime        |   4           |   little-endian       |
    -------------------------------------------------------------
    """
    __slots__ = ("version", "inputs", "outputs", "locktime", "_cache")

    def __init__(self, inputs: list[TxInput] = None, outputs: list[TxOutput] = None, locktime: int = 0,
                 version: int = TX.DEFAULT_VERSION):
        self.inputs = inputs or []
        self.outputs = outputs or []
        self.locktime = locktime
        self.version = version
        self._cache = {}

    @property
    def is_coinbase(self) -> bool:
        if COINBASE_KEY not in self._cache:
            truth_list = [
                len(self.inputs) == 1,
                self.inputs[0].txid == b'\x00' * DATA.HASH if self.inputs else False,
                self.inputs[0].vout == TX.NULL_VOUT if self.inputs else False
            ]
            self._cache[COINBASE_KEY] = all(truth_list)
        return self._cache[COINBASE_KEY]

    @property
    def txid(self) -> bytes:
        """
        Return cached txid if it exists. Otherwise, return new txid
        """
        if TXID_KEY not in self._cache:
            self._cache[TXID_KEY] = hash256(self.to_bytes())
        return self._cache[TXID_KEY]

    def to_bytes(self) -> bytes:
        parts = [
            self.version.to_bytes(TX.VERSION, "little"),
            write_compact_size(len(self.inputs)),
            *[i.to_bytes() for i in self.inputs],
            write_compact_size(len(self.outputs)),
            *[o.to_bytes() for o in self.outputs],
            self.locktime.to_bytes(TX.LOCKTIME, "little")
        ]
        return b''.join(parts)

    def to_dict(self) -> dict:
        return {
            "txid": self.txid[::-1].hex(),  # Reverse byte order for display
            "version": self.version,
            "inputs": [i.to_dict() for i in self.inputs],
            "outputs": [o.to_dict() for o in self.outputs],
            "locktime": self.locktime,
            "is_coinbase": self.is_coinbase
        }
