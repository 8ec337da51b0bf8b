"""
The Block classes
"""
from datetime import datetime, timezone

from netparams.core import write_compact_size, Serializable, BLOCK
from netparams.crypto import hash256
from netparams.data import bits_to_target, MerkleTree
from netparams.tx import Transaction

__all__ = ["BlockHeader", "Block"]


class BlockHeader(Serializable):
    """
    ---------------------------------------------------------------------
    |   Name        |   data_type   |   format              |   size    |
    ---------------------------------------------------------------------
    |   Version     |   int         |   little-endian       |   4       |
    |   prev_block  |   bytes       |   natural byte order  |   32      |
    |   merkle_root |   bytes       |   natural byte order  |   32      |
    |   time        |   int         |   little-endian       |   4       |
    |   bits        |   bytes       |   little-endian       |   4       |
    |   nonce       |   int         |   little-endian       |   4       |
    ---------------------------------------------------------------------
    """
    __slots__ = ('version', 'prev_block', 'merkle_root', 'timestamp', 'bits', 'nonce')

    def __init__(self, version: int, prev_block: bytes, merkle_root: bytes, timestamp: int, bits: bytes, nonce: int):
        self.version = version
        self.prev_block = prev_block
        self.merkle_root = merkle_root
        self.timestamp = timestamp
        self.bits = bits
        self.nonce = nonce

    @property
    def block_id(self) -> bytes:
        return hash256(self.to_bytes())

    @property
    def target(self) -> bytes:
        return bits_to_target(self.bits)

    def to_bytes(self) -> bytes:
        parts = [
            self.version.to_bytes(BLOCK.VERSION, "little"),
            self.prev_block,
            self.merkle_root,
            self.timestamp.to_bytes(BLOCK.TIME, "little"),
            self.bits[::-1],  # Little endian serialized
            self.nonce.to_bytes(BLOCK.NONCE, "little")
        ]
        return b''.join(parts)

    def to_dict(self, formatted: bool = True) -> dict:
        return {
            # Formatted hashes reverse byte order for display
            "block_hash": self.block_id[::-1].hex() if formatted else self.block_id.hex(),
            "version": self.version,
            "previous_block": self.prev_block[::-1].hex() if formatted else self.prev_block.hex(),
            "merkle_root": self.merkle_root[::-1].hex() if formatted else self.merkle_root.hex(),
            "timestamp": datetime.fromtimestamp(self.timestamp, tz=timezone.utc).strftime(
                BLOCK.TIMESTAMP_FORMAT) if formatted else self.timestamp,
            "bits": self.bits.hex(),
            "nonce": self.nonce
        }


class Block(Serializable):
    """
    ---------------------------------------------------------------------
    |                       BlockHeader                                 |
    ---------------------------------------------------------------------
    |                       Transactions                                |
    ---------------------------------------------------------------------
    |   tx_num      |   int         |   CompactSize         |   var     |
    |   txs         |   list        |   Serializable        |   var     |
    ---------------------------------------------------------------------
    The merkle root is never stored; it is rebuilt from the transactions.
    """
    __slots__ = ('version', 'prev_block', 'timestamp', 'bits', 'nonce', 'txs', 'merkle_tree')

    def __init__(self, version: int, prev_block: bytes, timestamp: int, bits: bytes, nonce: int,
                 txs: list[Transaction]):
        self.version = version
        self.prev_block = prev_block
        self.timestamp = timestamp
        self.bits = bits
        self.nonce = nonce
        self.txs = txs
        self.merkle_tree = MerkleTree([t.txid for t in self.txs])

    @property
    def merkle_root(self) -> bytes:
        return self.merkle_tree.merkle_root

    @property
    def block_id(self) -> bytes:
        return self.get_header().block_id

    def get_header(self) -> BlockHeader:
        return BlockHeader(
            version=self.version,
            prev_block=self.prev_block,
            merkle_root=self.merkle_root,
            timestamp=self.timestamp,
            bits=self.bits,
            nonce=self.nonce
        )

    def to_bytes(self) -> bytes:
        tx_parts = [write_compact_size(len(self.txs))] + [tx.to_bytes() for tx in self.txs]
        return self.get_header().to_bytes() + b''.join(tx_parts)

    def to_dict(self, formatted: bool = True) -> dict:
        return {
            "header": self.get_header().to_dict(formatted),
            "tx_num": len(self.txs),
            "txs": [tx.to_dict() for tx in self.txs]
        }
