"""
The GenesisBlockDescriptor: deterministic construction and verification of a network's first block

The genesis block holds a single coinbase transaction:
    - one input spending the null outpoint, whose scriptsig pushes the fixed bits value 0x1d00ffff, the number 4 and
      the timestamp text
    - one output paying the reward to the signing pubkey under a P2PK script

Its merkle root is therefore the coinbase txid, and its hash is hash256 over the 80-byte header.
"""
from dataclasses import dataclass, field, replace
from typing import Optional

from netparams.block import Block
from netparams.core import GENESIS, DATA, GenesisMismatchError
from netparams.core.logging import get_logger
from netparams.data import bits_from_int, uint256_from_hex, uint256_to_hex
from netparams.script import ScriptBuilder, ScriptNum, p2pk_script
from netparams.tx import TxInput, TxOutput, Transaction

logger = get_logger(__name__)

__all__ = ["GenesisBlockDescriptor", "build_genesis", "verify_genesis", "assert_genesis"]


def _coinbase_scriptsig(timestamp_text: str, script_bits: int) -> bytes:
    return (ScriptBuilder()
            .push_num(ScriptNum(script_bits))
            .push_num(ScriptNum(GENESIS.SCRIPT_EXTRA_NONCE))
            .push_data(timestamp_text.encode("utf-8"))
            .build())


@dataclass(frozen=True)
class GenesisBlockDescriptor:
    """
    Immutable record of a genesis block. Build it with GenesisBlockDescriptor.build(); merkle_root and block_hash are
    computed there and kept in internal byte order.
    """
    timestamp_text: str  # Embedded in the coinbase scriptsig
    reward: int  # Coinbase output value in base units
    pubkey: bytes  # Key the coinbase output pays to
    time: int
    bits: int  # Compact target, e.g. 0x1d00ffff
    nonce: int
    version: int = GENESIS.VERSION
    script_bits: int = GENESIS.SCRIPT_BITS
    prev_hash: bytes = b'\x00' * DATA.HASH
    merkle_root: bytes = field(default=b'', compare=False)
    block_hash: bytes = field(default=b'', compare=False)

    @classmethod
    def build(cls, timestamp_text: str, reward: int, pubkey: bytes, time: int, bits: int, nonce: int,
              version: int = GENESIS.VERSION, script_bits: int = GENESIS.SCRIPT_BITS) -> "GenesisBlockDescriptor":
        draft = cls(timestamp_text, reward, pubkey, time, bits, nonce, version, script_bits)
        block = draft.to_block()
        return replace(draft, merkle_root=block.merkle_root, block_hash=block.block_id)

    def with_header(self, time: int, bits: int, nonce: int) -> "GenesisBlockDescriptor":
        """
        Rebuild the descriptor with the same coinbase under new header fields
        """
        return self.build(self.timestamp_text, self.reward, self.pubkey, time, bits, nonce, self.version,
                          self.script_bits)

    def coinbase(self) -> Transaction:
        txin = TxInput.coinbase(_coinbase_scriptsig(self.timestamp_text, self.script_bits))
        txout = TxOutput(self.reward, p2pk_script(self.pubkey))
        return Transaction(inputs=[txin], outputs=[txout])

    def to_block(self) -> Block:
        return Block(
            version=self.version,
            prev_block=self.prev_hash,
            timestamp=self.time,
            bits=bits_from_int(self.bits),
            nonce=self.nonce,
            txs=[self.coinbase()]
        )

    @property
    def hash_hex(self) -> str:
        return uint256_to_hex(self.block_hash)

    @property
    def merkle_root_hex(self) -> str:
        return uint256_to_hex(self.merkle_root)

    def verify(self, expected_hash: str | bytes) -> bool:
        """
        Equality check of the computed hash against a display hex string or internal-order bytes
        """
        expected = uint256_from_hex(expected_hash) if isinstance(expected_hash, str) else expected_hash
        return self.block_hash == expected

    def to_dict(self) -> dict:
        return {
            "hash": self.hash_hex,
            "merkle_root": self.merkle_root_hex,
            "timestamp_text": self.timestamp_text,
            "reward": self.reward,
            "pubkey": self.pubkey.hex(),
            "version": self.version,
            "time": self.time,
            "bits": f"{self.bits:08x}",
            "nonce": self.nonce
        }


def build_genesis(timestamp_text: str, reward: int, pubkey: bytes, time: int, bits: int,
                  nonce: int) -> GenesisBlockDescriptor:
    return GenesisBlockDescriptor.build(timestamp_text, reward, pubkey, time, bits, nonce)


def verify_genesis(descriptor: GenesisBlockDescriptor, expected_hash: str | bytes) -> bool:
    return descriptor.verify(expected_hash)


def assert_genesis(network_id: str, descriptor: GenesisBlockDescriptor, expected_hash: str,
                   expected_merkle_root: Optional[str] = None):
    """
    Raise GenesisMismatchError unless the descriptor carries the recorded hash (and merkle root, when one is given).
    A mismatch means the constant table is corrupt and the node must not start.
    """
    if not descriptor.verify(expected_hash):
        logger.critical(f"Genesis hash mismatch for network {network_id}: expected {expected_hash}, "
                        f"computed {descriptor.hash_hex}")
        raise GenesisMismatchError(network_id, "hash", expected_hash, descriptor.hash_hex)

    if expected_merkle_root is not None and descriptor.merkle_root != uint256_from_hex(expected_merkle_root):
        logger.critical(f"Genesis merkle root mismatch for network {network_id}: expected {expected_merkle_root}, "
                        f"computed {descriptor.merkle_root_hex}")
        raise GenesisMismatchError(network_id, "merkle root", expected_merkle_root, descriptor.merkle_root_hex)

    logger.debug(f"Genesis verified for network {network_id}: {descriptor.hash_hex}")
