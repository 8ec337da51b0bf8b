"""
The protocol formats and constants shared by every network
"""
from typing import Final

__all__ = ["DATA", "TX", "BLOCK", "SCRIPT", "GENESIS", "SEEDS", "CHECKPOINTS", "COIN"]

COIN: Final[int] = 100_000_000


class DATA:
    """
    Constants used in data manipulation
    """
    MAX_COMPACTSIZE: Final[int] = 0xffffffffffffffff
    BITS: Final[int] = 4
    TARGET: Final[int] = 32
    HASH: Final[int] = 32


class TX:
    """
    Transaction byte sizes
    """
    TXID: Final[int] = 32
    VOUT: Final[int] = 4
    SEQUENCE: Final[int] = 4
    AMOUNT: Final[int] = 8
    VERSION: Final[int] = 4
    LOCKTIME: Final[int] = 4
    DEFAULT_VERSION: Final[int] = 1
    FINAL_SEQUENCE: Final[int] = 0xffffffff
    NULL_VOUT: Final[int] = 0xffffffff


class BLOCK:
    """
    Block header byte sizes
    """
    VERSION: Final[int] = 4
    PREV_BLOCK: Final[int] = 32
    MERKLE_ROOT: Final[int] = 32
    TIME: Final[int] = 4
    BITS: Final[int] = 4
    NONCE: Final[int] = 4
    HEADER: Final[int] = 80
    DEFAULT_VERSION: Final[int] = 1
    TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


class SCRIPT:
    """
    Constants in use in the Script
    """
    MAX_SCRIPTNUM: Final[int] = 4
    MAX_SINGLE_PUSH: Final[int] = 0x4b


class GENESIS:
    """
    The genesis coinbase always pushes these values ahead of the timestamp text, whatever the header bits of the
    network are
    """
    SCRIPT_BITS: Final[int] = 0x1d00ffff
    SCRIPT_EXTRA_NONCE: Final[int] = 4
    VERSION: Final[int] = 1


class SEEDS:
    ONE_WEEK: Final[int] = 7 * 24 * 60 * 60
    IPV6_BYTES: Final[int] = 16


class CHECKPOINTS:
    SECONDS_PER_DAY: Final[float] = 86400.0
    SIGCHECK_VERIFICATION_FACTOR: Final[float] = 5.0
