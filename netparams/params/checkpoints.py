"""
The CheckpointTable: trusted (height, hash) pairs plus the statistics used to estimate sync progress

What makes a good checkpoint block?
    + Is surrounded by blocks with reasonable timestamps
      (no blocks before with a timestamp after, none after with timestamp before)
    + Contains no strange transactions
"""
import time as _time
from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional

from netparams.core import CHECKPOINTS, CheckpointError
from netparams.core.logging import get_logger
from netparams.data import uint256_from_hex, uint256_to_hex

logger = get_logger(__name__)

__all__ = ["Checkpoint", "CheckpointTable"]


class Checkpoint(NamedTuple):
    height: int
    block_hash: bytes  # Internal byte order


@dataclass(frozen=True)
class CheckpointTable:
    """
    Checkpoints ordered by strictly increasing height, along with:
        last_checkpoint_time: UNIX timestamp of the last checkpoint block
        tx_count_at_last_checkpoint: total number of transactions between genesis and the last checkpoint
        estimated_tx_per_day_after: estimated number of transactions per day after the last checkpoint

    A last_checkpoint_time of 0 means the table carries no timing statistics (regtest).
    """
    entries: tuple[Checkpoint, ...]
    last_checkpoint_time: int
    tx_count_at_last_checkpoint: int
    estimated_tx_per_day_after: float

    def __post_init__(self):
        heights = [c.height for c in self.entries]
        if any(h < 0 for h in heights):
            raise CheckpointError("Checkpoint heights cannot be negative")
        if any(b <= a for a, b in zip(heights, heights[1:])):
            raise CheckpointError(f"Checkpoint heights must be strictly increasing: {heights}")
        if self.tx_count_at_last_checkpoint < 0 or self.estimated_tx_per_day_after < 0:
            raise CheckpointError("Checkpoint statistics cannot be negative")

    @classmethod
    def from_mapping(cls, checkpoints: dict[int, str], last_checkpoint_time: int, tx_count_at_last_checkpoint: int,
                     estimated_tx_per_day_after: float) -> "CheckpointTable":
        """
        Build from a {height: display hex hash} mapping, in any order
        """
        entries = tuple(Checkpoint(h, uint256_from_hex(checkpoints[h])) for h in sorted(checkpoints))
        return cls(entries, last_checkpoint_time, tx_count_at_last_checkpoint, estimated_tx_per_day_after)

    def validate_against_genesis(self, network_id: str, genesis_time: int):
        if self.last_checkpoint_time and self.last_checkpoint_time < genesis_time:
            logger.critical(f"Last checkpoint time {self.last_checkpoint_time} precedes genesis time {genesis_time} "
                            f"for network {network_id}")
            raise CheckpointError(f"last checkpoint time precedes genesis time for network {network_id}")

    @property
    def heights(self) -> list[int]:
        return [c.height for c in self.entries]

    def lookup(self, height: int) -> Optional[bytes]:
        """
        Expected hash at the given height, or None when the height is unconstrained
        """
        heights = self.heights
        i = bisect_left(heights, height)
        if i < len(heights) and heights[i] == height:
            return self.entries[i].block_hash
        return None

    def check_block(self, height: int, block_hash: bytes) -> bool:
        expected = self.lookup(height)
        return expected is None or expected == block_hash

    def total_blocks_estimate(self) -> int:
        return self.entries[-1].height if self.entries else 0

    def last_checkpoint(self, known_hashes: Iterable[bytes]) -> Optional[Checkpoint]:
        """
        The highest checkpoint whose block is already known
        """
        known = set(known_hashes)
        for checkpoint in reversed(self.entries):
            if checkpoint.block_hash in known:
                return checkpoint
        return None

    def guess_verification_progress(self, chain_tx_count: Optional[int], block_time: int = 0,
                                    now: Optional[int] = None, sigchecks: bool = True) -> float:
        """
        Estimate the fraction of total verification work done when the tip has chain_tx_count transactions
        below it and was mined at block_time.

        Work is counted in transactions; transactions after the last checkpoint cost SIGCHECK_VERIFICATION_FACTOR
        times as much when signatures are checked. Returns 0.0 when no tip is known.
        """
        if chain_tx_count is None:
            return 0.0

        now = int(_time.time()) if now is None else now
        factor = CHECKPOINTS.SIGCHECK_VERIFICATION_FACTOR if sigchecks else 1.0
        tx_per_second = self.estimated_tx_per_day_after / CHECKPOINTS.SECONDS_PER_DAY

        if chain_tx_count <= self.tx_count_at_last_checkpoint:
            cheap_before = chain_tx_count
            cheap_after = self.tx_count_at_last_checkpoint - chain_tx_count
            expensive_after = (now - self.last_checkpoint_time) * tx_per_second
            work_before = cheap_before
            work_after = cheap_after + expensive_after * factor
        else:
            cheap_before = self.tx_count_at_last_checkpoint
            expensive_before = chain_tx_count - self.tx_count_at_last_checkpoint
            expensive_after = (now - block_time) * tx_per_second
            work_before = cheap_before + expensive_before * factor
            work_after = expensive_after * factor

        total = work_before + work_after
        if total <= 0:
            return 0.0
        return work_before / total

    def to_dict(self) -> dict:
        return {
            "checkpoints": {c.height: uint256_to_hex(c.block_hash) for c in self.entries},
            "last_checkpoint_time": self.last_checkpoint_time,
            "tx_count_at_last_checkpoint": self.tx_count_at_last_checkpoint,
            "estimated_tx_per_day_after": self.estimated_tx_per_day_after
        }
