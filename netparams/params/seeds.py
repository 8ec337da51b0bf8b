"""
Seed node hints: DNS seeds and fixed IPv6-mapped seed addresses

Resolving them is left to the networking layer; this module only stores them and converts the fixed specs into
address records.
"""
import ipaddress
import random
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from netparams.core import SEEDS, DataEncodingError

__all__ = ["DNSSeed", "SeedSpec6", "SeedAddress", "convert_seed6"]


@dataclass(frozen=True)
class DNSSeed:
    name: str
    host: str


@dataclass(frozen=True)
class SeedSpec6:
    addr: bytes  # 16 bytes, IPv4 addresses in ::ffff:a.b.c.d form
    port: int

    def __post_init__(self):
        if len(self.addr) != SEEDS.IPV6_BYTES:
            raise DataEncodingError(f"Seed address must be {SEEDS.IPV6_BYTES} bytes, got {len(self.addr)}")
        if not 0 <= self.port <= 0xffff:
            raise DataEncodingError(f"Seed port out of range: {self.port}")

    @property
    def ip(self) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
        ip6 = ipaddress.IPv6Address(self.addr)
        return ip6.ipv4_mapped or ip6


@dataclass(frozen=True)
class SeedAddress:
    host: str
    port: int
    last_seen: int


def convert_seed6(specs: Iterable[SeedSpec6], now: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> list[SeedAddress]:
    """
    Turn fixed seed specs into address records.

    The node only connects to one or two seeds because once it connects it gets a pile of addresses with newer
    timestamps, so each seed gets a random last-seen time between one and two weeks ago.
    """
    now = int(time.time()) if now is None else now
    rng = rng or random.Random()
    return [
        SeedAddress(str(spec.ip), spec.port, now - rng.randrange(SEEDS.ONE_WEEK) - SEEDS.ONE_WEEK)
        for spec in specs
    ]
