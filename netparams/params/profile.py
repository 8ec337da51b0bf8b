"""
The ChainParameterProfile and the construction of the four network profiles

Profiles are built in a fixed order:
    main     from literal constants
    test     derived from main
    regtest  derived from test
    unittest derived from main

derive() copies the parent and applies the child's overrides. Every field value of a profile is immutable (ints,
bools, bytes, tuples, read-only mappings and frozen dataclasses), so a derived profile is a snapshot of its parent:
rebinding a field on the parent later never reaches the child.
"""
import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from netparams.core import COIN, AddressPrefixError, UnknownNetworkError, DataEncodingError
from netparams.core.logging import get_logger
from netparams.data import target_to_bits
from netparams.params.checkpoints import CheckpointTable
from netparams.params.genesis import GenesisBlockDescriptor
from netparams.params.seeds import DNSSeed, SeedSpec6, SeedAddress, convert_seed6

logger = get_logger(__name__)

__all__ = ["Network", "AddressKind", "MajorityThresholds", "ChainParameterProfile", "derive", "build_main_params",
           "build_testnet_params", "build_regtest_params", "build_unittest_params", "MAIN_CHECKPOINTS",
           "TESTNET_CHECKPOINTS", "REGTEST_CHECKPOINTS"]

MAGIC_BYTES_LENGTH = 4
MAX_UINT256 = (1 << 256) - 1


class Network(str, Enum):
    MAIN = "main"
    TESTNET = "test"
    REGTEST = "regtest"
    UNITTEST = "unittest"

    @classmethod
    def parse(cls, value: "Network | str") -> "Network":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.critical(f"Unimplemented network: {value!r}")
            raise UnknownNetworkError(f"Unimplemented network: {value!r}") from None

    def __str__(self):
        return self.value


class AddressKind(Enum):
    PUBKEY_ADDRESS = "pubkey_address"
    SCRIPT_ADDRESS = "script_address"
    SECRET_KEY = "secret_key"
    EXT_PUBLIC_KEY = "ext_public_key"
    EXT_SECRET_KEY = "ext_secret_key"


@dataclass(frozen=True)
class MajorityThresholds:
    """
    Soft-fork activation voting: out of the last to_check_block_upgrade blocks, enforce_block_upgrade upgraded blocks
    enforce the new rules and reject_block_outdated reject old-version blocks.
    """
    enforce_block_upgrade: int
    reject_block_outdated: int
    to_check_block_upgrade: int


@dataclass(frozen=True)
class ChainParameterProfile:
    """
    The complete set of protocol constants for one network.

    Consumers read profiles through the registry and never construct them. Profiles are frozen: only the unittest
    profile is changed after construction, and only through ModifiableParams.
    """
    network_id: Network
    magic_bytes: bytes  # Message start marker, unique per network
    alert_pubkey: bytes
    default_port: int
    pow_limit: int  # Largest allowed target
    subsidy_halving_interval: int
    majority: MajorityThresholds
    miner_threads: int  # 0 means all available cpus
    target_timespan: int  # Seconds between retargets
    target_spacing: int  # Seconds between blocks
    genesis_subsidy: int  # Whole coins paid by the genesis coinbase
    genesis: GenesisBlockDescriptor
    checkpoints: CheckpointTable
    address_prefixes: Mapping[AddressKind, bytes]
    dns_seeds: tuple[DNSSeed, ...] = ()
    fixed_seeds: tuple[SeedSpec6, ...] = ()

    # --- Policy flags --- #
    require_rpc_password: bool = True
    mining_requires_peers: bool = True
    default_check_mempool: bool = False
    allow_min_difficulty_blocks: bool = False
    require_standard: bool = True
    mine_blocks_on_demand: bool = False
    skip_proof_of_work_check: bool = False
    testnet_to_be_deprecated_field_rpc: bool = False

    modifiable: bool = field(default=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "network_id", Network.parse(self.network_id))
        if len(self.magic_bytes) != MAGIC_BYTES_LENGTH:
            raise DataEncodingError(f"Magic bytes must be {MAGIC_BYTES_LENGTH} bytes for network {self.network_id}")
        if not 0 < self.pow_limit <= MAX_UINT256:
            raise DataEncodingError(f"Proof of work limit out of range for network {self.network_id}")

        object.__setattr__(self, "address_prefixes", MappingProxyType(dict(self.address_prefixes)))
        self._validate_address_prefixes()

    def _validate_address_prefixes(self):
        missing = set(AddressKind) - set(self.address_prefixes)
        if missing:
            raise AddressPrefixError(f"Missing address prefixes for network {self.network_id}: "
                                     f"{sorted(k.value for k in missing)}")

        # Whole prefixes must differ; the two extended-key versions share their leading 0x04 byte
        seen = {}
        for kind, prefix in self.address_prefixes.items():
            if prefix in seen:
                logger.critical(f"Address prefix {prefix.hex()} shared by {seen[prefix].value} and {kind.value} "
                                f"on network {self.network_id}")
                raise AddressPrefixError(f"{seen[prefix].value} and {kind.value} share prefix {prefix.hex()} "
                                         f"on network {self.network_id}")
            seen[prefix] = kind

    # --- Accessors --- #

    @property
    def network_name(self) -> str:
        return self.network_id.value

    @property
    def genesis_hash(self) -> bytes:
        return self.genesis.block_hash

    @property
    def difficulty_adjustment_interval(self) -> int:
        return self.target_timespan // self.target_spacing

    @property
    def pow_limit_bits(self) -> int:
        return int.from_bytes(target_to_bits(self.pow_limit.to_bytes(32, "big")), "big")

    def base58_prefix(self, kind: AddressKind) -> bytes:
        return self.address_prefixes[kind]

    def fixed_seed_addresses(self, now: int = None) -> list[SeedAddress]:
        return convert_seed6(self.fixed_seeds, now=now)

    def to_dict(self) -> dict:
        return {
            "network_id": self.network_name,
            "magic_bytes": self.magic_bytes.hex(),
            "alert_pubkey": self.alert_pubkey.hex(),
            "default_port": self.default_port,
            "pow_limit": f"{self.pow_limit:064x}",
            "subsidy_halving_interval": self.subsidy_halving_interval,
            "majority": {
                "enforce_block_upgrade": self.majority.enforce_block_upgrade,
                "reject_block_outdated": self.majority.reject_block_outdated,
                "to_check_block_upgrade": self.majority.to_check_block_upgrade
            },
            "miner_threads": self.miner_threads,
            "target_timespan": self.target_timespan,
            "target_spacing": self.target_spacing,
            "genesis": self.genesis.to_dict(),
            "checkpoints": self.checkpoints.to_dict(),
            "address_prefixes": {k.value: v.hex() for k, v in self.address_prefixes.items()},
            "dns_seeds": [{"name": s.name, "host": s.host} for s in self.dns_seeds],
            "fixed_seeds": [f"{s.ip}:{s.port}" for s in self.fixed_seeds],
            "require_rpc_password": self.require_rpc_password,
            "mining_requires_peers": self.mining_requires_peers,
            "default_check_mempool": self.default_check_mempool,
            "allow_min_difficulty_blocks": self.allow_min_difficulty_blocks,
            "require_standard": self.require_standard,
            "mine_blocks_on_demand": self.mine_blocks_on_demand,
            "skip_proof_of_work_check": self.skip_proof_of_work_check,
            "testnet_to_be_deprecated_field_rpc": self.testnet_to_be_deprecated_field_rpc
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def derive(parent: ChainParameterProfile, **overrides) -> ChainParameterProfile:
    """
    Copy the parent and apply the overrides. Unknown field names raise TypeError.
    """
    known = {f.name for f in fields(ChainParameterProfile)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown profile fields: {sorted(unknown)}")

    child = replace(parent, **overrides)
    logger.debug(f"Derived {child.network_id} from {parent.network_id}, overriding {sorted(overrides)}")
    return child


# --- CHECKPOINT DATA --- #

MAIN_CHECKPOINTS = CheckpointTable.from_mapping(
    {0: "0x001"},
    last_checkpoint_time=1512025515,
    tx_count_at_last_checkpoint=10,
    estimated_tx_per_day_after=60000.0
)

TESTNET_CHECKPOINTS = CheckpointTable.from_mapping(
    {0: "0x001"},
    last_checkpoint_time=1512025519,
    tx_count_at_last_checkpoint=1488,
    estimated_tx_per_day_after=300.0
)

REGTEST_CHECKPOINTS = CheckpointTable.from_mapping(
    {0: "0x001"},
    last_checkpoint_time=0,
    tx_count_at_last_checkpoint=0,
    estimated_tx_per_day_after=0.0
)

# --- GENESIS DATA --- #

GENESIS_TIMESTAMP = "shanghai stock index closed at 2343.57, on 24th Sept., 2014"
GENESIS_PUBKEY = bytes.fromhex(
    "049e02fa9aa3c19a3b112a58bab503c5caf797972f5cfe1006275aa5485a01b48f"
    "9f648bc5380ee1e82dc6f474c8e0f7e2f6bbd0de9355f92496e3ea327ccb19cc"
)
GENESIS_SUBSIDY = 100


def build_main_params() -> ChainParameterProfile:
    genesis = GenesisBlockDescriptor.build(
        timestamp_text=GENESIS_TIMESTAMP,
        reward=GENESIS_SUBSIDY * COIN,
        pubkey=GENESIS_PUBKEY,
        time=1411666331,
        bits=0x1d00ffff,
        nonce=2056985438
    )
    return ChainParameterProfile(
        network_id=Network.MAIN,
        magic_bytes=bytes([0x90, 0x0d, 0xf1, 0x0d]),
        alert_pubkey=bytes.fromhex(
            "0420072dbff945ab3dbd3ad0c4ac98397af586fb655d5151c087057a132daec5"
            "63ca70654af670017796252dcb4d058d50d027c0bec058b12d06688ff6518fdcb8"
        ),
        default_port=9488,
        pow_limit=MAX_UINT256 >> 8,
        subsidy_halving_interval=2100000,
        majority=MajorityThresholds(750, 950, 1000),
        miner_threads=1,
        target_timespan=60 * 60,  # Retarget every hour
        target_spacing=60,
        genesis_subsidy=GENESIS_SUBSIDY,
        genesis=genesis,
        checkpoints=MAIN_CHECKPOINTS,
        address_prefixes={
            AddressKind.PUBKEY_ADDRESS: bytes([35]),  # F
            AddressKind.SCRIPT_ADDRESS: bytes([65]),  # T
            AddressKind.SECRET_KEY: bytes([45]),  # 7
            AddressKind.EXT_PUBLIC_KEY: bytes([0x04, 0x88, 0xEE, 0x35]),
            AddressKind.EXT_SECRET_KEY: bytes([0x04, 0x88, 0xEE, 0x45]),
        },
        dns_seeds=(),
        fixed_seeds=(),
        require_rpc_password=True,
        mining_requires_peers=False,
        default_check_mempool=False,
        allow_min_difficulty_blocks=True,
        require_standard=True,
        mine_blocks_on_demand=False,
        skip_proof_of_work_check=False,
        testnet_to_be_deprecated_field_rpc=False
    )


def build_testnet_params(main: ChainParameterProfile) -> ChainParameterProfile:
    return derive(
        main,
        network_id=Network.TESTNET,
        magic_bytes=bytes([0xC0, 0x1d, 0xf1, 0x0d]),
        alert_pubkey=bytes.fromhex(
            "045d2d29beffb0a0cbea44f266286ff8b1d11c035538fbb4dadcf6b4073b08f3"
            "18afea74f01d5a3782e72a22273fb01ab40e99d93adff488236585cc8031323e7c"
        ),
        default_port=19488,
        pow_limit=MAX_UINT256 >> 1,
        majority=MajorityThresholds(51, 75, 100),
        miner_threads=0,
        target_timespan=14 * 24 * 60 * 60,  # Two weeks
        target_spacing=10 * 60,
        genesis=main.genesis.with_header(time=1411666331, bits=0x207fffff, nonce=6),
        checkpoints=TESTNET_CHECKPOINTS,
        address_prefixes={
            AddressKind.PUBKEY_ADDRESS: bytes([111]),
            AddressKind.SCRIPT_ADDRESS: bytes([196]),
            AddressKind.SECRET_KEY: bytes([239]),
            AddressKind.EXT_PUBLIC_KEY: bytes([0x04, 0x35, 0x87, 0xCF]),
            AddressKind.EXT_SECRET_KEY: bytes([0x04, 0x35, 0x83, 0x94]),
        },
        dns_seeds=(),
        fixed_seeds=(),
        require_rpc_password=True,
        mining_requires_peers=True,
        default_check_mempool=False,
        allow_min_difficulty_blocks=True,
        require_standard=False,
        mine_blocks_on_demand=False,
        testnet_to_be_deprecated_field_rpc=True
    )


def build_regtest_params(testnet: ChainParameterProfile) -> ChainParameterProfile:
    return derive(
        testnet,
        network_id=Network.REGTEST,
        magic_bytes=bytes([0x0b, 0xad, 0xf1, 0x0d]),
        default_port=29488,
        pow_limit=MAX_UINT256 >> 1,
        subsidy_halving_interval=150,
        majority=MajorityThresholds(750, 950, 1000),
        miner_threads=1,
        target_timespan=14 * 24 * 60 * 60,
        target_spacing=10 * 60,
        genesis=testnet.genesis.with_header(time=1296688602, bits=0x207fffff, nonce=2),
        checkpoints=REGTEST_CHECKPOINTS,
        dns_seeds=(),
        fixed_seeds=(),
        require_rpc_password=False,
        mining_requires_peers=False,
        default_check_mempool=True,
        allow_min_difficulty_blocks=True,
        require_standard=False,
        mine_blocks_on_demand=True,
        testnet_to_be_deprecated_field_rpc=False
    )


def build_unittest_params(main: ChainParameterProfile) -> ChainParameterProfile:
    # Checkpoints are inherited: unittest shares the main table instance
    return derive(
        main,
        network_id=Network.UNITTEST,
        default_port=18445,
        dns_seeds=(),
        fixed_seeds=(),
        require_rpc_password=False,
        mining_requires_peers=False,
        default_check_mempool=True,
        allow_min_difficulty_blocks=False,
        mine_blocks_on_demand=True,
        modifiable=True
    )
