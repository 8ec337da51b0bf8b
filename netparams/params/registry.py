"""
The NetworkRegistry: one profile per network plus the pointer to the active one

The process-wide registry is built when this module is first imported, before any consumer can read it. It starts
Unselected; select_params() moves it to Selected(network) and params() fails until that has happened. No network is
ever assumed by default.
"""
from typing import Optional

from netparams.core import NetworkNotSelectedError, ParamsNotModifiableError
from netparams.core.logging import get_logger
from netparams.params.checkpoints import CheckpointTable
from netparams.params.genesis import assert_genesis
from netparams.params.modifiable import ModifiableParams
from netparams.params.profile import Network, ChainParameterProfile, build_main_params, build_testnet_params, \
    build_regtest_params, build_unittest_params

logger = get_logger(__name__)

__all__ = ["NetworkRegistry", "EXPECTED_GENESIS", "get_registry", "get_params", "select_params", "params",
           "modifiable_params", "checkpoints_for"]

# Recorded genesis hash and merkle root (None when no merkle root was recorded) per network
EXPECTED_GENESIS = {
    Network.MAIN: ("0x0000000061b1aca334b059920fed7bace2336ea4d23d63428c7aee04da49e942",
                   "0x7bf229f629a6666596c1ce57117c28d1d29299e8a5303347929bd70847c49adb"),
    Network.TESTNET: ("0x439b64c567dc10054382e60c9ff2660d1cdfb8db90ff2d5309a83527cb704c59", None),
    Network.REGTEST: ("0x07eb408b27b90773e53bc7c803eb02cf1f725375b67905f80c3c03c821395809", None),
}


class NetworkRegistry:
    """
    Holds the four singleton profiles and the active network.

    Use NetworkRegistry.build() to construct and verify the standard profiles; the constructor accepts any mapping
    covering every Network so tests can assemble their own.
    """

    def __init__(self, profiles: dict[Network, ChainParameterProfile]):
        missing = set(Network) - set(profiles)
        if missing:
            raise ValueError(f"Registry requires a profile for every network, missing: {sorted(missing)}")
        self._profiles = dict(profiles)
        self._active: Optional[Network] = None

    @classmethod
    def build(cls) -> "NetworkRegistry":
        main = build_main_params()
        testnet = build_testnet_params(main)
        regtest = build_regtest_params(testnet)
        unittest = build_unittest_params(main)
        profiles = {p.network_id: p for p in (main, testnet, regtest, unittest)}

        for network, (expected_hash, expected_merkle_root) in EXPECTED_GENESIS.items():
            assert_genesis(network.value, profiles[network].genesis, expected_hash, expected_merkle_root)

        for profile in profiles.values():
            profile.checkpoints.validate_against_genesis(profile.network_name, profile.genesis.time)
            logger.debug(f"Built {profile.network_id} params: port={profile.default_port}, "
                         f"magic={profile.magic_bytes.hex()}, genesis={profile.genesis.hash_hex}")

        return cls(profiles)

    # --- Lookup --- #

    def get(self, network: Network | str) -> ChainParameterProfile:
        return self._profiles[Network.parse(network)]

    def checkpoints_for(self, network: Network | str) -> CheckpointTable:
        return self.get(network).checkpoints

    # --- Selection --- #

    @property
    def is_selected(self) -> bool:
        return self._active is not None

    @property
    def active_network(self) -> Optional[Network]:
        return self._active

    def select(self, network: Network | str) -> ChainParameterProfile:
        network = Network.parse(network)
        if self._active is not None and self._active != network:
            logger.warning(f"Re-selecting chain params: {self._active} -> {network}")
        self._active = network
        logger.info(f"Selected chain params for network {network}")
        return self._profiles[network]

    def active(self) -> ChainParameterProfile:
        if self._active is None:
            logger.critical("Chain params read before any network was selected")
            raise NetworkNotSelectedError("No network selected; call select_params() first")
        return self._profiles[self._active]

    def reset(self):
        """
        Return to the Unselected state. Meant for test fixtures only.
        """
        self._active = None

    def modifiable_params(self) -> ModifiableParams:
        profile = self.active()
        if self._active != Network.UNITTEST:
            logger.critical(f"Modifiable params requested while {self._active} is active")
            raise ParamsNotModifiableError(f"Modifiable params are only available while unittest is active, "
                                           f"not {self._active}")
        return ModifiableParams(profile, registry=self)


_REGISTRY = NetworkRegistry.build()


def get_registry() -> NetworkRegistry:
    return _REGISTRY


def get_params(network: Network | str) -> ChainParameterProfile:
    return _REGISTRY.get(network)


def select_params(network: Network | str) -> ChainParameterProfile:
    return _REGISTRY.select(network)


def params() -> ChainParameterProfile:
    return _REGISTRY.active()


def modifiable_params() -> ModifiableParams:
    return _REGISTRY.modifiable_params()


def checkpoints_for(network: Network | str) -> CheckpointTable:
    return _REGISTRY.checkpoints_for(network)
