"""
ModifiableParams: the narrow set of setters the unittest profile publishes for test fixtures

Profiles are frozen dataclasses; this module is their only writer. Every setter checks, under one lock held for the
duration of the mutation, that the unittest profile is the active one. Concurrent tests reading the profile while
another thread mutates it are not supported.
"""
import threading
from dataclasses import replace

from netparams.core import ParamsNotModifiableError
from netparams.core.logging import get_logger
from netparams.params.profile import ChainParameterProfile, Network

logger = get_logger(__name__)

__all__ = ["ModifiableParams", "MODIFIABLE_FIELDS"]

_LOCK = threading.Lock()

MODIFIABLE_FIELDS = (
    "subsidy_halving_interval",
    "enforce_block_upgrade_majority",
    "reject_block_outdated_majority",
    "to_check_block_upgrade_majority",
    "default_check_mempool",
    "allow_min_difficulty_blocks",
    "skip_proof_of_work_check",
)


def _process_registry():
    # Imported here: the registry module imports this one
    from netparams.params.registry import get_registry
    return get_registry()


class ModifiableParams:
    """
    Published setters to allow changing values in unit test cases.

    The handle is bound to a registry (the process-wide one unless given) and every setter fails with
    ParamsNotModifiableError while that registry's active network is not unittest, including for handles obtained
    earlier.
    """
    __slots__ = ("_profile", "_registry")

    def __init__(self, profile: ChainParameterProfile, registry=None):
        if not profile.modifiable:
            logger.critical(f"Attempted to modify the {profile.network_id} profile")
            raise ParamsNotModifiableError(f"The {profile.network_id} profile is not modifiable")
        self._profile = profile
        self._registry = registry if registry is not None else _process_registry()
        self._check_active()

    @property
    def profile(self) -> ChainParameterProfile:
        return self._profile

    def _check_active(self):
        active = self._registry.active_network
        if active is not Network.UNITTEST:
            logger.critical(f"Modifiable params used while {active or 'no network'} is active")
            raise ParamsNotModifiableError(f"Modifiable params are only available while unittest is active, "
                                           f"not {active or 'no network'}")

    def _set(self, name: str, value):
        with _LOCK:
            self._check_active()
            object.__setattr__(self._profile, name, value)
        logger.debug(f"unittest {name} set to {value}")

    def _set_majority(self, name: str, value: int):
        with _LOCK:
            self._check_active()
            object.__setattr__(self._profile, "majority", replace(self._profile.majority, **{name: value}))
        logger.debug(f"unittest majority {name} set to {value}")

    def set_subsidy_halving_interval(self, interval: int):
        self._set("subsidy_halving_interval", interval)

    def set_enforce_block_upgrade_majority(self, majority: int):
        self._set_majority("enforce_block_upgrade", majority)

    def set_reject_block_outdated_majority(self, majority: int):
        self._set_majority("reject_block_outdated", majority)

    def set_to_check_block_upgrade_majority(self, majority: int):
        self._set_majority("to_check_block_upgrade", majority)

    def set_default_check_mempool(self, flag: bool):
        self._set("default_check_mempool", flag)

    def set_allow_min_difficulty_blocks(self, flag: bool):
        self._set("allow_min_difficulty_blocks", flag)

    def set_skip_proof_of_work_check(self, flag: bool):
        self._set("skip_proof_of_work_check", flag)

    def current(self) -> dict:
        """
        Current values of every modifiable field, keyed by the names in MODIFIABLE_FIELDS
        """
        p = self._profile
        return {
            "subsidy_halving_interval": p.subsidy_halving_interval,
            "enforce_block_upgrade_majority": p.majority.enforce_block_upgrade,
            "reject_block_outdated_majority": p.majority.reject_block_outdated,
            "to_check_block_upgrade_majority": p.majority.to_check_block_upgrade,
            "default_check_mempool": p.default_check_mempool,
            "allow_min_difficulty_blocks": p.allow_min_difficulty_blocks,
            "skip_proof_of_work_check": p.skip_proof_of_work_check,
        }

    def apply(self, values: dict):
        """
        Call the setter for each given field, e.g. to restore a dict returned by current()
        """
        unknown = set(values) - set(MODIFIABLE_FIELDS)
        if unknown:
            raise ParamsNotModifiableError(f"Fields not modifiable: {sorted(unknown)}")
        for name, value in values.items():
            getattr(self, f"set_{name}")(value)
