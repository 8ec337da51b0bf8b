"""
Tests for the four network profiles and their derivation
"""
import json
from dataclasses import FrozenInstanceError, fields, replace

import pytest

from netparams.core import AddressPrefixError, UnknownNetworkError, DataEncodingError
from netparams.params import AddressKind, Network, MajorityThresholds, ChainParameterProfile, derive, get_params, \
    checkpoints_for, select_params, params

# Fields each derived profile sets itself; every other field is inherited from its parent
TESTNET_OVERRIDES = {
    "network_id", "magic_bytes", "alert_pubkey", "default_port", "pow_limit", "majority", "miner_threads",
    "target_timespan", "target_spacing", "genesis", "checkpoints", "address_prefixes", "dns_seeds", "fixed_seeds",
    "require_rpc_password", "mining_requires_peers", "default_check_mempool", "allow_min_difficulty_blocks",
    "require_standard", "mine_blocks_on_demand", "testnet_to_be_deprecated_field_rpc"
}
REGTEST_OVERRIDES = {
    "network_id", "magic_bytes", "default_port", "pow_limit", "subsidy_halving_interval", "majority", "miner_threads",
    "target_timespan", "target_spacing", "genesis", "checkpoints", "dns_seeds", "fixed_seeds", "require_rpc_password",
    "mining_requires_peers", "default_check_mempool", "allow_min_difficulty_blocks", "require_standard",
    "mine_blocks_on_demand", "testnet_to_be_deprecated_field_rpc"
}
UNITTEST_OVERRIDES = {
    "network_id", "default_port", "dns_seeds", "fixed_seeds", "require_rpc_password", "mining_requires_peers",
    "default_check_mempool", "allow_min_difficulty_blocks", "mine_blocks_on_demand", "modifiable"
}


@pytest.mark.parametrize("child, parent, overrides", [
    (Network.TESTNET, Network.MAIN, TESTNET_OVERRIDES),
    (Network.REGTEST, Network.TESTNET, REGTEST_OVERRIDES),
    (Network.UNITTEST, Network.MAIN, UNITTEST_OVERRIDES),
])
def test_inherited_fields(child, parent, overrides):
    child_profile, parent_profile = get_params(child), get_params(parent)
    for f in fields(ChainParameterProfile):
        if f.name not in overrides:
            assert getattr(child_profile, f.name) == getattr(parent_profile, f.name), \
                f"{child} did not inherit {f.name} from {parent}"


def test_main_profile():
    main = get_params("main")
    assert main.network_id == Network.MAIN
    assert main.default_port == 9488
    assert main.magic_bytes == bytes.fromhex("900df10d")
    assert main.pow_limit == ((1 << 256) - 1) >> 8
    assert main.pow_limit_bits == 0x2000ffff
    assert main.subsidy_halving_interval == 2100000
    assert main.majority == MajorityThresholds(750, 950, 1000)
    assert main.difficulty_adjustment_interval == 60
    assert main.checkpoints.last_checkpoint_time == 1512025515
    assert main.genesis_subsidy == 100

    assert main.base58_prefix(AddressKind.PUBKEY_ADDRESS) == bytes([35])
    assert main.base58_prefix(AddressKind.EXT_SECRET_KEY) == bytes.fromhex("0488ee45")

    assert (main.require_rpc_password, main.mining_requires_peers, main.default_check_mempool) == (True, False, False)
    assert (main.allow_min_difficulty_blocks, main.require_standard, main.mine_blocks_on_demand) == (True, True, False)
    assert not main.skip_proof_of_work_check
    assert not main.testnet_to_be_deprecated_field_rpc


def test_testnet_profile():
    testnet = get_params("test")
    assert testnet.default_port == 19488
    assert testnet.magic_bytes == bytes.fromhex("c01df10d")
    assert testnet.majority == MajorityThresholds(51, 75, 100)
    assert testnet.miner_threads == 0
    assert testnet.difficulty_adjustment_interval == 2016
    assert testnet.base58_prefix(AddressKind.SECRET_KEY) == bytes([239])
    assert testnet.mining_requires_peers
    assert not testnet.require_standard
    assert testnet.testnet_to_be_deprecated_field_rpc


def test_regtest_profile():
    regtest = get_params("regtest")
    assert regtest.default_port == 29488
    assert regtest.magic_bytes == bytes.fromhex("0badf10d")
    assert regtest.pow_limit_bits == 0x207fffff
    assert regtest.subsidy_halving_interval == 150
    assert regtest.majority == MajorityThresholds(750, 950, 1000)
    assert regtest.genesis.time == 1296688602 and regtest.genesis.nonce == 2
    assert regtest.alert_pubkey == get_params("test").alert_pubkey
    assert regtest.mine_blocks_on_demand and regtest.default_check_mempool
    assert not regtest.require_rpc_password
    assert regtest.checkpoints.last_checkpoint_time == 0


def test_unittest_profile():
    unittest = get_params("unittest")
    assert unittest.default_port == 18445
    assert unittest.modifiable
    assert not get_params("main").modifiable
    assert unittest.checkpoints is get_params("main").checkpoints
    assert checkpoints_for("unittest") is checkpoints_for("main")
    assert unittest.require_standard, "unittest should inherit require_standard from main"
    assert not unittest.allow_min_difficulty_blocks


def test_magic_and_ports_distinct():
    profiles = [get_params(n) for n in (Network.MAIN, Network.TESTNET, Network.REGTEST)]
    assert len({p.magic_bytes for p in profiles}) == 3
    assert len({get_params(n).default_port for n in Network}) == 4


@pytest.mark.parametrize("network", list(Network))
def test_address_prefixes_distinct(network):
    prefixes = get_params(network).address_prefixes
    assert set(prefixes) == set(AddressKind)
    assert len(set(prefixes.values())) == len(AddressKind), f"Address prefixes collide on {network}"


def test_duplicate_prefix_rejected():
    main = get_params("main")
    prefixes = dict(main.address_prefixes)
    prefixes[AddressKind.SCRIPT_ADDRESS] = prefixes[AddressKind.PUBKEY_ADDRESS]
    with pytest.raises(AddressPrefixError):
        replace(main, address_prefixes=prefixes)

    del prefixes[AddressKind.SCRIPT_ADDRESS]
    with pytest.raises(AddressPrefixError):
        replace(main, address_prefixes=prefixes)


def test_profile_validation():
    main = get_params("main")
    with pytest.raises(DataEncodingError):
        replace(main, magic_bytes=b'\x01\x02\x03')
    with pytest.raises(DataEncodingError):
        replace(main, pow_limit=0)
    with pytest.raises(UnknownNetworkError):
        replace(main, network_id="signet")


def test_derive_rejects_unknown_fields():
    with pytest.raises(TypeError):
        derive(get_params("main"), block_reward=50)


def test_derived_profile_is_a_snapshot():
    """
    Rebinding a parent field after derivation never reaches the child
    """
    main, testnet, regtest = get_params("main"), get_params("test"), get_params("regtest")
    saved_interval, saved_pubkey = main.subsidy_halving_interval, testnet.alert_pubkey
    try:
        # Profiles are frozen, so force the rebind
        object.__setattr__(main, "subsidy_halving_interval", 1)
        object.__setattr__(testnet, "alert_pubkey", b'\x00')
        assert testnet.subsidy_halving_interval == 2100000
        assert get_params("unittest").subsidy_halving_interval != 1
        assert regtest.alert_pubkey != b'\x00'
    finally:
        object.__setattr__(main, "subsidy_halving_interval", saved_interval)
        object.__setattr__(testnet, "alert_pubkey", saved_pubkey)


@pytest.mark.parametrize("network", list(Network))
def test_profiles_are_read_only(network):
    """
    Consumers cannot rebind profile fields; unittest changes go through ModifiableParams only
    """
    select_params(network)
    with pytest.raises(FrozenInstanceError):
        params().default_port = 1
    with pytest.raises(FrozenInstanceError):
        params().require_standard = False
    assert params().default_port == get_params(network).default_port != 1


def test_prefixes_read_only():
    with pytest.raises(TypeError):
        get_params("main").address_prefixes[AddressKind.PUBKEY_ADDRESS] = b'\x00'


def test_to_json():
    data = json.loads(get_params("regtest").to_json())
    assert data["network_id"] == "regtest"
    assert data["default_port"] == 29488
    assert data["magic_bytes"] == "0badf10d"
    assert data["genesis"]["hash"] == get_params("regtest").genesis.hash_hex
    assert data["address_prefixes"]["ext_public_key"] == "043587cf"


@pytest.mark.parametrize("network", list(Network))
def test_extended_key_prefixes_share_leading_byte(network):
    """
    Prefixes are compared whole: the extended key versions share their first byte and are still accepted
    """
    prefixes = get_params(network).address_prefixes
    ext_public, ext_secret = prefixes[AddressKind.EXT_PUBLIC_KEY], prefixes[AddressKind.EXT_SECRET_KEY]
    assert ext_public[0] == ext_secret[0] == 0x04
    assert ext_public != ext_secret
