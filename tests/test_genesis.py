"""
Tests for genesis block construction and verification
"""
from dataclasses import FrozenInstanceError

import pytest

from netparams.core import COIN, GenesisMismatchError
from netparams.params import GenesisBlockDescriptor, build_genesis, verify_genesis, assert_genesis, get_params, \
    EXPECTED_GENESIS, Network
from netparams.params.profile import GENESIS_TIMESTAMP, GENESIS_PUBKEY

MAIN_GENESIS_HASH = "0000000061b1aca334b059920fed7bace2336ea4d23d63428c7aee04da49e942"
MAIN_MERKLE_ROOT = "7bf229f629a6666596c1ce57117c28d1d29299e8a5303347929bd70847c49adb"
TESTNET_GENESIS_HASH = "439b64c567dc10054382e60c9ff2660d1cdfb8db90ff2d5309a83527cb704c59"
REGTEST_GENESIS_HASH = "07eb408b27b90773e53bc7c803eb02cf1f725375b67905f80c3c03c821395809"


def main_descriptor() -> GenesisBlockDescriptor:
    return build_genesis(GENESIS_TIMESTAMP, 100 * COIN, GENESIS_PUBKEY, 1411666331, 0x1d00ffff, 2056985438)


def test_main_genesis_from_literals():
    """
    Building from the literal constants reproduces the recorded hash and merkle root
    """
    genesis = main_descriptor()
    assert genesis.hash_hex == MAIN_GENESIS_HASH, "Main genesis hash mismatch"
    assert genesis.merkle_root_hex == MAIN_MERKLE_ROOT, "Main genesis merkle root mismatch"
    assert verify_genesis(genesis, "0x" + MAIN_GENESIS_HASH)
    assert genesis.verify(bytes.fromhex(MAIN_GENESIS_HASH)[::-1])


def test_header_variants():
    """
    Test and regtest reuse the main coinbase under their own header fields
    """
    main = main_descriptor()
    testnet = main.with_header(time=1411666331, bits=0x207fffff, nonce=6)
    regtest = testnet.with_header(time=1296688602, bits=0x207fffff, nonce=2)

    assert testnet.hash_hex == TESTNET_GENESIS_HASH, "Testnet genesis hash mismatch"
    assert regtest.hash_hex == REGTEST_GENESIS_HASH, "Regtest genesis hash mismatch"
    assert testnet.merkle_root == main.merkle_root == regtest.merkle_root


def test_every_profile_carries_recorded_genesis():
    for network, (expected_hash, expected_merkle_root) in EXPECTED_GENESIS.items():
        genesis = get_params(network).genesis
        assert genesis.verify(expected_hash), f"Genesis hash mismatch for {network}"
        if expected_merkle_root is not None:
            assert genesis.merkle_root_hex == expected_merkle_root[2:]

    assert get_params(Network.UNITTEST).genesis.hash_hex == MAIN_GENESIS_HASH


def test_coinbase_layout():
    """
    One null-prevout input pushing bits, 4 and the timestamp text; one P2PK output paying the reward
    """
    coinbase = main_descriptor().coinbase()
    assert coinbase.is_coinbase
    assert coinbase.version == 1 and coinbase.locktime == 0

    scriptsig = coinbase.inputs[0].scriptsig
    assert scriptsig == bytes.fromhex("04ffff001d01043b") + GENESIS_TIMESTAMP.encode("utf-8")

    output = coinbase.outputs[0]
    assert output.amount == 100 * COIN
    assert output.scriptpubkey == b'\x41' + GENESIS_PUBKEY + b'\xac'


def test_block_matches_descriptor():
    genesis = main_descriptor()
    block = genesis.to_block()
    assert block.block_id == genesis.block_hash
    assert block.prev_block == b'\x00' * 32
    assert len(block.txs) == 1
    assert genesis.to_dict()["hash"] == MAIN_GENESIS_HASH


def test_changed_input_changes_hash():
    genesis = main_descriptor()
    assert not genesis.with_header(genesis.time, genesis.bits, genesis.nonce + 1).verify(MAIN_GENESIS_HASH)

    reworded = build_genesis(GENESIS_TIMESTAMP + ".", 100 * COIN, GENESIS_PUBKEY, 1411666331, 0x1d00ffff,
                             2056985438)
    assert reworded.merkle_root != genesis.merkle_root


def test_assert_genesis_mismatch():
    genesis = main_descriptor()
    assert_genesis("main", genesis, MAIN_GENESIS_HASH, MAIN_MERKLE_ROOT)

    with pytest.raises(GenesisMismatchError) as exc_info:
        assert_genesis("main", genesis, TESTNET_GENESIS_HASH)
    assert exc_info.value.network_id == "main"
    assert exc_info.value.field == "hash"
    assert "main" in str(exc_info.value)

    with pytest.raises(GenesisMismatchError) as exc_info:
        assert_genesis("main", genesis, MAIN_GENESIS_HASH, TESTNET_GENESIS_HASH)
    assert exc_info.value.field == "merkle root"


def test_descriptor_is_immutable():
    genesis = main_descriptor()
    with pytest.raises(FrozenInstanceError):
        genesis.nonce = 1
