"""
Command-line network selection

    python -m netparams --regtest
    python -m netparams --network unittest --genesis-block

Neither --testnet nor --regtest selects main; giving both is an error.
"""
import argparse
import json
import sys
from typing import Optional, Sequence

from netparams.core import ChainParamsError
from netparams.core.logging import get_logger, set_log_level
from netparams.params import Network, select_params

logger = get_logger(__name__)

__all__ = ["build_parser", "network_from_args", "select_params_from_args", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="netparams", description="Select and show chain parameters")

    parser.add_argument(
        "--testnet",
        action="store_true",
        help="Use the public test network"
    )

    parser.add_argument(
        "--regtest",
        action="store_true",
        help="Use the local regression test network"
    )

    parser.add_argument(
        "--network",
        type=str,
        choices=[n.value for n in Network],
        help="Select a network by identifier"
    )

    parser.add_argument(
        "--genesis-block",
        action="store_true",
        help="Show the full genesis block instead of the profile"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level"
    )
    return parser


def _network_from_namespace(args: argparse.Namespace) -> Optional[Network]:
    flagged = [n for n, on in ((Network.TESTNET, args.testnet), (Network.REGTEST, args.regtest)) if on]
    if args.network:
        flagged.append(Network(args.network))

    if len(set(flagged)) > 1:
        return None
    return flagged[0] if flagged else Network.MAIN


def network_from_args(argv: Optional[Sequence[str]] = None) -> Optional[Network]:
    """
    Network chosen by the given arguments, or None when they ask for more than one. Unrelated arguments are ignored.
    """
    args, _ = build_parser().parse_known_args(argv)
    return _network_from_namespace(args)


def select_params_from_args(argv: Optional[Sequence[str]] = None) -> bool:
    network = network_from_args(argv)
    if network is None:
        return False

    select_params(network)
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_log_level(args.log_level)

    network = _network_from_namespace(args)
    if network is None:
        logger.error("Invalid combination of network arguments: choose at most one of --testnet, --regtest, --network")
        return 1

    try:
        profile = select_params(network)
    except ChainParamsError as e:
        logger.critical(f"Unable to select chain params: {e}")
        return 1

    if args.genesis_block:
        print(profile.genesis.to_block().to_json())
    else:
        print(json.dumps(profile.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
