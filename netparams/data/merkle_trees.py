"""
The MerkleTree used to commit a block header to its transactions
"""
import json
import math

from netparams.core import MerkleError
from netparams.core.logging import get_logger
from netparams.crypto import hash256

logger = get_logger(__name__)

__all__ = ["MerkleTree"]


class MerkleTree:
    """
    A Merkle tree built from a list of transaction ids.

    Attributes:
        height (int): The height of the Merkle tree.
        tree (dict[int, list[bytes]]): Dictionary representing the tree levels with hash values.
        merkle_root (bytes): The Merkle root in natural (internal) byte order.

    A tree with a single leaf has that leaf as its root; this is the case for every genesis block.
    """

    def __init__(self, id_list: list[str | bytes]):
        if not id_list:
            logger.error("Attempted to initialize MerkleTree with an empty list.")
            raise MerkleError("ID list cannot be empty. A Merkle tree requires at least one transaction ID.")

        self.height = 0 if len(id_list) == 1 else math.ceil(math.log2(len(id_list)))
        self.tree = self._create_tree(id_list)
        self.merkle_root = self.tree[0][0]

    def _create_tree(self, id_list: list[str | bytes]) -> dict[int, list[bytes]]:
        level_hashes = self._clean_list(id_list)

        if len(level_hashes) == 1:
            return {0: level_hashes}

        tree = {}
        for level in range(self.height, 0, -1):  # Stop at level 1, leave root untouched
            if len(level_hashes) % 2 != 0:
                level_hashes.append(level_hashes[-1])  # Duplicate last element if odd

            tree[level] = level_hashes
            level_hashes = [hash256(level_hashes[i] + level_hashes[i + 1]) for i in range(0, len(level_hashes), 2)]

        tree[0] = level_hashes
        return tree

    @staticmethod
    def _clean_list(id_list: list[str | bytes]) -> list[bytes]:
        """
        Converts transaction IDs to bytes format.
        """
        return [bytes.fromhex(_id) if isinstance(_id, str) else _id for _id in id_list]

    def to_dict(self) -> dict:
        return {level: [node.hex() for node in nodes] for level, nodes in self.tree.items()}

    def __repr__(self):
        return json.dumps(self.to_dict(), indent=2)
