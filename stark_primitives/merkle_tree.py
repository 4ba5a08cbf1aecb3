"""Binary Merkle vector commitment over field elements.

Leaves are hashed on construction. Parents are hash(left + right): siblings
are summed in the field before hashing, not concatenated.

Authentication paths list one sibling per level, leaf level first. During
verification the leaf index bits give the operand order: bit 0 means the
running value is the left operand, bit 1 means it is the right operand.
"""

import logging
from typing import List, Optional, Sequence, Union

from stark_primitives.errors import InvalidLeafCountError, MerkleIndexError
from stark_primitives.field import FieldElement, FiniteField
from stark_primitives.hash import Hasher

_logger = logging.getLogger(__name__)

MerklePath = List[FieldElement]


class MerkleTree:
    """Merkle tree over a power-of-two number of leaves.

    Lifecycle: construct (leaves hashed) -> commit() (levels and root built)
    -> open()/prove() queries. verify() only needs the hasher.

    Usage:
        tree = MerkleTree(field, hasher, values)
        root = tree.commit()
        path = tree.prove(tree.leaves[i])
        assert tree.verify(root, i, path, tree.leaves[i])
    """

    def __init__(
        self,
        field: FiniteField,
        hasher: Hasher,
        leaf_values: Sequence[Union[FieldElement, int]],
    ) -> None:
        n = len(leaf_values)
        if n == 0 or (n & (n - 1)) != 0:
            raise InvalidLeafCountError(f"Leaf count must be a non-zero power of two, got {n}")

        self.field = field
        self.hasher = hasher
        self.leaves: List[FieldElement] = [hasher.hash(field.element(v)) for v in leaf_values]
        self.levels: List[List[FieldElement]] = [self.leaves]
        self.root: Optional[FieldElement] = None

    # --- Properties ---

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (path length)."""
        return len(self.leaves).bit_length() - 1

    @property
    def is_committed(self) -> bool:
        return self.root is not None

    # --- Core Operations ---

    def commit(self) -> FieldElement:
        """Build every level bottom-up and return the root.

        Rebuilds from the leaves on each call, so repeated calls return the
        same root.
        """
        levels = [self.leaves]
        current = self.leaves
        while len(current) > 1:
            current = [
                self.hasher.hash(current[i] + current[i + 1])
                for i in range(0, len(current), 2)
            ]
            levels.append(current)

        self.levels = levels
        self.root = current[0]
        _logger.debug(
            "MerkleTree.commit: leaves=%d depth=%d root=%d",
            len(self.leaves), self.depth, self.root.value,
        )
        return self.root

    def leaf_index(self, hashed_leaf: FieldElement) -> Optional[int]:
        """Position of a hashed leaf value, or None if absent."""
        for i, leaf in enumerate(self.leaves):
            if leaf == hashed_leaf:
                return i
        return None

    def open(self, index: int) -> MerklePath:
        """Authentication path for the leaf at index.

        Raises:
            ValueError: If the tree has not been committed
            MerkleIndexError: If index is outside [0, len(leaves))
        """
        if not self.is_committed:
            raise ValueError("Tree not committed. Call commit() first.")
        if index < 0 or index >= len(self.leaves):
            raise MerkleIndexError(f"Leaf index {index} out of range [0, {len(self.leaves)})")

        path: MerklePath = []
        i = index
        for level in self.levels[:-1]:
            path.append(level[i ^ 1])
            i >>= 1
        return path

    def prove(self, hashed_leaf: FieldElement) -> Optional[MerklePath]:
        """Authentication path for a hashed leaf value.

        The argument must be the hashed value as stored in ``leaves``, not the
        raw pre-image. Returns None when the value is not a leaf.
        """
        if not self.is_committed:
            raise ValueError("Tree not committed. Call commit() first.")
        index = self.leaf_index(hashed_leaf)
        if index is None:
            return None
        return self.open(index)

    def verify(
        self,
        root: FieldElement,
        index: int,
        path: Sequence[FieldElement],
        leaf: FieldElement,
    ) -> bool:
        """Replay the path from leaf using index bits and compare with root.

        Raises:
            MerkleIndexError: If index is negative or >= 2**len(path)
        """
        if index < 0 or index >= (1 << len(path)):
            raise MerkleIndexError(
                f"Index {index} out of range for a path of length {len(path)}"
            )

        value = leaf
        for sibling in path:
            if index & 1 == 0:
                value = self.hasher.hash(value + sibling)
            else:
                value = self.hasher.hash(sibling + value)
            index >>= 1
        return value == root
