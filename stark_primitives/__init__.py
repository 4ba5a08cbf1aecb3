"""stark_primitives - Field, polynomial, hash and Merkle building blocks for STARK provers."""

from stark_primitives.errors import (
    DivisionByZeroError,
    FieldMismatchError,
    InvalidLeafCountError,
    InvalidSBoxExponentError,
    MerkleIndexError,
    PrimitivesError,
)
from stark_primitives.field import (
    GOLDILOCKS,
    GOLDILOCKS_PRIME,
    FieldElement,
    FiniteField,
    extended_euclidean,
)
from stark_primitives.hash import (
    AlgebraicPermutationHash,
    Hasher,
    PermutationParams,
)
from stark_primitives.merkle_tree import MerklePath, MerkleTree
from stark_primitives.polynomial import Polynomial

__all__ = [
    # Field
    "FiniteField",
    "FieldElement",
    "extended_euclidean",
    "GOLDILOCKS",
    "GOLDILOCKS_PRIME",
    # Polynomial
    "Polynomial",
    # Hash
    "Hasher",
    "AlgebraicPermutationHash",
    "PermutationParams",
    # Merkle Tree
    "MerkleTree",
    "MerklePath",
    # Errors
    "PrimitivesError",
    "FieldMismatchError",
    "DivisionByZeroError",
    "InvalidSBoxExponentError",
    "InvalidLeafCountError",
    "MerkleIndexError",
]
