"""Shared fixtures for the stark_primitives test suite."""

import numpy as np
import pytest

from stark_primitives.field import GOLDILOCKS_PRIME, FieldElement, FiniteField
from stark_primitives.hash import AlgebraicPermutationHash, Hasher


# --- Helpers ---

def cauchy_mds(field: FiniteField, width: int):
    """Cauchy matrix M[i][j] = 1 / (i + width + j); MDS for distinct rows/cols."""
    return [
        [field.element(i + width + j).inverse() for j in range(width)]
        for i in range(width)
    ]


class IdentityHasher(Hasher):
    """Pass-through hasher: a Merkle root becomes the plain sum of its leaves."""

    def hash(self, value: FieldElement) -> FieldElement:
        return value


# --- Fields ---

@pytest.fixture
def f97() -> FiniteField:
    return FiniteField(97, 5)


@pytest.fixture
def f13() -> FiniteField:
    return FiniteField(13, 2)


@pytest.fixture
def goldilocks() -> FiniteField:
    return FiniteField(GOLDILOCKS_PRIME, 7, rng=np.random.default_rng(1234))


# --- Hashers ---

@pytest.fixture
def toy_hasher(f13: FiniteField) -> AlgebraicPermutationHash:
    """Width-2 permutation over GF(13) small enough to check by hand."""
    return AlgebraicPermutationHash(
        f13,
        rate=1,
        capacity=1,
        alpha=5,
        mds_matrix=[[2, 3], [3, 5]],
        round_constants=[1, 2, 3, 4],
    )


@pytest.fixture
def goldilocks_hasher(goldilocks: FiniteField) -> AlgebraicPermutationHash:
    width, rounds = 3, 2
    constants = [goldilocks.random_element() for _ in range(2 * rounds * width)]
    return AlgebraicPermutationHash(
        goldilocks,
        rate=1,
        capacity=2,
        alpha=7,
        mds_matrix=cauchy_mds(goldilocks, width),
        round_constants=constants,
        rounds=rounds,
    )


@pytest.fixture
def identity_hasher() -> IdentityHasher:
    return IdentityHasher()
