"""Field-element hashing for Merkle commitments.

Hasher is the narrow capability the Merkle tree depends on: one field element
in, one field element out. AlgebraicPermutationHash implements it with a
Rescue-style permutation over a small state:

    state = [value, 0, ..., 0]                       (width = rate + capacity)
    for each round:
        state = MDS * state^alpha         + constants[2r]
        state = MDS * state^alpha_inverse + constants[2r + 1]
    digest = state[0]

Round constants and the MDS matrix are supplied by the caller; this module
does not generate them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from stark_primitives.errors import InvalidSBoxExponentError
from stark_primitives.field import FieldElement, FiniteField

_logger = logging.getLogger(__name__)

Scalar = Union[FieldElement, int]


# --- Capability ---

class Hasher(ABC):
    """Compression function FieldElement -> FieldElement."""

    @abstractmethod
    def hash(self, value: FieldElement) -> FieldElement:
        raise NotImplementedError("Subclass must implement hash")

    def __call__(self, value: FieldElement) -> FieldElement:
        return self.hash(value)


# --- Configuration ---

@dataclass(frozen=True)
class PermutationParams:
    """Parameter set for AlgebraicPermutationHash.

    Attributes:
        rate: Number of state slots carrying input/output
        capacity: Number of extra state slots
        alpha: S-box exponent (must not divide prime - 1)
        mds_matrix: width x width mixing matrix
        round_constants: Flat list of 2 * rounds * width constants, one
                         width-sized slice per half-round
        rounds: Number of full rounds (forward + inverse S-box each)
    """

    rate: int
    capacity: int
    alpha: int
    mds_matrix: Sequence[Sequence[int]]
    round_constants: Sequence[int]
    rounds: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "mds_matrix", tuple(tuple(int(v) for v in row) for row in self.mds_matrix))
        object.__setattr__(self, "round_constants", tuple(int(v) for v in self.round_constants))

    @property
    def width(self) -> int:
        """State size: rate + capacity."""
        return self.rate + self.capacity


# --- Permutation Hash ---

class AlgebraicPermutationHash(Hasher):
    """Rescue-like permutation hash over a prime field."""

    def __init__(
        self,
        field: FiniteField,
        rate: int,
        capacity: int,
        alpha: Scalar,
        mds_matrix: Sequence[Sequence[Scalar]],
        round_constants: Sequence[Scalar],
        rounds: int = 1,
    ) -> None:
        if rate < 1:
            raise ValueError(f"rate must be >= 1, got {rate}")
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        if rounds < 1:
            raise ValueError(f"rounds must be >= 1, got {rounds}")

        width = rate + capacity
        if len(mds_matrix) != width or any(len(row) != width for row in mds_matrix):
            raise ValueError(f"mds_matrix must be {width}x{width}")
        expected = 2 * rounds * width
        if len(round_constants) != expected:
            raise ValueError(
                f"Expected {expected} round constants for {rounds} round(s) of width {width}, "
                f"got {len(round_constants)}"
            )

        self.field = field
        self.rate = rate
        self.capacity = capacity
        self.width = width
        self.rounds = rounds
        self.alpha, self.alpha_inverse = self._sbox_exponents(field, alpha)

        self.mds_matrix: List[List[FieldElement]] = [field.elements(row) for row in mds_matrix]
        self.round_constants: List[FieldElement] = field.elements(round_constants)

        # Vectorised copies for the linear layer
        GF = field.galois_field
        self._mds = GF([[e.value for e in row] for row in self.mds_matrix])
        self._constants = GF([c.value for c in self.round_constants]).reshape(2 * rounds, width)

        _logger.debug(
            "AlgebraicPermutationHash: prime=%d width=%d rounds=%d alpha=%d alpha_inverse=%d",
            field.prime, width, rounds, self.alpha.value, self.alpha_inverse.value,
        )

    @classmethod
    def from_params(cls, field: FiniteField, params: PermutationParams) -> "AlgebraicPermutationHash":
        return cls(
            field,
            rate=params.rate,
            capacity=params.capacity,
            alpha=params.alpha,
            mds_matrix=params.mds_matrix,
            round_constants=params.round_constants,
            rounds=params.rounds,
        )

    @staticmethod
    def _sbox_exponents(field: FiniteField, alpha: Scalar) -> Tuple[FieldElement, FieldElement]:
        """Validate alpha and return (alpha, alpha_inverse) as field elements.

        alpha_inverse is the field inverse of alpha.
        """
        a = alpha.value if isinstance(alpha, FieldElement) else int(alpha)
        group_order = field.prime - 1
        if a <= 0 or a >= field.prime:
            raise InvalidSBoxExponentError(f"alpha must be in [1, {field.prime}), got {a}")
        if group_order % a == 0:
            raise InvalidSBoxExponentError(f"alpha={a} divides prime - 1 = {group_order}")
        exponent = field.element(a)
        return exponent, exponent.inverse()

    # --- Layers ---

    def _sbox(self, state: List[FieldElement], exponent: FieldElement) -> List[FieldElement]:
        return [s.pow(exponent) for s in state]

    def _linear_layer(self, state: List[FieldElement], step: int) -> List[FieldElement]:
        """MDS matrix-vector product plus the constants of one half-round."""
        GF = self.field.galois_field
        vec = GF([s.value for s in state])
        out = self._mds @ vec + self._constants[step]
        return [self.field.element(int(v)) for v in out]

    # --- Public API ---

    def permute(self, state: Sequence[Scalar]) -> List[FieldElement]:
        """Apply every round to a full width-sized state."""
        if len(state) != self.width:
            raise ValueError(f"State must have {self.width} elements, got {len(state)}")
        current = self.field.elements(state)
        for r in range(self.rounds):
            current = self._sbox(current, self.alpha)
            current = self._linear_layer(current, 2 * r)
            current = self._sbox(current, self.alpha_inverse)
            current = self._linear_layer(current, 2 * r + 1)
        return current

    def hash(self, value: Scalar) -> FieldElement:
        """Digest of a single element: first slot of the permuted [value, 0, ...]."""
        v = self.field.element(value)
        state = [v] + [self.field.zero()] * (self.width - 1)
        return self.permute(state)[0]
