"""Prime field GF(p) with explicit elements.

A FiniteField is an immutable context (prime, generator, random source) shared
by reference across every FieldElement, Polynomial and hasher drawn from it.
FieldElement always stores the canonical representative in [0, prime).

The matching galois field class is available as ``FiniteField.galois_field``
for vectorised work (linear layers, batch evaluation).
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterable, List, Optional, Tuple, Union

import galois
import numpy as np

from stark_primitives.errors import DivisionByZeroError, FieldMismatchError

# --- Constants ---

# Goldilocks prime: p = 2^64 - 2^32 + 1
GOLDILOCKS_PRIME = 0xFFFFFFFF00000001


# --- Extended Euclid ---

def extended_euclidean(a: int, b: int) -> Tuple[int, int, int]:
    """Return (gcd, x, y) such that a*x + b*y == gcd(a, b).

    Iterative form of the textbook recursion; extended_euclidean(0, b) is
    (b, 0, 1).
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


# --- Field ---

@dataclass(frozen=True)
class FiniteField:
    """Prime field context.

    Attributes:
        prime: Field modulus (primality is the caller's responsibility)
        generator: Non-zero distinguished element, kept for protocol layers
        rng: Random source used by random_element(); pass a seeded
             numpy Generator for reproducible draws
    """

    prime: int
    generator: int
    rng: Optional[np.random.Generator] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.prime <= 1:
            raise ValueError(f"prime must be > 1, got {self.prime}")
        if self.generator % self.prime == 0:
            raise ValueError(f"Invalid generator {self.generator}: must be non-zero modulo {self.prime}")
        if self.rng is None:
            object.__setattr__(self, "rng", np.random.default_rng())

    @cached_property
    def galois_field(self) -> type:
        """galois.GF class for the same prime (primality not re-verified)."""
        return galois.GF(self.prime, verify=False)

    # --- Element Factories ---

    def element(self, value: Union[int, "FieldElement"]) -> "FieldElement":
        """Wrap an integer (any sign or size) as a canonical element."""
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise FieldMismatchError(
                    f"Element of GF({value.field.prime}) used in GF({self.prime})"
                )
            return FieldElement(value.value, self)
        return FieldElement(value, self)

    def elements(self, values: Iterable[Union[int, "FieldElement"]]) -> List["FieldElement"]:
        return [self.element(v) for v in values]

    def zero(self) -> "FieldElement":
        return FieldElement(0, self)

    def one(self) -> "FieldElement":
        return FieldElement(1, self)

    def generator_element(self) -> "FieldElement":
        return FieldElement(self.generator, self)

    def random_element(self) -> "FieldElement":
        """Draw a uniformly random element from this field's rng.

        Rejection-samples prime.bit_length() random bits, so draws work for
        moduli wider than 64 bits and are reproducible for a seeded rng.
        """
        n_bits = self.prime.bit_length()
        n_bytes = (n_bits + 7) // 8
        mask = (1 << n_bits) - 1
        while True:
            value = int.from_bytes(self.rng.bytes(n_bytes), "little") & mask
            if value < self.prime:
                return FieldElement(value, self)


# --- Field Element ---

Operand = Union["FieldElement", int]


class FieldElement:
    """Element of a FiniteField.

    Supports + - * / ** and negation against other elements of the same
    prime field or plain ints. Mixing primes raises FieldMismatchError.
    Equality across different primes is simply False.
    """

    __slots__ = ("value", "field")

    def __init__(self, value: int, field: FiniteField) -> None:
        # Python's % with a positive modulus is the Euclidean remainder
        self.value = int(value) % field.prime
        self.field = field

    # --- Helpers ---

    def _coerce(self, other: Operand) -> Optional["FieldElement"]:
        if isinstance(other, FieldElement):
            if other.field.prime != self.field.prime:
                raise FieldMismatchError(
                    f"Elements of different finite fields: "
                    f"GF({self.field.prime}) and GF({other.field.prime})"
                )
            return other
        if isinstance(other, int):
            return FieldElement(other, self.field)
        return None

    def _new(self, value: int) -> "FieldElement":
        return FieldElement(value, self.field)

    # --- Arithmetic ---

    def __add__(self, other: Operand) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._new(self.value + rhs.value)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._new(self.value - rhs.value)

    def __rsub__(self, other: Operand) -> "FieldElement":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return self._new(lhs.value - self.value)

    def __mul__(self, other: Operand) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._new(self.value * rhs.value)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs.value == 0:
            raise DivisionByZeroError("Division by zero is not allowed")
        return self * rhs.inverse()

    def __rtruediv__(self, other: Operand) -> "FieldElement":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __neg__(self) -> "FieldElement":
        return self._new(self.field.prime - self.value)

    def __pow__(self, exponent: Operand) -> "FieldElement":
        if not isinstance(exponent, (FieldElement, int)):
            return NotImplemented
        return self.pow(exponent)

    def inverse(self) -> "FieldElement":
        """Multiplicative inverse via the extended Euclidean algorithm."""
        gcd, x, _ = extended_euclidean(self.value, self.field.prime)
        if gcd != 1:
            raise DivisionByZeroError(
                f"{self.value} has no inverse modulo {self.field.prime}"
            )
        return self._new(x)

    def pow(self, exponent: Operand) -> "FieldElement":
        """Square-and-multiply exponentiation.

        Args:
            exponent: FieldElement (its canonical value is the exponent) or
                      int; negative ints exponentiate the inverse

        Returns:
            self ** exponent in the field
        """
        if isinstance(exponent, FieldElement):
            e = exponent.value
        elif isinstance(exponent, int):
            e = exponent
        else:
            raise TypeError(f"Unsupported exponent type: {type(exponent).__name__}")

        base = self
        if e < 0:
            base = self.inverse()
            e = -e

        p = self.field.prime
        result = 1
        b = base.value
        while e > 0:
            if e & 1:
                result = (result * b) % p
            b = (b * b) % p
            e >>= 1
        return self._new(result)

    # --- Comparison / Conversion ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        if self.field.prime != other.field.prime:
            return False
        return self.value % self.field.prime == other.value % other.field.prime

    def __hash__(self) -> int:
        return hash((self.field.prime, self.value))

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, prime={self.field.prime})"


GOLDILOCKS = FiniteField(GOLDILOCKS_PRIME, 7)
"""Goldilocks field with the customary multiplicative generator 7."""
