"""Exception types raised by the primitives layer.

Each error also derives from the closest builtin exception, so callers that
only know about ``ValueError`` or ``ZeroDivisionError`` keep working.
"""


class PrimitivesError(Exception):
    """Base class for every error raised by stark_primitives."""


class FieldMismatchError(PrimitivesError, ValueError):
    """Operands belong to fields with different moduli."""


class DivisionByZeroError(PrimitivesError, ZeroDivisionError):
    """Division by the field's zero, or inversion of a non-invertible value."""


class InvalidSBoxExponentError(PrimitivesError, ValueError):
    """S-box exponent divides ``prime - 1`` or lies outside ``[1, prime)``."""


class InvalidLeafCountError(PrimitivesError, ValueError):
    """Merkle tree leaf count is zero or not a power of two."""


class MerkleIndexError(PrimitivesError, IndexError):
    """Leaf index outside the range covered by a tree or proof."""
