"""Dense univariate polynomials over a FiniteField.

Coefficients are stored in ascending order: coefficients[i] multiplies x^i.
Every Polynomial is canonical: trailing zero coefficients are trimmed on
construction, so the zero polynomial has no coefficients and degree -1.

galois uses descending coefficient order; to_galois()/from_galois() convert.
"""

from typing import Iterable, List, Sequence, Tuple, Union

import galois

from stark_primitives.errors import DivisionByZeroError, FieldMismatchError
from stark_primitives.field import FieldElement, FiniteField

Scalar = Union[FieldElement, int]
Point = Tuple[Scalar, Scalar]


def _trim(coefficients: List[FieldElement]) -> None:
    """Drop trailing zero coefficients in place."""
    while coefficients and coefficients[-1].value == 0:
        coefficients.pop()


class Polynomial:
    """Immutable polynomial; operators return new instances."""

    def __init__(self, coefficients: Iterable[Scalar], field: FiniteField) -> None:
        coeffs = [field.element(c) for c in coefficients]
        _trim(coeffs)
        self.coefficients: Tuple[FieldElement, ...] = tuple(coeffs)
        self.field = field

    @classmethod
    def from_values(cls, values: Iterable[int], field: FiniteField) -> "Polynomial":
        """Build from plain integers, lowest degree first."""
        return cls([field.element(v) for v in values], field)

    @classmethod
    def from_galois(cls, poly: galois.Poly, field: FiniteField) -> "Polynomial":
        return cls([int(c) for c in poly.coeffs[::-1]], field)

    def to_galois(self) -> galois.Poly:
        GF = self.field.galois_field
        if not self.coefficients:
            return galois.Poly([0], field=GF)
        return galois.Poly([c.value for c in reversed(self.coefficients)], field=GF)

    # --- Helpers ---

    def _check_field(self, other: "Polynomial") -> None:
        if other.field.prime != self.field.prime:
            raise FieldMismatchError(
                f"Polynomials over different finite fields: "
                f"GF({self.field.prime}) and GF({other.field.prime})"
            )

    def _leading_coefficient_index(self) -> int:
        for i in range(len(self.coefficients) - 1, -1, -1):
            if self.coefficients[i].value != 0:
                return i
        return 0

    # --- Queries ---

    def degree(self) -> int:
        """Index of the highest non-zero coefficient, -1 for the zero polynomial."""
        for i in range(len(self.coefficients) - 1, -1, -1):
            if self.coefficients[i].value != 0:
                return i
        return -1

    def is_zero(self) -> bool:
        return self.degree() == -1

    def leading_coefficient(self) -> FieldElement:
        if not self.coefficients:
            return self.field.zero()
        return self.coefficients[self._leading_coefficient_index()]

    def evaluate(self, x: Scalar) -> FieldElement:
        """Evaluate at x, accumulating coeff * x^i from the constant term up."""
        point = self.field.element(x)
        result = self.field.zero()
        power = self.field.one()
        for coeff in self.coefficients:
            result = result + coeff * power
            power = power * point
        return result

    def evaluate_on_domain(self, n: int) -> List[FieldElement]:
        """Evaluate at 0, 1, ..., n-1 (in that order) in one galois call."""
        if n <= 0:
            return []
        if not self.coefficients:
            return [self.field.zero() for _ in range(n)]
        GF = self.field.galois_field
        domain = GF([i % self.field.prime for i in range(n)])
        values = self.to_galois()(domain)
        return [self.field.element(int(v)) for v in values]

    # --- Ring Operations ---

    def __add__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_field(other)
        zero = self.field.zero()
        a, b = self.coefficients, other.coefficients
        n = max(len(a), len(b))
        coeffs = [
            (a[i] if i < len(a) else zero) + (b[i] if i < len(b) else zero)
            for i in range(n)
        ]
        return Polynomial(coeffs, self.field)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_field(other)
        zero = self.field.zero()
        a, b = self.coefficients, other.coefficients
        n = max(len(a), len(b))
        coeffs = [
            (a[i] if i < len(a) else zero) - (b[i] if i < len(b) else zero)
            for i in range(n)
        ]
        return Polynomial(coeffs, self.field)

    def __neg__(self) -> "Polynomial":
        return Polynomial([-c for c in self.coefficients], self.field)

    def __mul__(self, other: Union["Polynomial", Scalar]) -> "Polynomial":
        if isinstance(other, (FieldElement, int)):
            return self.scalar_mul(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_field(other)
        a, b = self.coefficients, other.coefficients
        if not a or not b:
            return Polynomial([], self.field)

        # Accumulate raw products and reduce once per output coefficient
        acc = [0] * (len(a) + len(b) - 1)
        for i, ca in enumerate(a):
            for j, cb in enumerate(b):
                acc[i + j] += ca.value * cb.value
        return Polynomial(acc, self.field)

    def __rmul__(self, other: Scalar) -> "Polynomial":
        if isinstance(other, (FieldElement, int)):
            return self.scalar_mul(other)
        return NotImplemented

    def scalar_mul(self, scalar: Scalar) -> "Polynomial":
        s = self.field.element(scalar)
        return Polynomial([c * s for c in self.coefficients], self.field)

    def scalar_div(self, scalar: Scalar) -> "Polynomial":
        s = self.field.element(scalar)
        if s.value == 0:
            raise DivisionByZeroError("Division by zero is not allowed")
        return self.scalar_mul(s.inverse())

    def divide(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        """Euclidean division.

        Args:
            divisor: Non-zero polynomial over the same field

        Returns:
            (quotient, remainder) with self == quotient * divisor + remainder
            and remainder.degree() < divisor.degree()

        Raises:
            DivisionByZeroError: If divisor is the zero polynomial
        """
        self._check_field(divisor)
        if divisor.is_zero():
            raise DivisionByZeroError("Polynomial division by zero")

        d = divisor.coefficients
        lead = d[divisor._leading_coefficient_index()]
        remainder = list(self.coefficients)
        quotient = [self.field.zero()] * max(len(remainder) - len(d) + 1, 0)

        while len(remainder) >= len(d):
            shift = len(remainder) - len(d)
            term = remainder[-1] / lead
            quotient[shift] = term
            for i, c in enumerate(d):
                remainder[shift + i] = remainder[shift + i] - term * c
            _trim(remainder)

        return Polynomial(quotient, self.field), Polynomial(remainder, self.field)

    def __divmod__(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        if not isinstance(divisor, Polynomial):
            return NotImplemented
        return self.divide(divisor)

    def __floordiv__(self, divisor: "Polynomial") -> "Polynomial":
        if not isinstance(divisor, Polynomial):
            return NotImplemented
        return self.divide(divisor)[0]

    def __mod__(self, divisor: "Polynomial") -> "Polynomial":
        if not isinstance(divisor, Polynomial):
            return NotImplemented
        return self.divide(divisor)[1]

    # --- Constructions ---

    @classmethod
    def lagrange_interpolation(cls, points: Sequence[Point], field: FiniteField) -> "Polynomial":
        """Unique polynomial of degree < len(points) through the given points.

        Raises:
            DivisionByZeroError: If two points share an x coordinate
        """
        pts = [(field.element(x), field.element(y)) for x, y in points]
        x = cls.from_values([0, 1], field)
        acc = cls([], field)
        for i, (xi, yi) in enumerate(pts):
            term = cls([yi], field)
            for j, (xj, _) in enumerate(pts):
                if i == j:
                    continue
                term = term * (x - cls([xj], field)).scalar_div(xi - xj)
            acc = acc + term
        return acc

    @classmethod
    def zerofier(cls, points: Iterable[Scalar], field: FiniteField) -> "Polynomial":
        """Monic polynomial prod (x - p) over the given points."""
        x = cls.from_values([0, 1], field)
        acc = cls([field.one()], field)
        for point in points:
            acc = acc * (x - cls([point], field))
        return acc

    @classmethod
    def zerofier_domain(cls, n: int, field: FiniteField) -> "Polynomial":
        """Monic polynomial vanishing on {0, 1, ..., n-1}."""
        return cls.zerofier(range(n), field)

    # --- Comparison / Display ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        if self.field.prime != other.field.prime:
            return False
        return self.coefficients == other.coefficients

    def __hash__(self) -> int:
        return hash((self.field.prime, tuple(c.value for c in self.coefficients)))

    def __str__(self) -> str:
        terms = []
        for i, coeff in enumerate(self.coefficients):
            if coeff.value == 0:
                continue
            if i == 0:
                terms.append(str(coeff))
            elif i == 1:
                terms.append(f"{coeff}*x")
            else:
                terms.append(f"{coeff}*x^{i}")
        return " + ".join(terms) if terms else "0"

    def __repr__(self) -> str:
        return f"Polynomial({[c.value for c in self.coefficients]}, prime={self.field.prime})"
