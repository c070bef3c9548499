from __future__ import annotations
from dataclasses import dataclass
from numbers import Rational
from typing import ClassVar

from quicktions import Fraction as QFraction  # type: ignore

from .utils import gcd, lcm


@dataclass(frozen=True)
class Fraction:
    """
    Rational fraction with exact arithmetic, without implicit conversions to float.

    Immutable and hashable.
    The denominator is made positive on construction, but the fraction is NOT reduced:
    only the results of arithmetic operations are in lowest terms.
    Equality is structural, i.e., Fraction(1, 2) != Fraction(2, 4).
    """

    numerator: int
    denominator: int = 1

    zero: ClassVar[Fraction]
    one: ClassVar[Fraction]

    def __post_init__(self):
        if not (isinstance(self.numerator, int) and isinstance(self.denominator, int)):
            raise TypeError("Fraction requires integer numerator and denominator!")
        if self.denominator == 0:
            raise ZeroDivisionError("Zero denominator!")
        # bools are ints, store them as plain ints
        object.__setattr__(self, 'numerator', int(self.numerator))
        object.__setattr__(self, 'denominator', int(self.denominator))
        if self.denominator < 0:
            # frozen dataclass, so bypass __setattr__
            object.__setattr__(self, 'numerator', -self.numerator)
            object.__setattr__(self, 'denominator', -self.denominator)

    @classmethod
    def convert(cls, x) -> Fraction:
        if isinstance(x, cls):
            return x
        elif isinstance(x, int):
            return cls(int(x))
        elif isinstance(x, Rational):
            return cls(int(x.numerator), int(x.denominator))
        else:
            raise ValueError("Can't convert")

    @classmethod
    def parse(cls, fraction_str: str) -> Fraction:
        """Parse 'n/d', 'n / d' (as given by str) or 'n'."""
        tokens = fraction_str.split('/')
        if len(tokens) == 1:
            return cls(int(tokens[0]))
        elif len(tokens) == 2:
            return cls(int(tokens[0]), int(tokens[1]))
        else:
            raise ValueError("Bad fraction: {}".format(fraction_str))

    def as_rational(self) -> QFraction:
        """Canonical (reduced) rational value, compared by value rather than structurally."""
        return QFraction(self.numerator, self.denominator)

    def is_zero(self) -> bool:
        return self.numerator == 0

    def negate(self) -> Fraction:
        return Fraction(-self.numerator, self.denominator)

    def reciprocal(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    def added_by(self, other: Fraction) -> Fraction:
        common_denominator = lcm(self.denominator, other.denominator)
        first_numerator = self.numerator * common_denominator // self.denominator
        second_numerator = other.numerator * common_denominator // other.denominator
        new_numerator = first_numerator + second_numerator
        g = gcd(new_numerator, common_denominator)
        return Fraction(new_numerator // g, common_denominator // g)

    def subtracted_by(self, other: Fraction) -> Fraction:
        return self.added_by(other.negate())

    def multiplied_by(self, other: Fraction) -> Fraction:
        new_numerator = self.numerator * other.numerator
        new_denominator = self.denominator * other.denominator
        g = gcd(new_numerator, new_denominator)
        return Fraction(new_numerator // g, new_denominator // g)

    def divided_by(self, other: Fraction) -> Fraction:
        return self.multiplied_by(other.reciprocal())

    @classmethod
    def _coerce(cls, other):
        # None for operands we do not support, so that operators give NotImplemented
        if isinstance(other, (cls, Rational)):
            return cls.convert(other)
        return None

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.added_by(other)

    def __radd__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.added_by(self)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.subtracted_by(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.subtracted_by(self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.multiplied_by(self)

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.divided_by(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.divided_by(self)

    def __float__(self):
        return self.numerator / self.denominator

    def __str__(self):
        return '{} / {}'.format(self.numerator, self.denominator)

    def __repr__(self):
        return 'Fraction({}, {})'.format(self.numerator, self.denominator)


Fraction.zero = Fraction(0)
Fraction.one = Fraction(1)
