from __future__ import annotations
from collections import namedtuple
import logging
import re
from typing import Iterable, Sequence

from .fraction import Fraction


logger = logging.getLogger(__name__)


Position = namedtuple('Position', ['row', 'col'])


class Matrix:
    """
    Matrix of fractions, stored row-major in a flat list.

    Mutable: entries may be set and row operations act in place.
    The reduced row echelon form is computed lazily and cached until the next modification.
    """

    def __init__(self, entries: Iterable, num_rows: int, num_cols: int) -> None:
        entries = [Fraction.convert(x) for x in entries]
        if len(entries) != num_rows * num_cols:
            raise ValueError("Entries count does not match shape!")
        self.entries = entries
        self.num_rows = num_rows
        self.num_cols = num_cols
        self._rref: Matrix | None = None

    @classmethod
    def zero_matrix(cls, rows: int, cols: int) -> Matrix:
        return cls([Fraction.zero] * (rows * cols), rows, cols)

    @classmethod
    def identity_matrix(cls, size: int) -> Matrix:
        entries = [Fraction.one if pos // size == pos % size else Fraction.zero for pos in range(size * size)]
        return cls(entries, size, size)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> Matrix:
        rows = [list(row) for row in rows]
        num_cols = len(rows[0]) if rows else 0
        if any(len(row) != num_cols for row in rows):
            raise ValueError("Rows of different length!")
        return cls([x for row in rows for x in row], len(rows), num_cols)

    @classmethod
    def parse(cls, text: str) -> Matrix:
        """
        Get matrix from a convenient string representation.

        Rows are separated by ';' or newlines, entries by commas or whitespace,
        each entry is 'n' or 'n/d', e.g., '1 1/2; -2 3'.
        """
        rows = []
        for line in re.split(r'[;\n]', text):
            line = line.strip()
            if not line:
                continue
            # glue 'n / d' back together before splitting entries
            line = re.sub(r'\s*/\s*', '/', line)
            rows.append([Fraction.parse(token) for token in re.split(r'[,\s]+', line) if token])
        return cls.from_rows(rows)

    def _index(self, key) -> int:
        if isinstance(key, tuple):
            i, j = key
            if not (0 <= i < self.num_rows and 0 <= j < self.num_cols):
                raise IndexError("Matrix index out of range: {}".format(key))
            return i * self.num_cols + j
        if not 0 <= key < len(self.entries):
            raise IndexError("Matrix index out of range: {}".format(key))
        return key

    def __getitem__(self, key) -> Fraction:
        return self.entries[self._index(key)]

    def __setitem__(self, key, value) -> None:
        self.entries[self._index(key)] = Fraction.convert(value)
        self._rref = None

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.num_rows, self.num_cols, self.entries) == (other.num_rows, other.num_cols, other.entries)

    __hash__ = None

    def _check_shape(self, other: Matrix) -> None:
        if (self.num_rows, self.num_cols) != (other.num_rows, other.num_cols):
            raise ValueError("Incompatible matrix shapes!")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_shape(other)
        return Matrix([x + y for x, y in zip(self.entries, other.entries)], self.num_rows, self.num_cols)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self + (-other)

    def __neg__(self):
        minus_one = Fraction(-1)
        return Matrix([minus_one * x for x in self.entries], self.num_rows, self.num_cols)

    def copy(self) -> Matrix:
        return Matrix(self.entries, self.num_rows, self.num_cols)

    def rows(self) -> list[list[Fraction]]:
        return [self.entries[i * self.num_cols:(i + 1) * self.num_cols] for i in range(self.num_rows)]

    #
    # Row operations
    #

    def swap_rows(self, row_x: int, row_y: int) -> None:
        for j in range(self.num_cols):
            self[row_x, j], self[row_y, j] = self[row_y, j], self[row_x, j]

    def add_multiple_of_row(self, row_x: int, factor: Fraction, row_y: int) -> None:
        """row_x += factor * row_y"""
        for j in range(self.num_cols):
            self[row_x, j] = self[row_x, j] + factor * self[row_y, j]

    def multiply_row(self, factor: Fraction, row_x: int) -> None:
        for j in range(self.num_cols):
            self[row_x, j] = factor * self[row_x, j]

    #
    # Reduction and derived invariants
    #

    def _next_leading_position(self, last: Position) -> Position | None:
        # search column by column, to the right of and below the last pivot
        for j in range(last.col + 1, self.num_cols):
            for i in range(last.row + 1, self.num_rows):
                if not self[i, j].is_zero():
                    return Position(i, j)
        return None

    def _lockstep_rref(self, other: Matrix) -> tuple[Matrix, Matrix, int]:
        """
        Reduce a copy of self to row echelon form, applying same row operations to a copy of other.

        Returns triple (rref, transformed other, number of pivots).
        """
        rref = self.copy()
        other = other.copy()
        last = Position(-1, -1)
        pivots = 0
        for cur_row in range(min(self.num_rows, self.num_cols)):
            lead = rref._next_leading_position(last)
            if lead is None:
                break
            logger.debug('pivot %d at (%d, %d): %s', cur_row, lead.row, lead.col, rref[lead])

            rref.swap_rows(cur_row, lead.row)
            other.swap_rows(cur_row, lead.row)

            factor = rref[cur_row, lead.col].reciprocal()
            rref.multiply_row(factor, cur_row)
            other.multiply_row(factor, cur_row)

            for row in range(self.num_rows):
                if row != cur_row:
                    row_factor = -rref[row, lead.col]
                    rref.add_multiple_of_row(row, row_factor, cur_row)
                    other.add_multiple_of_row(row, row_factor, cur_row)

            last = Position(cur_row, lead.col)
            pivots += 1
        return rref, other, pivots

    def _cached_rref(self) -> Matrix:
        if self._rref is None:
            rref, _, _ = self._lockstep_rref(Matrix.zero_matrix(self.num_rows, self.num_cols))
            self._rref = rref
        return self._rref

    def rref(self) -> Matrix:
        """Reduced row echelon form, as a new matrix."""
        return self._cached_rref().copy()

    def inverse(self) -> Matrix | None:
        """Inverse matrix, or None for singular and non-square matrices."""
        if self.num_rows != self.num_cols:
            return None
        identity = Matrix.identity_matrix(self.num_rows)
        rref, result, _ = self._lockstep_rref(identity)
        self._rref = rref
        if rref != identity:
            logger.info('singular matrix, no inverse')
            return None
        return result

    def rank(self) -> int:
        # nonzero rows of the reduced form are exactly the pivot rows
        return sum(1 for row in self._cached_rref().rows() if any(not x.is_zero() for x in row))

    def determinant(self) -> Fraction | None:
        """Determinant via cofactor expansion along the first row; None for non-square matrices."""
        if self.num_rows != self.num_cols:
            return None
        size = self.num_rows
        if size == 0:
            return Fraction.one
        if size == 1:
            return self[0, 0].multiplied_by(Fraction.one)
        if size == 2:
            return self[0, 0] * self[1, 1] - self[0, 1] * self[1, 0]

        det = Fraction.zero
        for j in range(size):
            if self[0, j].is_zero():
                continue
            minor = self._remove_row_and_col(0, j).determinant()
            cofactor = minor if j % 2 == 0 else -minor
            det = det + self[0, j] * cofactor
        return det

    def _remove_row_and_col(self, row: int, col: int) -> Matrix:
        entries = [self[i, j] for i in range(self.num_rows) if i != row for j in range(self.num_cols) if j != col]
        return Matrix(entries, self.num_rows - 1, self.num_cols - 1)

    def __str__(self):
        return '\n'.join(' '.join(str(x) for x in row) for row in self.rows())

    def __repr__(self):
        return 'Matrix({!r}, {}, {})'.format(self.entries, self.num_rows, self.num_cols)
