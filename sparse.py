import numbers

import numpy as np
import scipy.sparse as sp

from errors import InvalidDimensionError


def _check_dimension(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensionError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidDimensionError(f"{name} must be non-negative, got {value}")
    return int(value)


class SparseMatrix:
    """
    Integer matrix that stores only its non-zero entries.
    Entries live in a dict keyed by (row, col) tuples, so memory and the cost
    of every arithmetic routine scale with nnz, not rows*cols.

    A stored value is never 0: setting a cell to 0 removes it.
    Coordinates are not range checked against the shape.
    """
    def __init__(self, rows, cols):
        self._rows = _check_dimension("rows", rows)
        self._cols = _check_dimension("cols", cols)
        self._entries = {}

    @classmethod
    def from_entries(cls, rows, cols, entries):
        """Builds a matrix from (row, col, value) triples, applied in order."""
        matrix = cls(rows, cols)
        for row, col, value in entries:
            matrix.set(row, col, value)
        return matrix

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def nnz(self):
        return len(self._entries)

    def non_zero_count(self):
        return len(self._entries)

    def __len__(self):
        return len(self._entries)

    # --- Element Access ---

    def get(self, row, col):
        """Value at (row, col), 0 when nothing is stored there."""
        return self._entries.get((row, col), 0)

    def set(self, row, col, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"Matrix values must be integers, got {value!r}")
        value = int(value)
        if value != 0:
            self._entries[(row, col)] = value
        else:
            # Zero means "absent"; deleting a missing key is a no-op
            self._entries.pop((row, col), None)

    def __getitem__(self, index):
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index, value):
        row, col = index
        self.set(row, col, value)

    def __contains__(self, index):
        return index in self._entries

    def items(self):
        """Iterates ((row, col), value) pairs in insertion order."""
        return iter(self._entries.items())

    def __iter__(self):
        for (row, col), value in self._entries.items():
            yield row, col, value

    # --- Arithmetic Operator Overloading ---

    def __add__(self, other):
        from arithmetic import add
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other):
        from arithmetic import subtract
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return subtract(self, other)

    def __matmul__(self, other):
        from arithmetic import multiply
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return multiply(self, other)

    def __neg__(self):
        result = SparseMatrix(self._rows, self._cols)
        for (row, col), value in self._entries.items():
            result._entries[(row, col)] = -value
        return result

    # --- Utility Methods ---

    def copy(self):
        result = SparseMatrix(self._rows, self._cols)
        result._entries = dict(self._entries)
        return result

    def transpose(self):
        result = SparseMatrix(self._cols, self._rows)
        for (row, col), value in self._entries.items():
            result._entries[(col, row)] = value
        return result

    @property
    def T(self):
        return self.transpose()

    def density(self):
        """Fraction of cells that hold a non-zero value."""
        total = self._rows * self._cols
        return len(self._entries) / total if total > 0 else 0.0

    def __eq__(self, other):
        # Content equality: dict comparison ignores insertion order
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self.shape == other.shape and self._entries == other._entries

    __hash__ = None

    def __repr__(self):
        return f"SparseMatrix({self._rows}x{self._cols}, nnz={len(self._entries)})"

    # --- numpy / scipy interop ---

    def to_scipy(self):
        """
        Returns the entries as a scipy.sparse.coo_matrix of dtype int64.
        Out-of-range coordinates are rejected by scipy with a ValueError.
        """
        if not self._entries:
            return sp.coo_matrix(self.shape, dtype=np.int64)
        coords = np.array(list(self._entries.keys()), dtype=np.int64)
        data = np.fromiter(self._entries.values(), dtype=np.int64, count=len(self._entries))
        return sp.coo_matrix((data, (coords[:, 0], coords[:, 1])), shape=self.shape)

    def to_dense(self):
        return self.to_scipy().toarray()

    @classmethod
    def from_scipy(cls, mat):
        """
        Builds a SparseMatrix from a scipy sparse matrix or a 2-D numpy array.
        Duplicate coordinates are summed, explicit zeros are dropped.
        Float data is accepted only when every value is integral.
        """
        coo = sp.coo_matrix(mat, copy=True)
        coo.sum_duplicates()
        data = coo.data
        if not np.issubdtype(data.dtype, np.integer):
            if not np.issubdtype(data.dtype, np.number) or np.iscomplexobj(data):
                raise TypeError(f"Cannot convert values of dtype {data.dtype} to integers")
            if not np.all(np.mod(data, 1) == 0):
                raise TypeError("Matrix contains non-integral values")
            data = data.astype(np.int64)

        rows, cols = coo.shape
        result = cls(rows, cols)
        for row, col, value in zip(coo.row.tolist(), coo.col.tolist(), data.tolist()):
            result.set(row, col, value)
        return result
