# errors.py

class SparseMatrixError(Exception):
    """Base class for every failure raised by the sparse matrix modules."""


class InvalidDimensionError(SparseMatrixError, ValueError):
    """rows/cols negative or not an integer."""


class MatrixFormatError(SparseMatrixError, ValueError):
    """
    Malformed matrix text: bad header, bad entry line or a non-integer field.
    lineno is 1-based and None when the problem is not tied to one line.
    """
    def __init__(self, message, lineno=None):
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno


class DimensionMismatchError(SparseMatrixError, ValueError):
    """Operands of add/subtract do not have the same shape."""


class DimensionIncompatibleError(SparseMatrixError, ValueError):
    """Inner dimensions of a product differ (A.cols != B.rows)."""


class MultiplicationCancelled(SparseMatrixError):
    """Raised when a multiply is cancelled at a progress boundary."""
