from errors import (DimensionIncompatibleError, DimensionMismatchError,
                    MultiplicationCancelled)
from sparse import SparseMatrix

# Pair comparisons between two progress reports in multiply()
PROGRESS_CHUNK = 1_000_000


def _check_same_shape(a, b, operation):
    if a.rows != b.rows or a.cols != b.cols:
        raise DimensionMismatchError(
            f"Matrix dimensions do not match for {operation}: "
            f"{a.rows}x{a.cols} vs {b.rows}x{b.cols}")


def add(a, b):
    """
    Sparse-aware sum. Only stored entries are visited: O(nnz(a) + nnz(b)).
    Neither operand is modified.
    """
    _check_same_shape(a, b, "addition")
    result = SparseMatrix(a.rows, a.cols)

    # 1. Every entry of a, combined with whatever b holds there
    for (row, col), value in a.items():
        result.set(row, col, value + b.get(row, col))

    # 2. Entries only b has (already non-zero)
    for (row, col), value in b.items():
        if (row, col) not in a:
            result.set(row, col, value)

    return result


def subtract(a, b):
    """Sparse-aware difference a - b, O(nnz(a) + nnz(b))."""
    _check_same_shape(a, b, "subtraction")
    result = SparseMatrix(a.rows, a.cols)

    for (row, col), value in a.items():
        result.set(row, col, value - b.get(row, col))

    for (row, col), value in b.items():
        if (row, col) not in a:
            result.set(row, col, -value)

    return result


def _bucket_rows(matrix):
    """Groups entries by row: {row: [(col, value), ...]} in insertion order."""
    buckets = {}
    for (row, col), value in matrix.items():
        buckets.setdefault(row, []).append((col, value))
    return buckets


def _observer_callback(progress):
    if progress is None:
        return None
    # Observer objects expose update(fraction); plain callables are used as is
    update = getattr(progress, "update", None)
    if callable(update):
        return update
    if callable(progress):
        return progress
    raise TypeError("progress must be callable or have an update(fraction) method")


def multiply(a, b, progress=None, chunk_size=PROGRESS_CHUNK, cancel=None):
    """
    Sparse product a @ b with shape (a.rows, b.cols).

    For every stored (i, k) -> va in a and (k, j) -> vb in b, va*vb is
    accumulated at (i, j). A running value that cancels to 0 is removed
    immediately, so the result never holds a zero.

    b is bucketed by row first, so only matching rows are scanned. Progress
    is still counted in (a-entry, b-entry) pairs of the full nnz(a)*nnz(b)
    scan: each a-entry advances the counter by nnz(b). Whenever the counter
    passes a multiple of chunk_size, progress is called with
    counter / (nnz(a)*nnz(b)) and cancel() (if given) is polled; a true
    return raises MultiplicationCancelled and no matrix is returned.
    With fewer than chunk_size pairs in total progress is never called.
    """
    if a.cols != b.rows:
        raise DimensionIncompatibleError(
            f"Matrix dimensions are not compatible for multiplication: "
            f"{a.rows}x{a.cols} @ {b.rows}x{b.cols}")
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"chunk_size must be a positive integer, got {chunk_size!r}")

    notify = _observer_callback(progress)
    result = SparseMatrix(a.rows, b.cols)
    acc = result._entries

    nnz_b = b.nnz
    total = a.nnz * nnz_b
    buckets = _bucket_rows(b)
    examined = 0

    for (i, k), va in a.items():
        # 1. Accumulate against row k of b only
        for j, vb in buckets.get(k, ()):
            key = (i, j)
            value = acc.get(key, 0) + va * vb
            if value != 0:
                acc[key] = value
            else:
                acc.pop(key, None)

        # 2. Progress / cancellation at every chunk boundary crossed
        before = examined // chunk_size
        examined += nnz_b
        for boundary in range(before + 1, examined // chunk_size + 1):
            if notify is not None:
                notify(boundary * chunk_size / total)
            if cancel is not None and cancel():
                raise MultiplicationCancelled(
                    f"multiplication cancelled after {boundary * chunk_size} of {total} pairs")

    return result
