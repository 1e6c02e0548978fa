import sys

import matplotlib.pyplot as plt

import codec
from sparse import SparseMatrix


def plot_sparsity(matrix, ax=None, title=None, show=False, markersize=None):
    """
    Draws the non-zero pattern of a SparseMatrix (one marker per stored entry)
    and returns the Axes. Only the coordinates are plotted, not the values.
    """
    if not isinstance(matrix, SparseMatrix):
        raise TypeError(f"expected SparseMatrix, got {type(matrix).__name__}")

    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    # Small matrices get visible markers, large ones shrink to dots
    if markersize is None:
        markersize = max(1.0, min(8.0, 400.0 / max(matrix.rows, matrix.cols, 1)))

    ax.spy(matrix.to_scipy(), markersize=markersize, color='#3498db')
    ax.set_title(title or f"Sparsity pattern ({matrix.rows}x{matrix.cols}, nnz={matrix.nnz})")
    ax.set_xlabel(f"col (density {matrix.density():.2%})")
    ax.set_ylabel("row")

    if show:
        plt.show()
    return ax


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python visualise.py <matrix file>")
        sys.exit(2)
    with open(sys.argv[1], "r", encoding="utf-8") as f:
        m = codec.load(f)
    print(f"Plotting {m!r}...")
    plot_sparsity(m, show=True)
