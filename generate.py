import argparse
import sys

import numpy as np
import scipy.sparse as sp

import codec
from sparse import SparseMatrix


def random_sparse(rows, cols, density, low=-9, high=9, seed=None):
    """
    Random integer sparse matrix.
    density = fraction of cells that ARE non-zero (0.1 -> 10% non-zero).
    Values are drawn uniformly from [low, high] with 0 left out, so the
    result holds exactly round(rows*cols*density) entries.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")
    values = np.array([v for v in range(low, high + 1) if v != 0], dtype=np.int64)
    if values.size == 0:
        raise ValueError(f"[{low}, {high}] contains no non-zero integer")

    matrix = SparseMatrix(rows, cols)
    nnz = int(round(rows * cols * density))
    if nnz == 0:
        return matrix

    rng = np.random.default_rng(seed)
    # Distinct flat cell indices, then split into (row, col)
    flat = rng.choice(rows * cols, size=nnz, replace=False)
    data = rng.choice(values, size=nnz)
    mat = sp.coo_matrix((data, (flat // cols, flat % cols)), shape=(rows, cols))
    return SparseMatrix.from_scipy(mat)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Write a random sparse integer matrix file.")
    parser.add_argument("rows", type=int)
    parser.add_argument("cols", type=int)
    parser.add_argument("density", type=float, help="fraction of non-zero cells")
    parser.add_argument("output", help="file to write")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--low", type=int, default=-9)
    parser.add_argument("--high", type=int, default=9)
    args = parser.parse_args(argv)

    matrix = random_sparse(args.rows, args.cols, args.density,
                           low=args.low, high=args.high, seed=args.seed)
    with open(args.output, "w", encoding="utf-8") as f:
        codec.dump(matrix, f)

    print(f"Generating {args.rows}x{args.cols}, density={args.density:.4f} "
          f"-> {matrix.nnz} entries written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
