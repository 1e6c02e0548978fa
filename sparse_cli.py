import argparse
import sys

import codec
from arithmetic import PROGRESS_CHUNK, add, multiply, subtract
from errors import SparseMatrixError

DEFAULT_OUTPUT = "results.txt"
PREVIEW_LINES = 12

OPERATIONS = {
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
}


class ProgressPrinter:
    """Progress observer for multiply(): prints one status line per report."""
    def __init__(self, label="Multiplication", stream=None):
        self.label = label
        self.stream = stream
        self.last = 0.0

    def update(self, fraction):
        self.last = fraction
        print(f"{self.label} progress: {fraction * 100:.2f}%", file=self.stream or sys.stdout)


def read_matrix(path):
    with open(path, "r", encoding="utf-8") as f:
        return codec.load(f)


def write_matrix(matrix, path):
    with open(path, "w", encoding="utf-8") as f:
        codec.dump(matrix, f)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Add, subtract or multiply two sparse integer matrices.")
    parser.add_argument("operation", nargs="?", help="add, subtract or multiply")
    parser.add_argument("first", nargs="?", help="path to the first matrix file")
    parser.add_argument("second", nargs="?", help="path to the second matrix file")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                        help=f"where to write the result (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--chunk-size", type=int, default=PROGRESS_CHUNK,
                        help="pair comparisons between multiply progress reports")
    parser.add_argument("--preview", type=int, default=PREVIEW_LINES,
                        help="number of result lines to print")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Anything not given on the command line is asked for, in this order
    operation = args.operation or input("Select operation (add/subtract/multiply): ")
    first = args.first or input("Enter path to first matrix file: ")
    second = args.second or input("Enter path to second matrix file: ")

    operation = operation.strip().lower()
    if operation not in OPERATIONS:
        print("Invalid operation")
        return 2

    try:
        a = read_matrix(first.strip())
        b = read_matrix(second.strip())
    except (OSError, SparseMatrixError) as e:
        print(f"Error loading matrices: {e}")
        return 1

    try:
        if operation == "multiply":
            result = multiply(a, b, progress=ProgressPrinter(), chunk_size=args.chunk_size)
        else:
            result = OPERATIONS[operation](a, b)
    except (SparseMatrixError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    text = codec.dumps(result)
    print(f"Non-zero elements in result: {result.nnz}")
    print("Preview of result file:")
    print("\n".join(text.split("\n")[:args.preview]))

    write_matrix(result, args.output)
    print(f"Results have been saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
