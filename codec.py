import re

from errors import MatrixFormatError
from sparse import SparseMatrix

# Signed decimal integer, nothing else (no underscores, no floats)
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)


def parse_int(token, what, lineno=None):
    """Strict integer parsing: any non-numeric token is a MatrixFormatError."""
    token = token.strip()
    if not _INT_RE.fullmatch(token):
        raise MatrixFormatError(f"{what} is not an integer: {token!r}", lineno)
    return int(token)


def _parse_header(line, key, lineno):
    prefix = key + "="
    if not line.startswith(prefix):
        raise MatrixFormatError(f"expected '{prefix}<integer>', got {line!r}", lineno)
    return parse_int(line[len(prefix):], key, lineno)


def _parse_entry(line, lineno):
    """
    Parses '(row, col, value)' into a tuple of three ints.
    Surrounding whitespace and whitespace around each field is ignored.
    """
    if not (line.startswith("(") and line.endswith(")")):
        raise MatrixFormatError(f"entry must be '(row, col, value)', got {line!r}", lineno)

    fields = line[1:-1].split(",")
    if len(fields) != 3:
        raise MatrixFormatError(
            f"entry must have exactly 3 fields, got {len(fields)}: {line!r}", lineno)

    row = parse_int(fields[0], "row", lineno)
    col = parse_int(fields[1], "col", lineno)
    value = parse_int(fields[2], "value", lineno)
    return row, col, value


def loads(text):
    """
    Deserialises the flat text form:

        rows=<int>
        cols=<int>
        (<row>, <col>, <value>)   one per line, any order, may be omitted

    Blank lines are skipped. Entries go through SparseMatrix.set, so a later
    duplicate overwrites an earlier one and a 0 value deletes it.
    """
    lines = text.split("\n")
    if len(lines) < 2:
        raise MatrixFormatError("missing 'rows=' / 'cols=' header")

    rows = _parse_header(lines[0], "rows", 1)
    cols = _parse_header(lines[1], "cols", 2)
    matrix = SparseMatrix(rows, cols)

    for lineno, raw in enumerate(lines[2:], start=3):
        line = raw.strip()
        if not line:
            continue
        row, col, value = _parse_entry(line, lineno)
        matrix.set(row, col, value)

    return matrix


def dumps(matrix):
    """Serialises entries in insertion order, without a trailing newline."""
    lines = [f"rows={matrix.rows}", f"cols={matrix.cols}"]
    for (row, col), value in matrix.items():
        lines.append(f"({row}, {col}, {value})")
    return "\n".join(lines)


def load(fp):
    return loads(fp.read())


def dump(matrix, fp):
    fp.write(dumps(matrix))
