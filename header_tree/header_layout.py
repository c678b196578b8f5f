"""
Header row layout: chain padding, label grids and merge intervals.

Chains from ``tree_walker.get_chains`` have one entry per level actually
traversed, so leaves at different depths produce chains of different length.
To render them as one block of header rows:

    1. pad_chains     - insert blank nodes so every chain has the tree depth
    2. label_grid     - one row of keys per chain (one row per leaf column)
    3. invert_matrix  - transpose so rows become header rows
    4. find_merges    - runs of equal labels in a header row become merges

Example for {a:[aa,ab], b:[ba], c:[ca,cb]}:

    Row 0:  a  a  b  c  c       -> merges (0, 0..1) and (0, 3..4)
    Row 1:  aa ab ba ca cb
"""

from .exceptions import InvalidShape, MalformedTree
from .models import MergeInterval, placeholder


def pad_chains(chains, target_depth):
    """
    Pad short chains in place to ``target_depth`` entries.

    Placeholders go right after the first element, so the top-level header
    stays in row 0 and the leaf stays in the last row. Chains already at the
    target length are left untouched, which makes padding idempotent.

    Args:
        chains: List of chains (lists of nodes), modified in place
        target_depth: Required chain length, usually ``max_depth(root)``

    Raises:
        MalformedTree: If an empty chain would need padding
    """
    for i, chain in enumerate(chains):
        if len(chain) >= target_depth:
            continue
        if not chain:
            raise MalformedTree(
                f"Cannot pad empty chain at position {i} to depth {target_depth}"
            )

        padding = [placeholder() for _ in range(target_depth - len(chain))]
        chains[i] = [chain[0]] + padding + list(chain[1:])


def label_grid(chains):
    """Map each chain to the list of its node keys."""
    return [[node.key for node in chain] for chain in chains]


def invert_matrix(matrix):
    """
    Transpose a rectangular matrix.

    Args:
        matrix: Non-empty list of equal-length rows

    Returns:
        list of lists where ``result[j][i] == matrix[i][j]``

    Raises:
        InvalidShape: If the matrix has no rows or rows differ in length

    Examples:
        >>> invert_matrix([[1, 2, 3], [4, 5, 6]])
        [[1, 4], [2, 5], [3, 6]]
    """
    if not matrix:
        raise InvalidShape("Cannot invert a matrix with zero rows")

    cols = len(matrix[0])
    for i, row in enumerate(matrix):
        if len(row) != cols:
            raise InvalidShape(
                f"Row {i} has {len(row)} columns, expected {cols} (from row 0)"
            )

    return [[row[j] for row in matrix] for j in range(cols)]


def find_merges(grid):
    """
    Find runs of adjacent equal labels in each row of an inverted label grid.

    Args:
        grid: Rows are header rows (tree depth levels), columns are leaves

    Returns:
        list of MergeInterval in row-major order. Runs of length 1 are not
        reported; runs never span rows.
    """
    intervals = []

    for r, row in enumerate(grid):
        start = 0
        for i in range(1, len(row) + 1):
            # Close the current run at the end of the row or on a label change
            if i == len(row) or row[i] != row[i - 1]:
                end = i - 1
                if start != end:
                    intervals.append(MergeInterval(row=r, x=start, y=end))
                start = i

    return intervals


def get_merges(chains):
    """
    Compute header merges for padded chains.

    Args:
        chains: Chains padded to a common length with ``pad_chains``

    Returns:
        list of MergeInterval; empty when there are no chains or the tree
        has depth 0

    Raises:
        InvalidShape: If the chains were not padded to a common length
    """
    if not chains:
        return []
    return find_merges(invert_matrix(label_grid(chains)))
