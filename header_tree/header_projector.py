"""
Projecting padded chains onto flat column descriptors.

Each padded chain becomes one ColumnDescriptor: the chain's labels top to
bottom, followed by a sample value rendered from the leaf's example. Style and
width are inherited from the first node along the chain (root end first) that
defines them, so a group's width applies to every column below it unless a
higher group already set one.
"""

import numbers
from datetime import date

from .exceptions import MalformedTree
from .models import ColumnDescriptor


def example_string(value):
    """
    Render an example value for the sample row.

    Examples:
        >>> example_string(None)
        ''
        >>> example_string(True)
        'true'
        >>> example_string(date(2024, 3, 1))
        '2024-03-01'
        >>> example_string(12.5)
        '12.5'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, numbers.Number):
        return str(value)

    raise TypeError(f"Unsupported example value type: {type(value).__name__}")


def inherited(chain, attribute):
    """Return the first set value of ``attribute`` scanning root end to leaf."""
    for node in chain:
        value = getattr(node, attribute, None)
        if value:
            return value
    return None


def project_column(chain, leaf=None):
    """
    Build the ColumnDescriptor for one padded chain.

    ``leaf`` defaults to the last node of the chain. It must be given for the
    empty chain of a tree whose root is its only leaf (that column has no
    label rows, only the sample value) and for padded single-node chains.
    """
    if leaf is None:
        if not chain:
            raise MalformedTree("Cannot project an empty chain without its leaf")
        leaf = chain[-1]
    header = tuple(node.key for node in chain) + (example_string(leaf.example),)
    sources = list(chain) or [leaf]

    return ColumnDescriptor(
        header=header,
        style=inherited(sources, "style"),
        width=inherited(sources, "width"),
        key=leaf.prop,
        validation=leaf.validation,
    )


def project_columns(chains, leaves=None):
    """
    Build column descriptors for padded chains, in leaf order.

    Args:
        chains: Padded chains from ``get_chains`` + ``pad_chains``
        leaves: Leaves from ``get_leaves``, same order as ``chains``. Needed
                when a chain's leaf is not its last node: padding a
                single-node chain puts the placeholders after the leaf, and
                a root-only tree has an empty chain.

    Returns:
        list of ColumnDescriptor
    """
    if leaves is None:
        return [project_column(chain) for chain in chains]
    return [project_column(chain, leaf=leaf) for chain, leaf in zip(chains, leaves)]
