"""
Walking a column tree.

The root of a column tree is never rendered itself; its descendants make up
the header rows. All functions here are pure and read the tree only.

Functions:
    is_leaf: True if the node is a spreadsheet column
    max_depth: Number of header label rows the tree needs
    get_chains: Root-excluded label chain for every leaf
    get_leaves: Leaf nodes, depth-first and left to right
"""

from .models import Group


def is_leaf(node):
    """Return True if the node has no children."""
    return not isinstance(node, Group)


def max_depth(node):
    """
    Compute the depth of a column tree.

    Depth grows by one per level descended from ``node``; a childless root
    has depth 0.

    Args:
        node: Root Leaf or Group

    Returns:
        int: Length of the longest chain below the root

    Examples:
        >>> max_depth(Leaf(''))
        0
        >>> max_depth(Group('', (Group('a', (Leaf('aa'),)),)))
        2
    """
    return _max_depth(node, 0)


def _max_depth(node, acc):
    if is_leaf(node):
        return acc
    return max(_max_depth(child, acc + 1) for child in node.children)


def get_chains(node):
    """
    Enumerate root-to-leaf chains, excluding the root itself.

    Returns one chain per leaf, in left-to-right order. A chain lists the
    nodes visited below the root, ending with the leaf.

    Args:
        node: Root Leaf or Group

    Returns:
        list of lists of nodes. A root that is itself a leaf yields ``[[]]``.

    Examples:
        >>> tree = node_from_dict({'key': '', 'columns': [
        ...     {'key': 'a', 'columns': [{'key': 'aa'}, {'key': 'ab'}]}]})
        >>> [[n.key for n in chain] for chain in get_chains(tree)]
        [['a', 'aa'], ['a', 'ab']]
    """
    return _get_chains(node, [])


def _get_chains(node, chain):
    if is_leaf(node):
        return [chain]

    chains = []
    for child in node.children:
        chains.extend(_get_chains(child, chain + [child]))
    return chains


def get_leaves(node):
    """Return all leaves in depth-first, left-to-right order."""
    if is_leaf(node):
        return [node]

    leaves = []
    for child in node.children:
        leaves.extend(get_leaves(child))
    return leaves
