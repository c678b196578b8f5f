"""
Column template: a column tree resolved once into everything needed to write
and read a multi-level header sheet.

Architecture:
    node tree → tree_walker → header_layout → header_projector → ColumnTemplate
    ColumnTemplate → excel_writer (header rows, merges, validations)
    ColumnTemplate → excel_reader (leaf index → property binding)
"""

import dataclasses
import logging
from collections.abc import Mapping

from .config import PROPERTY_SEPARATOR
from .exceptions import MalformedTree
from .header_layout import get_merges, pad_chains
from .header_projector import project_columns
from .models import node_from_dict
from .tree_walker import get_chains, get_leaves, max_depth

logger = logging.getLogger(__name__)


class ColumnTemplate:
    """
    Read-only, precomputed layout of a column tree.

    All attributes are set in ``__init__``; assigning to them afterwards
    raises AttributeError. The collections are tuples.

    Attributes:
        root: The column tree
        depth: Number of label rows above the sample row
        leaves: Leaf nodes in column order
        chains: Padded chains, one per leaf
        columns: ColumnDescriptor per leaf
        merges: MergeInterval list for the label rows
        field_map: (leaf_index, prop) pairs for leaves bound to a property
        record_type: Optional dataclass the props were checked against

    Examples:
        >>> t = ColumnTemplate.from_dict({'key': '', 'columns': [
        ...     {'key': 'a', 'columns': [{'key': 'aa', 'prop': 'x'}, {'key': 'ab'}]}]})
        >>> t.depth, t.header_row_count
        (2, 3)
        >>> t.field_map
        ((0, 'x'),)
    """

    def __init__(self, root, record_type=None):
        self.root = node_from_dict(root)
        self.record_type = record_type

        self.depth = max_depth(self.root)
        self.leaves = tuple(get_leaves(self.root))

        chains = get_chains(self.root)
        pad_chains(chains, self.depth)
        self.chains = tuple(tuple(chain) for chain in chains)

        self.columns = tuple(project_columns(self.chains, self.leaves))
        self.merges = tuple(get_merges(self.chains))
        self.field_map = self._build_field_map()

        logger.debug(
            "Resolved column template: depth=%d, leaves=%d, merges=%d, bound=%d",
            self.depth, len(self.leaves), len(self.merges), len(self.field_map)
        )
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"ColumnTemplate is read-only, cannot set '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f"ColumnTemplate is read-only, cannot delete '{name}'")

    @classmethod
    def from_dict(cls, data, record_type=None):
        return cls(node_from_dict(data), record_type=record_type)

    @property
    def header_row_count(self):
        """Label rows plus the sample row."""
        return self.depth + 1

    def _build_field_map(self):
        field_names = None
        if self.record_type is not None:
            if not dataclasses.is_dataclass(self.record_type):
                raise TypeError(
                    f"record_type must be a dataclass, got {self.record_type!r}"
                )
            field_names = {f.name for f in dataclasses.fields(self.record_type)}

        field_map = []
        seen = set()
        for index, leaf in enumerate(self.leaves):
            if not leaf.prop:
                continue
            if leaf.prop in seen:
                raise MalformedTree(f"Property '{leaf.prop}' is bound to more than one column")
            seen.add(leaf.prop)

            if field_names is not None:
                field = leaf.prop.split(PROPERTY_SEPARATOR, 1)[0]
                if field not in field_names:
                    raise MalformedTree(
                        f"Property '{leaf.prop}' of column '{leaf.key}' is not a field "
                        f"of {self.record_type.__name__}"
                    )
            field_map.append((index, leaf.prop))

        for prop in seen:
            prefix = prop + PROPERTY_SEPARATOR
            if any(other.startswith(prefix) for other in seen):
                raise MalformedTree(f"Property '{prop}' is both a value and a parent path")

        return tuple(field_map)


def as_template(config, record_type=None):
    """Accept a ColumnTemplate, a node tree or a nested dict config."""
    if isinstance(config, ColumnTemplate):
        if record_type is not None and record_type is not config.record_type:
            return ColumnTemplate(config.root, record_type=record_type)
        return config
    if isinstance(config, Mapping):
        return ColumnTemplate.from_dict(config, record_type=record_type)
    return ColumnTemplate(config, record_type=record_type)
