"""
Multi-level spreadsheet headers from nested column trees.

This package turns a tree of column definitions into the flat artifacts needed
to render a multi-row header: per-column label chains, merge regions for
repeated parent labels, and a position-based mapping for reading rows back.

Architecture:
    column tree → tree_walker → header_layout → header_projector
                → ColumnTemplate → excel_writer / excel_reader (openpyxl)

Modules:
    config: Configuration constants
    models: Leaf/Group nodes, MergeInterval, ColumnDescriptor
    cell_formats: Style and validation mappings to openpyxl objects
    tree_walker: Depth, chains and leaves of a column tree
    header_layout: Chain padding, matrix inversion, merge detection
    header_projector: Column descriptors with inherited style/width
    template: ColumnTemplate, the tree resolved once for writing and reading
    excel_writer: Header sheet creation with openpyxl
    excel_reader: Reading data rows back into records
"""

from .exceptions import HeaderTreeError, InvalidShape, MalformedTree
from .models import (
    ColumnDescriptor,
    Group,
    Leaf,
    MergeInterval,
    node_from_dict,
    node_to_dict,
)
from .tree_walker import get_chains, get_leaves, max_depth
from .header_layout import find_merges, get_merges, invert_matrix, pad_chains
from .header_projector import example_string, project_columns
from .template import ColumnTemplate
from .excel_writer import create_workbook, save_template
from .excel_reader import load_records, read_frame, read_records, unflatten_record

__all__ = [
    'HeaderTreeError', 'InvalidShape', 'MalformedTree',
    'ColumnDescriptor', 'Group', 'Leaf', 'MergeInterval', 'node_from_dict', 'node_to_dict',
    'get_chains', 'get_leaves', 'max_depth',
    'find_merges', 'get_merges', 'invert_matrix', 'pad_chains',
    'example_string', 'project_columns',
    'ColumnTemplate',
    'create_workbook', 'save_template',
    'load_records', 'read_frame', 'read_records', 'unflatten_record',
]
