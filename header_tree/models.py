"""
Column tree node types and derived header values.

A column configuration is a tree: every ``Group`` is a header cell spanning the
columns below it, every ``Leaf`` is one real spreadsheet column.

    Group('')
    ├── Group('General')
    │   ├── Leaf('Codec', prop='audio.codec')
    │   └── Leaf('Jacks', prop='audio.jacks')
    └── Leaf('Model', prop='model')

Classes:
    Leaf: A single spreadsheet column
    Group: A header cell with one or more child nodes
    MergeInterval: A run of leaf columns sharing one label in one header row
    ColumnDescriptor: Flattened column handed to the spreadsheet writer

Functions:
    placeholder: Blank node used to pad short chains
    node_from_dict: Build a node tree from nested dicts ('columns' lists)
    node_to_dict: Inverse of node_from_dict
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .cell_formats import to_style, to_validation
from .config import PLACEHOLDER_KEY
from .exceptions import MalformedTree


@dataclass(frozen=True)
class Leaf:
    """One spreadsheet column.

    ``prop`` binds the column to an output field when reading rows back;
    ``example`` is rendered into the sample row below the header labels.
    """

    key: str
    prop: str | None = None
    example: Any = None
    style: Any = None
    width: float | None = None
    validation: Any = None


@dataclass(frozen=True)
class Group:
    """A header cell spanning all leaves below it. Children must be non-empty."""

    key: str
    children: tuple[Node, ...]
    style: Any = None
    width: float | None = None

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if not children:
            raise MalformedTree(f"Group '{self.key}' has no children")
        for child in children:
            if not isinstance(child, (Leaf, Group)):
                raise MalformedTree(
                    f"Group '{self.key}' contains a non-node child: {child!r}"
                )
        object.__setattr__(self, "children", children)


Node = Union[Leaf, Group]


@dataclass(frozen=True)
class MergeInterval:
    """Leaf columns ``x..y`` (inclusive) of header row ``row`` share one label."""

    row: int
    x: int
    y: int


@dataclass(frozen=True)
class ColumnDescriptor:
    """A flattened column: header labels top to bottom plus writer metadata."""

    header: tuple[str, ...]
    style: Any = None
    width: float | None = None
    key: str | None = None
    validation: Any = None


def placeholder() -> Leaf:
    """Blank padding node inserted into chains shorter than the tree depth."""
    return Leaf(key=PLACEHOLDER_KEY)


def node_from_dict(data):
    """
    Build a column tree from nested dicts.

    A dict with a non-empty 'columns' list becomes a Group, anything else a
    Leaf. Attributes that do not apply to groups (prop, example, validation)
    are ignored on groups. Style and validation mappings become openpyxl
    NamedStyle and DataValidation objects (see cell_formats).

    Args:
        data: Mapping with 'key' and optional 'prop', 'columns', 'style',
              'width', 'example', 'validation'

    Returns:
        Leaf or Group

    Raises:
        MalformedTree: If data or any entry of 'columns' is not a mapping,
                       or a style or validation is invalid

    Examples:
        >>> node = node_from_dict({'key': 'a', 'columns': [{'key': 'aa'}]})
        >>> node.children[0].key
        'aa'
        >>> node_from_dict({'key': 'Model', 'prop': 'model'})
        Leaf(key='Model', prop='model', example=None, style=None, width=None, validation=None)
    """
    if isinstance(data, (Leaf, Group)):
        return data
    if not isinstance(data, Mapping):
        raise MalformedTree(f"Column entry must be a mapping, got {type(data).__name__}")

    key = str(data.get("key", ""))
    columns = data.get("columns") or []

    if not columns:
        return Leaf(
            key=key,
            prop=data.get("prop") or None,
            example=data.get("example"),
            style=to_style(data.get("style")),
            width=data.get("width"),
            validation=to_validation(data.get("validation")),
        )

    if isinstance(columns, (str, bytes, Mapping)):
        raise MalformedTree(f"'columns' of '{key}' must be a list of column entries")

    children = []
    for entry in columns:
        if not isinstance(entry, (Mapping, Leaf, Group)):
            raise MalformedTree(
                f"'columns' of '{key}' contains a non-mapping entry: {entry!r}"
            )
        children.append(node_from_dict(entry))

    return Group(
        key=key,
        children=tuple(children),
        style=to_style(data.get("style")),
        width=data.get("width"),
    )


def node_to_dict(node):
    """Convert a node tree back into nested dicts, dropping unset attributes."""
    result = {"key": node.key}
    if isinstance(node, Group):
        result["columns"] = [node_to_dict(child) for child in node.children]
        attributes = ("style", "width")
    else:
        attributes = ("prop", "example", "style", "width", "validation")

    for name in attributes:
        value = getattr(node, name)
        if value is not None:
            result[name] = value
    return result
