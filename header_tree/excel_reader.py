"""
Reading data rows back from a multi-level header sheet.

Cells are mapped 1:1 by position onto the template's leaves. Leaves bound to a
property (``prop``) are written into the output record; unbound leaves are
skipped. Dotted properties nest:

    Leaf('City', prop='address.city')  →  {'address': {'city': ...}}

Data starts right below the label rows, so the sample row written by
``excel_writer`` is read as the first record unless ``skip_example_row`` is set.

Functions:
    iter_data_rows: Raw cell values per data row, one per leaf
    read_records: Records (dicts or dataclass instances) per data row
    read_frame: pandas DataFrame with the header chains as column index
    load_records: Open a workbook file and read its records
    unflatten_record: Expand dotted keys into nested dicts
"""

import logging

import openpyxl
import pandas as pd

from .config import PROPERTY_SEPARATOR
from .exceptions import MalformedTree
from .template import as_template

logger = logging.getLogger(__name__)


def iter_data_rows(ws, template, skip_example_row=False):
    """
    Yield data rows as tuples with one value per leaf column.

    Args:
        ws: openpyxl worksheet (regular or read-only)
        template: ColumnTemplate the sheet was written with
        skip_example_row: Start below the sample row instead of on it

    Yields:
        tuple of cell values, one per leaf; missing trailing cells are None.
        Rows with no values at all are skipped.
    """
    width = len(template.leaves)

    min_row = template.depth + 1
    if skip_example_row:
        min_row += 1

    for row in ws.iter_rows(min_row=min_row, max_col=width, values_only=True):
        values = tuple(row) + (None,) * (width - len(row))
        if all(value is None for value in values):
            continue
        yield values


def unflatten_record(record, sep=PROPERTY_SEPARATOR):
    """
    Convert separator-delimited flat keys into a nested dictionary.

    Args:
        record: Dict with dotted keys
        sep: Path separator

    Returns:
        Nested dictionary; values are kept as-is

    Raises:
        MalformedTree: If a key is used both as a value and as a parent

    Examples:
        >>> unflatten_record({'address.city': 'Oslo', 'name': 'Ada'})
        {'address': {'city': 'Oslo'}, 'name': 'Ada'}
    """
    nested = {}

    for key, value in record.items():
        parts = key.split(sep)

        current = nested
        for part in parts[:-1]:
            current = current.setdefault(part, {})
            if not isinstance(current, dict):
                raise MalformedTree(f"Property '{key}' nests below a value at '{part}'")

        last = parts[-1]
        if isinstance(current.get(last), dict):
            raise MalformedTree(f"Property '{key}' would overwrite nested properties")
        current[last] = value

    return nested


def read_records(ws, config, record_type=None, skip_example_row=False):
    """
    Read every data row of ``ws`` into a record.

    Args:
        ws: openpyxl worksheet
        config: ColumnTemplate, node tree or nested dict config
        record_type: Optional dataclass; records are built with
                     ``record_type(**fields)``, otherwise plain nested dicts
        skip_example_row: Do not read the sample row as a record

    Returns:
        list of records in sheet order
    """
    template = as_template(config, record_type=record_type)

    records = []
    for values in iter_data_rows(ws, template, skip_example_row=skip_example_row):
        flat = {prop: values[index] for index, prop in template.field_map}
        fields = unflatten_record(flat)
        records.append(record_type(**fields) if record_type is not None else fields)

    logger.debug("Read %d records from sheet '%s'", len(records), ws.title)
    return records


def read_frame(ws, config, skip_example_row=False):
    """
    Read data rows into a DataFrame.

    Columns are indexed by their header labels: a MultiIndex of the padded
    label chains for trees deeper than one level, plain leaf labels otherwise.
    """
    template = as_template(config)
    rows = list(iter_data_rows(ws, template, skip_example_row=skip_example_row))

    if template.depth > 1:
        labels = [tuple(node.key for node in chain) for chain in template.chains]
        columns = pd.MultiIndex.from_tuples(labels)
    else:
        columns = pd.Index([leaf.key for leaf in template.leaves])

    return pd.DataFrame(rows, columns=columns)


def load_records(path, config, sheet=None, record_type=None, skip_example_row=False):
    """
    Open an .xlsx file and read the records of one sheet.

    Args:
        path: Workbook path
        config: ColumnTemplate, node tree or nested dict config
        sheet: Sheet name; the active sheet when None
        record_type: See ``read_records``
        skip_example_row: See ``read_records``

    Returns:
        list of records
    """
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb[sheet] if sheet else wb.active
        return read_records(ws, config, record_type=record_type, skip_example_row=skip_example_row)
    finally:
        wb.close()
