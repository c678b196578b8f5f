"""
Writing multi-level header templates with openpyxl.

The sheet layout produced for a tree of depth D:

    Row 1..D:   header labels, repeated parent labels merged horizontally
    Row D+1:    sample row rendered from each leaf's example value
    Row D+2..:  free for data entry (data validations apply here)

Functions:
    create_workbook: Build a Workbook with one header sheet
    write_header: Write labels, widths and styles for every column
    apply_merges: Translate MergeIntervals into merged cell ranges
    apply_validations: Attach leaf DataValidations to the data rows
    save_template: Build and save a template to disk
"""

import copy
import logging

import openpyxl
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.cell_range import MultiCellRange

from .cell_formats import to_style, to_validation
from .config import DEFAULT_SHEET_TITLE, VALIDATION_LAST_ROW
from .exceptions import MalformedTree
from .template import as_template

logger = logging.getLogger(__name__)


def create_workbook(config, title=DEFAULT_SHEET_TITLE):
    """
    Build a workbook whose active sheet carries the header for ``config``.

    Args:
        config: ColumnTemplate, node tree or nested dict config
        title: Worksheet title

    Returns:
        openpyxl.Workbook

    Examples:
        >>> wb = create_workbook({'key': '', 'columns': [
        ...     {'key': 'a', 'columns': [{'key': 'aa'}, {'key': 'ab'}]}]})
        >>> wb.active['A1'].value, wb.active['B2'].value
        ('a', 'ab')
    """
    template = as_template(config)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title

    write_header(ws, template)
    apply_merges(ws, template.merges)
    apply_validations(ws, template)

    return wb


def write_header(ws, template):
    """
    Write every column's header labels, width and style into ``ws``.

    The style is applied to the column's header cells (label rows and sample
    row) only; data rows keep the sheet default so entered values are not
    restyled.

    Raises:
        MalformedTree: If a style name is neither built in nor registered
    """
    for col_idx, column in enumerate(template.columns, 1):
        letter = get_column_letter(col_idx)
        style = to_style(column.style)

        for row_idx, label in enumerate(column.header, 1):
            cell = ws.cell(row=row_idx, column=col_idx, value=label)
            if style is not None:
                try:
                    cell.style = style
                except ValueError as e:
                    raise MalformedTree(f"Column {letter}: {e}") from e

        if column.width:
            ws.column_dimensions[letter].width = column.width

    logger.debug(
        "Wrote %d header rows for %d columns", template.header_row_count, len(template.columns)
    )


def apply_merges(ws, merges):
    """
    Merge header cells for each MergeInterval.

    Interval rows and columns are 0-based; worksheet rows and columns are
    1-based, so interval (row=0, x=0, y=1) becomes the range A1:B1.
    """
    for merge in merges:
        ws.merge_cells(
            start_row=merge.row + 1,
            start_column=merge.x + 1,
            end_row=merge.row + 1,
            end_column=merge.y + 1,
        )
    logger.debug("Applied %d header merges", len(merges))


def apply_validations(ws, template, last_row=VALIDATION_LAST_ROW):
    """
    Attach each leaf's validation to its column's data rows.

    The range starts right below the sample row. Each sheet gets its own
    copy of a validation, so the template's validations never collect
    ranges. Leaves sharing one validation share one copy, registered on the
    sheet once and covering all of their columns.

    Returns:
        list of the DataValidations added to ``ws``
    """
    first_row = template.header_row_count + 1
    sheet_validations = {}

    for col_idx, column in enumerate(template.columns, 1):
        if column.validation is None:
            continue

        validation = sheet_validations.get(id(column.validation))
        if validation is None:
            validation = copy.copy(to_validation(column.validation))
            validation.sqref = MultiCellRange()
            ws.add_data_validation(validation)
            sheet_validations[id(column.validation)] = validation

        letter = get_column_letter(col_idx)
        validation.add(f"{letter}{first_row}:{letter}{last_row}")

    return list(sheet_validations.values())


def save_template(config, path, title=DEFAULT_SHEET_TITLE):
    """Build a header template workbook and save it to ``path``."""
    wb = create_workbook(config, title=title)
    wb.save(path)
    logger.info("Saved header template to %s", path)
    return path
