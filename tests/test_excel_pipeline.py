"""
End-to-end tests: write a header template with openpyxl, fill in data rows,
and read them back.
"""

from dataclasses import dataclass
from datetime import datetime

import openpyxl
import pandas as pd
import pytest
from openpyxl.worksheet.datavalidation import DataValidation

from conftest import EXAMPLE_CONFIG, PEOPLE_CONFIG
from header_tree import (
    ColumnTemplate,
    Group,
    Leaf,
    MalformedTree,
    create_workbook,
    load_records,
    read_frame,
    read_records,
    save_template,
)
from header_tree.excel_writer import apply_merges
from header_tree.models import MergeInterval


@dataclass
class Person:
    name: str = None
    born: object = None
    active: object = None
    address: dict = None


def merged_ranges(ws):
    return sorted(str(r) for r in ws.merged_cells.ranges)


@pytest.fixture
def people_file(tmp_path):
    """Template for PEOPLE_CONFIG with two data rows and a blank row between."""
    path = tmp_path / "people.xlsx"
    wb = create_workbook(PEOPLE_CONFIG, title="People")
    ws = wb.active

    # Rows 1-2 labels, row 3 sample row, data from row 4
    rows = [
        (4, ("Grace", datetime(1906, 12, 9), False, "New York", "admiral")),
        (6, ("Alan", datetime(1912, 6, 23), True, "London", None)),
    ]
    for row_idx, values in rows:
        for col_idx, value in enumerate(values, 1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    wb.save(path)
    return path


class TestCreateWorkbook:
    """Test header writing."""

    def test_header_rows(self):
        """Test labels land in rows 1-2 and the sample row is blank."""
        ws = create_workbook(EXAMPLE_CONFIG).active

        assert [ws.cell(row=1, column=c).value for c in (1, 3, 4)] == ['a', 'b', 'c']
        assert [ws.cell(row=2, column=c).value for c in range(1, 6)] == ['aa', 'ab', 'ba', 'ca', 'cb']
        # Sample row: no examples configured
        assert [ws.cell(row=3, column=c).value for c in range(1, 6)] == [''] * 5

    def test_merges_applied(self):
        """Test repeated parent labels are merged."""
        ws = create_workbook(EXAMPLE_CONFIG).active
        assert merged_ranges(ws) == ['A1:B1', 'D1:E1']

    def test_sheet_title(self):
        """Test the worksheet title is set."""
        assert create_workbook(EXAMPLE_CONFIG, title="Specs").active.title == "Specs"

    def test_sample_row(self):
        """Test example values are rendered below the labels."""
        ws = create_workbook(PEOPLE_CONFIG).active
        assert [ws.cell(row=3, column=c).value for c in range(1, 6)] == [
            'Ada', '1815-12-10', 'true', 'London', ''
        ]

    def test_inherited_width(self):
        """Test a group's width applies to its columns."""
        ws = create_workbook(PEOPLE_CONFIG).active
        assert ws.column_dimensions['A'].width == 20
        assert ws.column_dimensions['B'].width == 20

    def test_named_style_applied_to_header_cells(self):
        """Test a group's style reaches every header cell of its columns."""
        tree = Group('', (Group('g', (Leaf('a'), Leaf('b')), style='Good'), Leaf('c')))
        ws = create_workbook(tree).active

        assert ws['A1'].style == 'Good'
        assert ws['A2'].style == 'Good'
        assert ws['A3'].style == 'Good'
        assert ws['C2'].style == 'Normal'

    def test_style_not_applied_to_data_rows(self):
        """Test data entry cells keep the default style."""
        tree = Group('', (Leaf('a', style='Good'), Leaf('b')))
        ws = create_workbook(tree).active

        assert ws['A2'].style == 'Good'
        assert ws['A3'].style == 'Normal'

    def test_style_mapping_from_config(self):
        """Test a style given as a mapping is registered and applied."""
        config = {'key': '', 'columns': [
            {'key': 'Price', 'style': {'name': 'price', 'font': {'bold': True}}},
        ]}
        wb = create_workbook(config)

        assert wb.active['A1'].style == 'price'
        assert wb.active['A1'].font.bold is True
        assert 'price' in wb.named_styles

    def test_unknown_style_name_raises(self):
        """Test a style name openpyxl does not know names the column."""
        tree = Group('', (Leaf('a'), Leaf('b', style='No Such Style')))
        with pytest.raises(MalformedTree, match="Column B"):
            create_workbook(tree)

    def test_validation_covers_data_rows(self):
        """Test a validation covers its column from the first data row."""
        yes_no = DataValidation(type="list", formula1='"yes,no"')
        tree = Group('', (
            Group('g', (Leaf('a'), Leaf('b', validation=yes_no))),
            Leaf('c'),
        ))
        ws = create_workbook(tree).active

        [added] = ws.data_validations.dataValidation
        assert added.type == 'list'
        assert added.formula1 == '"yes,no"'
        assert {str(r) for r in added.sqref.ranges} == {'B4:B9999'}

    def test_shared_validation_registered_once(self):
        """Test leaves sharing a validation share one sheet entry."""
        yes_no = DataValidation(type="list", formula1='"yes,no"')
        tree = Group('', (Leaf('a', validation=yes_no), Leaf('b', validation=yes_no)))
        ws = create_workbook(tree).active

        [added] = ws.data_validations.dataValidation
        assert {str(r) for r in added.sqref.ranges} == {'A3:A9999', 'B3:B9999'}

    def test_validation_reused_across_workbooks(self):
        """Test building several sheets leaves the configured validation untouched."""
        yes_no = DataValidation(type="list", formula1='"yes,no"')
        flat = Group('', (Leaf('a', validation=yes_no), Leaf('b')))
        nested = Group('', (Group('g', (Leaf('a', validation=yes_no), Leaf('b'))),))

        first = create_workbook(flat).active
        second = create_workbook(nested).active

        assert not yes_no.sqref.ranges
        [first_added] = first.data_validations.dataValidation
        [second_added] = second.data_validations.dataValidation
        assert {str(r) for r in first_added.sqref.ranges} == {'A3:A9999'}
        assert {str(r) for r in second_added.sqref.ranges} == {'A4:A9999'}

    def test_validation_mapping_from_config(self):
        """Test a validation given as a mapping is attached to the sheet."""
        config = {'key': '', 'columns': [
            {'key': 'Status', 'validation': {'type': 'list', 'formula1': '"open,closed"'}},
        ]}
        ws = create_workbook(config).active

        [added] = ws.data_validations.dataValidation
        assert added.formula1 == '"open,closed"'
        assert {str(r) for r in added.sqref.ranges} == {'A3:A9999'}

    def test_apply_merges_translates_coordinates(self):
        """Test 0-based intervals become 1-based cell ranges."""
        ws = openpyxl.Workbook().active
        apply_merges(ws, [MergeInterval(row=2, x=1, y=3)])
        assert merged_ranges(ws) == ['B3:D3']

    def test_save_template(self, tmp_path):
        """Test the saved file keeps labels and merges."""
        path = save_template(EXAMPLE_CONFIG, tmp_path / "template.xlsx")
        ws = openpyxl.load_workbook(path).active
        assert ws['A1'].value == 'a'
        assert merged_ranges(ws) == ['A1:B1', 'D1:E1']


class TestReadRecords:
    """Test reading data rows back."""

    def test_sample_row_read_as_first_record(self, people_file):
        """Test the sample row is read unless skipped."""
        records = load_records(people_file, PEOPLE_CONFIG)

        assert len(records) == 3
        assert records[0] == {
            'name': 'Ada',
            'born': '1815-12-10',
            'active': 'true',
            'address': {'city': 'London'},
        }

    def test_skip_example_row(self, people_file):
        """Test data rows keep their cell types and blank rows are skipped."""
        records = load_records(people_file, PEOPLE_CONFIG, skip_example_row=True)

        assert [r['name'] for r in records] == ['Grace', 'Alan']
        assert records[0]['born'] == datetime(1906, 12, 9)
        assert records[0]['active'] is False
        assert records[1]['address'] == {'city': 'London'}

    def test_unbound_leaves_ignored(self, people_file):
        """Test columns without a prop are not read."""
        records = load_records(people_file, PEOPLE_CONFIG, skip_example_row=True)
        assert 'Notes' not in records[0]
        assert 'admiral' not in records[0].values()

    def test_named_sheet(self, people_file):
        """Test reading a sheet by title."""
        records = load_records(people_file, PEOPLE_CONFIG, sheet="People", skip_example_row=True)
        assert len(records) == 2

    def test_record_type(self, people_file):
        """Test records are built as dataclass instances."""
        wb = openpyxl.load_workbook(people_file)
        records = read_records(wb.active, PEOPLE_CONFIG, record_type=Person, skip_example_row=True)

        assert records[0] == Person(
            name='Grace',
            born=datetime(1906, 12, 9),
            active=False,
            address={'city': 'New York'},
        )

    def test_template_reused(self, people_file):
        """Test a prebuilt ColumnTemplate can be passed in."""
        template = ColumnTemplate.from_dict(PEOPLE_CONFIG)
        wb = openpyxl.load_workbook(people_file)
        assert len(read_records(wb.active, template, skip_example_row=True)) == 2

    def test_header_only_sheet(self):
        """Test a sheet without data rows reads as no records."""
        ws = create_workbook(PEOPLE_CONFIG).active
        assert read_records(ws, PEOPLE_CONFIG, skip_example_row=True) == []

    def test_wide_sheet_reads_every_column(self, tmp_path):
        """Test all columns are read on a sheet wider than a few hundred columns."""
        tree = Group('', tuple(Leaf(f'c{i}', prop=f'p{i}') for i in range(300)))
        path = tmp_path / "wide.xlsx"
        wb = create_workbook(tree)
        for col_idx in range(1, 301):
            wb.active.cell(row=3, column=col_idx, value=col_idx - 1)
        wb.save(path)

        [record] = load_records(path, tree, skip_example_row=True)

        assert len(record) == 300
        assert record['p0'] == 0
        assert record['p299'] == 299


class TestReadFrame:
    """Test read_frame function."""

    def test_multiindex_columns(self, people_file):
        """Test a multi-level header becomes a pandas MultiIndex."""
        wb = openpyxl.load_workbook(people_file)
        df = read_frame(wb.active, PEOPLE_CONFIG, skip_example_row=True)

        assert isinstance(df.columns, pd.MultiIndex)
        assert list(df.columns) == [
            ('Person', 'Name'),
            ('Person', 'Born'),
            ('Active', ''),
            ('Address', 'City'),
            ('Address', 'Notes'),
        ]
        assert df.shape == (2, 5)
        assert df[('Person', 'Name')].tolist() == ['Grace', 'Alan']

    def test_flat_columns_for_single_level(self):
        """Test a single header row gives plain column names."""
        tree = Group('', (Leaf('x', example=1), Leaf('y', example=2)))
        ws = create_workbook(tree).active
        df = read_frame(ws, tree)

        assert list(df.columns) == ['x', 'y']
        assert df.iloc[0].tolist() == ['1', '2']


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
