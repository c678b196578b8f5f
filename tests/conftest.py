"""Shared column trees for the header_tree tests."""

import os
import sys
from datetime import date

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from header_tree import node_from_dict

EXAMPLE_CONFIG = {
    'key': '',
    'columns': [
        {'key': 'a', 'columns': [{'key': 'aa'}, {'key': 'ab'}]},
        {'key': 'b', 'columns': [{'key': 'ba'}]},
        {'key': 'c', 'columns': [{'key': 'ca'}, {'key': 'cb'}]},
    ],
}

DEEP_CONFIG = {
    'key': '',
    'columns': [
        {'key': 'a', 'columns': [{'key': 'aa'}, {'key': 'ab'}]},
        {'key': 'b', 'columns': [{'key': 'ba'}]},
        {
            'key': 'c',
            'columns': [
                {'key': 'ca', 'columns': [{'key': 'caa', 'columns': [{'key': 'caaa'}]}]},
                {'key': 'cb'},
            ],
        },
    ],
}

PEOPLE_CONFIG = {
    'key': '',
    'columns': [
        {
            'key': 'Person',
            'width': 20,
            'columns': [
                {'key': 'Name', 'prop': 'name', 'example': 'Ada'},
                {'key': 'Born', 'prop': 'born', 'example': date(1815, 12, 10)},
            ],
        },
        {'key': 'Active', 'prop': 'active', 'example': True},
        {
            'key': 'Address',
            'columns': [
                {'key': 'City', 'prop': 'address.city', 'example': 'London'},
                {'key': 'Notes'},
            ],
        },
    ],
}


def keys(nodes):
    return [node.key for node in nodes]


@pytest.fixture
def example_tree():
    return node_from_dict(EXAMPLE_CONFIG)


@pytest.fixture
def deep_tree():
    return node_from_dict(DEEP_CONFIG)


@pytest.fixture
def people_tree():
    return node_from_dict(PEOPLE_CONFIG)
