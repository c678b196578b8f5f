"""
Converting column formatting from plain config values into openpyxl objects.

JSON column configs describe styles and validations as mappings:

    'style':      'Good'                      (built-in or registered name)
    'style':      {'name': 'money', 'number_format': '#,##0.00',
                   'font': {'bold': True}, 'fill': {'fill_type': 'solid', 'fgColor': 'FFFF00'}}
    'validation': {'type': 'list', 'formula1': '"yes,no"'}

Functions:
    to_style: str / NamedStyle / mapping → str or NamedStyle
    to_validation: DataValidation / mapping → DataValidation
"""

from collections.abc import Mapping

from openpyxl.styles import Alignment, Border, Font, NamedStyle, PatternFill, Protection, Side
from openpyxl.worksheet.datavalidation import DataValidation

from .exceptions import MalformedTree

# NamedStyle attributes given as nested mappings, and the class each becomes
STYLE_PARTS = {
    'font': Font,
    'fill': PatternFill,
    'alignment': Alignment,
    'protection': Protection,
}

BORDER_SIDES = ('left', 'right', 'top', 'bottom', 'diagonal')


def to_style(value):
    """
    Normalize a column style.

    Args:
        value: None, a style name, a NamedStyle, or a mapping with a 'name'
               plus optional 'number_format', 'font', 'fill', 'alignment',
               'protection' and 'border' entries

    Returns:
        None, str or NamedStyle

    Raises:
        MalformedTree: If the value cannot describe a named style
    """
    if value is None or isinstance(value, (str, NamedStyle)):
        return value
    if not isinstance(value, Mapping):
        raise MalformedTree(f"Style must be a name or a mapping, got {type(value).__name__}")
    if not value.get('name'):
        raise MalformedTree("Style mapping needs a 'name'")

    options = dict(value)
    try:
        for part, cls in STYLE_PARTS.items():
            if part in options:
                options[part] = cls(**options[part])
        if 'border' in options:
            options['border'] = Border(**{
                side: Side(**spec) if side in BORDER_SIDES else spec
                for side, spec in options['border'].items()
            })
        return NamedStyle(**options)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedTree(f"Invalid style '{value.get('name')}': {e}") from e


def to_validation(value):
    """
    Normalize a column validation.

    Args:
        value: None, a DataValidation, or a mapping of DataValidation
               keyword arguments (type, formula1, allow_blank, ...)

    Returns:
        None or DataValidation

    Raises:
        MalformedTree: If the value cannot describe a data validation
    """
    if value is None or isinstance(value, DataValidation):
        return value
    if not isinstance(value, Mapping):
        raise MalformedTree(
            f"Validation must be a mapping of DataValidation options, got {type(value).__name__}"
        )

    try:
        return DataValidation(**value)
    except (TypeError, ValueError) as e:
        raise MalformedTree(f"Invalid validation {dict(value)!r}: {e}") from e
