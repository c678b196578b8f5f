"""
Default values shared by the template writer and the row reader.

The sheet title, the property separator and the last validation row can
also be passed to the functions that use them as keyword arguments.
"""

# Worksheet defaults
DEFAULT_SHEET_TITLE = "Sheet1"

# Label used for padding nodes inserted between a top-level header and its leaf
PLACEHOLDER_KEY = ""

# Property paths like 'address.city' are split on this separator when reading
PROPERTY_SEPARATOR = "."

# Data validations are applied from the first data row down to this row
VALIDATION_LAST_ROW = 9999
