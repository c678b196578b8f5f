"""Custom exceptions for header_tree."""


class HeaderTreeError(Exception):
    """Base exception for all header_tree errors."""

    pass


class InvalidShape(HeaderTreeError, ValueError):
    """Raised when a label matrix is empty or its rows have unequal length."""

    pass


class MalformedTree(HeaderTreeError, ValueError):
    """Raised when a column tree or its derived chains cannot be laid out."""

    pass
