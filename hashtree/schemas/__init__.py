"""
Module 01 - Schemas & Errors
File: __init__.py

Purpose: Export the error taxonomy and the tree summary model.
"""

from .errors import (
    ConfigurationException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    StreamReadException,
)
from .summary import TreeSummary

__all__ = [
    # Errors
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "ConfigurationException",
    "StreamReadException",
    # Summary
    "TreeSummary",
]
