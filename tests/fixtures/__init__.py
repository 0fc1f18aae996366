"""
Test fixtures package for hashtree tests.

- streams.py: stream and hash strategy test doubles

Usage:
    from fixtures import TrickleStream, FailingStream
"""

from .streams import (
    CountingStrategy,
    FailingStream,
    OverreadingStream,
    TextStream,
    TrickleStream,
)

__all__ = [
    "CountingStrategy",
    "FailingStream",
    "OverreadingStream",
    "TextStream",
    "TrickleStream",
]
