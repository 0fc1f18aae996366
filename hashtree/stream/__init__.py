"""
Stream input for the hash tree.
"""
from .chunker import (
    Readable,
    StreamLike,
    as_stream,
    iter_blocks,
    validate_block_size,
)

__all__ = [
    "Readable",
    "StreamLike",
    "as_stream",
    "iter_blocks",
    "validate_block_size",
]
