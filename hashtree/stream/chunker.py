"""
Module 03 - Block Chunker
Split a readable byte stream into fixed-size blocks.

Contract:
- Blocks are yielded in stream order, each at most block_size bytes
- Only the final block may be shorter than block_size
- An empty stream yields no blocks
- A zero-length read signals end of input; short reads in between
  are topped up until the block is full
- block_size is validated before the first read
- Read failures (OSError, or ValueError from a closed file) surface as
  StreamReadException, with the original error chained
- A read returning more bytes than requested is a StreamReadException
"""
from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterator, Protocol, Union, runtime_checkable

from hashtree.schemas.errors import ConfigurationException, StreamReadException


logger = logging.getLogger(__name__)


@runtime_checkable
class Readable(Protocol):
    """Anything with a read(n) method returning bytes."""

    def read(self, size: int = -1) -> bytes:
        ...


StreamLike = Union[Readable, BinaryIO, bytes, bytearray, memoryview]


def validate_block_size(block_size: object) -> int:
    """
    Validate a block size.

    Args:
        block_size: Candidate block size

    Returns:
        The block size as an int

    Raises:
        ConfigurationException: If block_size is not a positive integer
    """
    # bool is an int subclass
    if isinstance(block_size, bool) or not isinstance(block_size, int):
        raise ConfigurationException(
            f"block_size must be a positive integer, got {type(block_size).__name__}",
            field_name="block_size",
            details={"block_size": repr(block_size)},
        )
    if block_size <= 0:
        raise ConfigurationException(
            f"block_size must be a positive integer, got {block_size}",
            field_name="block_size",
            details={"block_size": block_size},
        )
    return block_size


def as_stream(source: StreamLike) -> Readable:
    """Wrap in-memory buffers in a BytesIO; pass readable objects through."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if isinstance(source, Readable):
        return source
    raise TypeError(f"Expected a readable byte stream or bytes, got {type(source).__name__}")


def iter_blocks(stream: StreamLike, block_size: int) -> Iterator[bytes]:
    """
    Yield consecutive blocks of at most ``block_size`` bytes.

    Validation happens when this function is called, not when the
    returned iterator is first advanced.

    Args:
        stream: Readable byte source, or an in-memory bytes-like value
        block_size: Maximum block length in bytes (> 0)

    Returns:
        Iterator over block contents

    Raises:
        ConfigurationException: If block_size is invalid
        StreamReadException: (while iterating) if a read fails
    """
    block_size = validate_block_size(block_size)
    reader = as_stream(stream)
    return _generate_blocks(reader, block_size)


def _generate_blocks(reader: Readable, block_size: int) -> Iterator[bytes]:
    block_index = 0
    total = 0

    while True:
        block = _read_block(reader, block_size, block_index, total)
        if not block:
            break

        logger.debug(f"read block {block_index} ({len(block)} bytes)")
        yield block

        total += len(block)
        block_index += 1
        if len(block) < block_size:
            # A short block is only returned once end of input was seen
            break

    logger.debug(f"read {block_index} blocks ({total} bytes) from stream")


def _read_block(reader: Readable, block_size: int, block_index: int, total: int) -> bytes:
    """Read until block_size bytes are buffered or a zero-length read occurs."""
    buf = bytearray()
    while len(buf) < block_size:
        requested = block_size - len(buf)
        try:
            chunk = reader.read(requested)
        except (OSError, ValueError) as e:
            # ValueError covers reads on closed or detached file objects
            raise StreamReadException(
                f"Failed to read block {block_index}: {e}",
                block_index=block_index,
                bytes_read=total + len(buf),
            ) from e

        if chunk is None:
            # Non-blocking raw streams return None when no data is ready
            raise StreamReadException(
                f"Stream returned no data for block {block_index} (non-blocking stream?)",
                block_index=block_index,
                bytes_read=total + len(buf),
            )
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise StreamReadException(
                f"Stream read returned {type(chunk).__name__}, expected bytes "
                f"(was the stream opened in text mode?)",
                block_index=block_index,
                bytes_read=total + len(buf),
            )
        if len(chunk) == 0:
            break
        if len(chunk) > requested:
            raise StreamReadException(
                f"Stream returned {len(chunk)} bytes for block {block_index}, "
                f"requested {requested}",
                block_index=block_index,
                bytes_read=total + len(buf),
            )
        buf += chunk

    return bytes(buf)


__all__ = [
    "Readable",
    "StreamLike",
    "validate_block_size",
    "as_stream",
    "iter_blocks",
]
