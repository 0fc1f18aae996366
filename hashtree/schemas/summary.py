"""
Module 01 - Schemas & Errors
File: summary.py

Purpose: Read-only summary of a built tree.

This is not a persistence format. It gives callers a validated,
JSON-serializable view of the root digest and the tree's counters
to embed in whatever envelope they define.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TreeSummary(BaseModel):
    """Root digest and counters of a built HashTree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root_hash: Optional[str] = Field(
        default=None,
        description="Hex-encoded root digest (no 0x prefix), None for an empty tree",
    )
    algorithm: str = Field(..., description="Hash algorithm name")
    block_size: int = Field(..., gt=0, description="Block size in bytes")
    num_blocks: int = Field(..., ge=0, description="Number of real data blocks")
    num_nodes: int = Field(..., ge=0, description="Number of arena entries")
    depth: int = Field(..., ge=0, description="Levels from leaf to root, inclusive")

    @field_validator("root_hash")
    @classmethod
    def _check_hex(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            bytes.fromhex(v)
        except ValueError as e:
            raise ValueError(f"root_hash must be a hex string: {e}") from e
        return v.lower()

    @property
    def is_empty(self) -> bool:
        return self.num_blocks == 0
