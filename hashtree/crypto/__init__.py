"""
Hashing strategies for the hash tree.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    HashAlgorithm,
    HashlibStrategy,
    HashStrategy,
    StrategyLike,
    combine,
    get_strategy,
    resolve_algorithm,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "HashAlgorithm",
    "HashlibStrategy",
    "HashStrategy",
    "StrategyLike",
    "combine",
    "get_strategy",
    "resolve_algorithm",
]
