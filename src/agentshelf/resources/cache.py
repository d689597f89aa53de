"""Two-state cache held by each resource index."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Unloaded:
    """Nothing scanned yet, or the cache was cleared."""

    loaded_at: float = 0.0


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """A complete snapshot from one scan.

    The entries list is handed to callers as-is and must not be mutated.
    """

    entries: list[T]
    loaded_at: float


CacheState = Union[Unloaded, Loaded[T]]
