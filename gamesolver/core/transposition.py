"""Score bounds and the transposition tables that memoise them.

The solver never stores exact values, only proven bounds:

- UpperBound(v): the true score of the position is at most ``v``.
- LowerBound(v): the true score of the position is at least ``v``.

Any bound proven for a position stays valid forever, whichever search window
produced it, so tables can be reused across ``solve`` calls and shared between
threads without changing results.

Tables provided here:

- DictTable: plain dict, unbounded, not synchronised. Default for sequential
  solving.
- LRUTable: bounded, evicts the least recently used entry.
- ConcurrentTable: lock-per-shard store for the parallel move evaluator.
  A ``hasher`` callable picks the shard; the default is the built-in ``hash``.

Usage (example):

    from gamesolver.core.transposition import DictTable, UpperBound

    table = DictTable()
    table.insert(position, UpperBound(3))
    bound = table.get(position)   # UpperBound(3) or None
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Union

from gamesolver.config import TableConfig


@dataclass(frozen=True)
class UpperBound:
    value: int


@dataclass(frozen=True)
class LowerBound:
    value: int


Bound = Union[UpperBound, LowerBound]

Hasher = Callable[[Hashable], int]


class TranspositionTable(ABC):
    """Keyed store of proven bounds. A miss means no bound is known."""

    @abstractmethod
    def get(self, game) -> Optional[Bound]: ...

    @abstractmethod
    def insert(self, game, bound: Bound) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...


class DictTable(TranspositionTable):
    def __init__(self):
        self._table: Dict[Hashable, Bound] = {}

    def get(self, game) -> Optional[Bound]:
        return self._table.get(game)

    def insert(self, game, bound: Bound) -> None:
        self._table[game] = bound

    def clear(self) -> None:
        self._table.clear()

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, game) -> bool:
        return game in self._table


class LRUTable(TranspositionTable):
    """Bounded table with least-recently-used eviction."""

    def __init__(self, max_entries: int = 1_000_000):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._table: "OrderedDict[Hashable, Bound]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, game) -> Optional[Bound]:
        bound = self._table.get(game)
        if bound is None:
            self.misses += 1
            return None
        self._table.move_to_end(game)
        self.hits += 1
        return bound

    def insert(self, game, bound: Bound) -> None:
        if game in self._table:
            self._table.move_to_end(game)
        elif len(self._table) >= self.max_entries:
            self._table.popitem(last=False)
            self.evictions += 1
        self._table[game] = bound

    def clear(self) -> None:
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, game) -> bool:
        return game in self._table

    def stats(self) -> dict:
        lookups = self.hits + self.misses
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hits / lookups if lookups else 0.0,
        }


class _Shard:
    __slots__ = ("table", "lock")

    def __init__(self):
        self.table: Dict[Hashable, Bound] = {}
        self.lock = threading.Lock()


class ConcurrentTable(TranspositionTable):
    """Thread-safe table split into independently locked shards.

    Concurrent inserts for the same position simply overwrite each other;
    every stored bound is sound, so whichever lands last is fine.
    """

    def __init__(self, shards: int = 16, hasher: Optional[Hasher] = None):
        if shards < 1:
            raise ValueError("shards must be positive")
        self.hasher: Hasher = hasher or hash
        self._shards: List[_Shard] = [_Shard() for _ in range(shards)]

    def _shard(self, game) -> _Shard:
        return self._shards[self.hasher(game) % len(self._shards)]

    def get(self, game) -> Optional[Bound]:
        shard = self._shard(game)
        with shard.lock:
            return shard.table.get(game)

    def insert(self, game, bound: Bound) -> None:
        shard = self._shard(game)
        with shard.lock:
            shard.table[game] = bound

    def clear(self) -> None:
        for shard in self._shards:
            with shard.lock:
                shard.table.clear()

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.table)
        return total

    def __contains__(self, game) -> bool:
        shard = self._shard(game)
        with shard.lock:
            return game in shard.table

    @property
    def shard_count(self) -> int:
        return len(self._shards)

    def shard_sizes(self) -> List[int]:
        sizes = []
        for shard in self._shards:
            with shard.lock:
                sizes.append(len(shard.table))
        return sizes


def make_table(config: Optional[TableConfig] = None) -> TranspositionTable:
    """Sequential table described by ``config`` (unbounded dict by default)."""
    config = config or TableConfig()
    if config.max_entries:
        return LRUTable(config.max_entries)
    return DictTable()


def make_concurrent_table(
    config: Optional[TableConfig] = None, hasher: Optional[Hasher] = None
) -> ConcurrentTable:
    config = config or TableConfig()
    return ConcurrentTable(shards=config.shards, hasher=hasher)
