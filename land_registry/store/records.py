"""In-memory keyed record store with all-or-nothing transactions."""

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from land_registry.models.registry.enums import CounterName, DataKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreKey:
    """Typed store address: record kind plus its identifying parts."""

    kind: DataKey
    ident: tuple = ()

    @classmethod
    def of(cls, kind: DataKey, *ident: Any) -> "StoreKey":
        """Build a key from a kind and any number of id parts."""
        return cls(kind=kind, ident=tuple(ident))

    @classmethod
    def counter(cls, name: CounterName) -> "StoreKey":
        """Key of a global counter."""
        return cls(kind=DataKey.COUNTER, ident=(name,))


@dataclass
class RecordStore:
    """Keyed record store used as the single source of truth.

    Values are deep-copied on the way in and out, so callers only ever hold
    working copies. Writes made inside ``transaction()`` are staged and land
    in the store only when the block exits normally; an exception discards
    them, leaving every record exactly as it was.
    """

    _records: dict[StoreKey, Any] = field(default_factory=dict)
    _staged: dict[StoreKey, Any] | None = None
    _depth: int = 0

    def has(self, key: StoreKey) -> bool:
        """Return True if a value exists at ``key``."""
        if self._staged is not None and key in self._staged:
            return True
        return key in self._records

    def get(self, key: StoreKey, default: Any = None) -> Any:
        """Return a copy of the value at ``key``, or ``default``."""
        if self._staged is not None and key in self._staged:
            return copy.deepcopy(self._staged[key])
        if key in self._records:
            return copy.deepcopy(self._records[key])
        return default

    def set(self, key: StoreKey, value: Any) -> None:
        """Write ``value`` at ``key``, creating it on first write."""
        target = self._staged if self._staged is not None else self._records
        target[key] = copy.deepcopy(value)

    def append(self, key: StoreKey, item: Any) -> list:
        """Append ``item`` to the list at ``key`` and return the new list."""
        items = self.get(key, [])
        items.append(item)
        self.set(key, items)
        return items

    def counter(self, name: CounterName) -> int:
        """Current value of a global counter (0 if never incremented)."""
        return self.get(StoreKey.counter(name), 0)

    def next_id(self, name: CounterName) -> int:
        """Increment a counter and return its new value.

        The read, increment and write happen in one call, so ids handed out
        by a counter are unique and start at 1.
        """
        key = StoreKey.counter(name)
        value = self.get(key, 0) + 1
        self.set(key, value)
        return value

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """Stage writes and commit them only if the block succeeds.

        Nested transactions join the outermost one.
        """
        if self._staged is not None:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._staged = {}
        self._depth = 1
        try:
            yield self
        except BaseException:
            logger.debug("Discarding %d staged writes", len(self._staged))
            raise
        else:
            self._records.update(self._staged)
            logger.debug("Committed %d writes", len(self._staged))
        finally:
            self._staged = None
            self._depth = 0

    def keys(self, kind: DataKey) -> list[StoreKey]:
        """All committed and staged keys of a given kind."""
        found = {key for key in self._records if key.kind == kind}
        if self._staged is not None:
            found.update(key for key in self._staged if key.kind == kind)
        return sorted(found, key=lambda k: k.ident)

    def __len__(self) -> int:
        return len(self._records)
