from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from itemdb.schemas import Item

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Database is empty."
HEADER = "Database Contents:\n------------------\n"


class StoreError(Exception):
    """Base class for errors surfaced to clients."""


class InvalidInput(StoreError):
    pass


class AlreadyExists(StoreError):
    def __init__(self, message: str = "item already exists"):
        super().__init__(message)


class NotFound(StoreError):
    def __init__(self, message: str = "item not found"):
        super().__init__(message)


class ReadWriteLock:
    """
    Reader/writer lock for threads.

    Any number of readers may hold the lock together; a writer holds it alone.
    Once a writer is waiting, new readers queue behind it.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ItemStore:
    def __init__(self):
        self._items: dict[str, Item] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._items)

    def snapshot(self) -> list[Item]:
        with self._lock.read_locked():
            return [item.model_copy() for item in self._items.values()]

    def create(self, name: str, price: float) -> None:
        with self._lock.write_locked():
            if name in self._items:
                raise AlreadyExists()
            self._items[name] = Item(name=name, price=price)
        logger.debug("created item %r price=%s", name, price)

    def read(self, name: str) -> Item:
        with self._lock.read_locked():
            item = self._items.get(name)
            if item is None:
                raise NotFound()
            return item.model_copy()

    def update(self, name: str, price: float) -> None:
        with self._lock.write_locked():
            if name not in self._items:
                raise NotFound()
            self._items[name] = Item(name=name, price=price)
        logger.debug("updated item %r price=%s", name, price)

    def delete(self, name: str) -> None:
        with self._lock.write_locked():
            if self._items.pop(name, None) is None:
                raise NotFound()
        logger.debug("deleted item %r", name)

    def visualize(self) -> str:
        """Render every entry as `Item: <name>, Price: $<price>` lines."""
        with self._lock.read_locked():
            if not self._items:
                return EMPTY_MESSAGE
            lines = [
                f"Item: {name}, Price: ${item.price:.2f}\n"
                for name, item in self._items.items()
            ]
        return HEADER + "".join(lines)
