# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 16:25:48
# @Author : iniscan maintainers

"""
Basically INI structure: section -> key -> value, all plain strings,
shared between threads behind a reader/writer lock.

For reading and writing text, just see `ini.parser`.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Condition, Lock

from .consts import DEFAULT_SECTION

type IniSections = dict[str, dict[str, str]]


class RWLock:
    """Many readers or one writer.

    A waiting writer holds off new readers, so a steady stream of
    `get()` calls can't starve `set()`.
    """

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    def acquire_read(self) -> None:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            while self._writing or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writing = True

    def release_write(self) -> None:
        with self._cond:
            self._writing = False
            self._cond.notify_all()

    @contextmanager
    def reading(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writing(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class IniStore:
    """INI document. Pairs before any `[section]` live in section `''`.

    There is no deletion, and no transaction over several calls:
    `get()` then `set()` is two separate locked steps.
    """

    def __init__(self) -> None:
        self.__data: IniSections = {DEFAULT_SECTION: {}}
        self.__lock = RWLock()

    def get(self, section: str, key: str) -> str:
        """Value of `key` in `section`, or '' if either is missing.

        Use `has()` to tell a missing key from an empty value.
        """
        with self.__lock.reading():
            return self.__data.get(section, {}).get(key, '')

    def has(self, section: str, key: str) -> bool:
        with self.__lock.reading():
            return section in self.__data and key in self.__data[section]

    def set(self, section: str, key: str, value: str) -> None:
        with self.__lock.writing():
            self.__data.setdefault(section, {})[key] = value

    def sections(self) -> list[str]:
        """Section names in insertion order, `''` always first."""
        with self.__lock.reading():
            return list(self.__data)

    def to_dict(self) -> IniSections:
        with self.__lock.reading():
            return {k: v.copy() for k, v in self.__data.items()}

    def __len__(self) -> int:
        with self.__lock.reading():
            return sum(1 for pairs in self.__data.values() if pairs)

    def __repr__(self) -> str:
        with self.__lock.reading():
            return '<IniStore { .sections = %d, .pairs = %d }>' % (
                len(self.__data),
                sum(len(i) for i in self.__data.values()))

    @contextmanager
    def _locked(self, exclusive: bool = False) -> Iterator[IniSections]:
        """for IniParser reading (exclusive) and writing (shared).

        Yields the raw sections dict; it must not escape the block.
        """
        with (self.__lock.writing() if exclusive else self.__lock.reading()):
            yield self.__data
