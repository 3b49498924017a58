"""
Key-addressed views over one object region of a document tree.

The document root and every nested section go through the same accessors.
Sections hold a direct reference to their sub-dict, so writes through a
MutableSection are visible through the document (and the other way round)
without any copying. The BorrowRegistry shared by all views of a document
keeps a mutable section from coexisting with another live view of the same
region.
"""

from __future__ import annotations

import copy
import logging
import weakref
from typing import Any, Callable, Mapping, TypeVar

from . import codec
from .borrows import Borrow, BorrowRegistry, KeyPath
from .codec import Value
from .errors import BorrowError, KeyNotFoundError, WrongTypeError

logger = logging.getLogger(__name__)

V = TypeVar("V")
Out = TypeVar("Out")


def _check_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"key must be a str, got {type(key).__name__}")
    return key


class TreeView:
    """Read-only access to one JSON object inside a document."""

    def __init__(
        self,
        data: dict[str, Value],
        *,
        registry: BorrowRegistry,
        key_path: KeyPath = (),
        lineage: frozenset[int] = frozenset(),
    ):
        self._data = data
        self._registry = registry
        self._key_path = key_path
        self._lineage = lineage

    @property
    def key_path(self) -> KeyPath:
        """Keys leading from the document root to this view (``()`` for the root)."""
        return self._key_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key_path={self._key_path!r})"

    # -- Borrow checks ---------------------------------------------------

    def _guard(self, region: KeyPath, *, write: bool) -> None:
        self._registry.check(region, write=write, lineage=self._lineage)

    def _key_region(self, key: str) -> KeyPath:
        return (*self._key_path, _check_key(key))

    def _object_at(self, key: str, *, write: bool) -> dict[str, Value]:
        self._guard(self._key_region(key), write=write)
        if key not in self._data:
            raise KeyNotFoundError(key, self._key_path)
        target = self._data[key]
        if not isinstance(target, dict):
            raise WrongTypeError(key, self._key_path)
        return target

    # -- Reads -----------------------------------------------------------

    def read_value(self, key: str, type_: Any = Any) -> Any:
        """Return the value at *key* validated into *type_*.

        The stored value is deep-copied first, so the result never aliases
        the document.
        """
        self._guard(self._key_region(key), write=False)
        if key not in self._data:
            raise KeyNotFoundError(key, self._key_path)
        return codec.from_value(copy.deepcopy(self._data[key]), type_)

    def get_section(self, key: str) -> Section:
        target = self._object_at(key, write=False)
        borrow = self._registry.acquire(self._key_region(key), exclusive=False, lineage=self._lineage)
        return Section(target, registry=self._registry, borrow=borrow, lineage=self._lineage)

    def clone_data(self) -> dict[str, Value]:
        """Independent deep copy of this view's object."""
        self._guard(self._key_path, write=False)
        return copy.deepcopy(self._data)

    def keys(self) -> list[str]:
        self._guard(self._key_path, write=False)
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        self._guard(self._key_region(key), write=False)
        return key in self._data

    def __len__(self) -> int:
        self._guard(self._key_path, write=False)
        return len(self._data)


class MutableTreeView(TreeView):
    """Read-write access to one JSON object inside a document."""

    def write_value(self, key: str, value: Any) -> None:
        """Insert *key* at the end, or overwrite it in place if it already exists."""
        region = self._key_region(key)
        self._guard(region, write=True)
        jvalue = codec.to_value(value)
        existed = key in self._data
        self._data[key] = jvalue
        logger.debug("VALUE %s: %s", "OVERWRITE" if existed else "INSERT", "/".join(region))

    def read_or_insert(self, key: str, default: V, type_: Any = None) -> V:
        """
        Get-or-initialize.

        - absent key: store *default* and return it as given
        - present key: return the stored value validated into *type_*
          (``type(default)`` when omitted); *default* is discarded
        """
        region = self._key_region(key)
        self._guard(region, write=True)
        if key not in self._data:
            self._data[key] = codec.to_value(default)
            logger.debug("VALUE INSERT: %s", "/".join(region))
            return default
        target_type = type(default) if type_ is None else type_
        return codec.from_value(copy.deepcopy(self._data[key]), target_type)

    def update_value(self, key: str, updater: Callable[[Any], Out], type_: Any = Any) -> Out:
        """
        Replace the value at *key* with ``updater(current)`` and return the result.

        *current* is validated into *type_*; the updater may return a value of a
        different type. Nothing is written unless the updater returns and its
        output serializes.
        """
        region = self._key_region(key)
        self._guard(region, write=True)
        if key not in self._data:
            raise KeyNotFoundError(key, self._key_path)
        current = codec.from_value(copy.deepcopy(self._data[key]), type_)
        out = updater(current)
        self._data[key] = codec.to_value(out)
        logger.debug("VALUE UPDATE: %s", "/".join(region))
        return out

    def get_section_mut(self, key: str) -> MutableSection:
        target = self._object_at(key, write=True)
        borrow = self._registry.acquire(self._key_region(key), exclusive=True, lineage=self._lineage)
        return MutableSection(target, registry=self._registry, borrow=borrow, lineage=self._lineage)

    def copy_from(self, new_object: Mapping[str, Any]) -> None:
        """Clear this object and re-insert every pair of *new_object*, in order.

        The dict itself is kept, so ancestors keep seeing it.
        """
        self._guard(self._key_path, write=True)
        fresh = codec.to_object(new_object)
        self._data.clear()
        for k, v in fresh.items():
            self._data[k] = v


class _BorrowedView(TreeView):
    """A view that holds a borrow until released, closed or collected."""

    def __init__(
        self,
        data: dict[str, Value],
        *,
        registry: BorrowRegistry,
        borrow: Borrow,
        lineage: frozenset[int] = frozenset(),
    ):
        super().__init__(data, registry=registry, key_path=borrow.path, lineage=lineage | {borrow.token})
        self._borrow = borrow
        self._finalizer = weakref.finalize(self, registry.release, borrow.token)

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        self._finalizer()

    def _guard(self, region: KeyPath, *, write: bool) -> None:
        if self.released:
            raise BorrowError(f"section {'/'.join(self._key_path)} has been released")
        super()._guard(region, write=write)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class Section(_BorrowedView):
    """Read-only view over a nested object (shared borrow)."""


class MutableSection(_BorrowedView, MutableTreeView):
    """Read-write view over a nested object (exclusive borrow)."""
