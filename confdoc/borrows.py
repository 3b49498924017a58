from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from .errors import BorrowError, ClosedDocumentError

logger = logging.getLogger(__name__)

KeyPath = tuple[str, ...]


@dataclass(frozen=True)
class Borrow:
    token: int
    path: KeyPath
    exclusive: bool


def overlaps(a: KeyPath, b: KeyPath) -> bool:
    n = min(len(a), len(b))
    return a[:n] == b[:n]


class BorrowRegistry:
    """
    Tracks the sections that are currently alive over one document tree.

    A view may touch a region unless some live borrow outside its own lineage
    overlaps that region and either the borrow is exclusive or the access is
    a write. Shared borrows therefore coexist; an exclusive one excludes
    everything else on the same or an enclosing/enclosed path.
    """

    def __init__(self) -> None:
        self._tokens = itertools.count(1)
        self._live: dict[int, Borrow] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def live(self) -> list[Borrow]:
        return list(self._live.values())

    def check(self, region: KeyPath, *, write: bool, lineage: frozenset[int] = frozenset()) -> None:
        if self._closed:
            raise ClosedDocumentError("document has been closed")
        for b in self._live.values():
            if b.token in lineage or not overlaps(b.path, region):
                continue
            if b.exclusive or write:
                kind = "mutable" if b.exclusive else "read-only"
                raise BorrowError(
                    f"{'/'.join(region) or '<root>'} is held by a live {kind} section at "
                    f"{'/'.join(b.path) or '<root>'}"
                )

    def acquire(self, path: KeyPath, *, exclusive: bool, lineage: frozenset[int] = frozenset()) -> Borrow:
        self.check(path, write=exclusive, lineage=lineage)
        borrow = Borrow(token=next(self._tokens), path=path, exclusive=exclusive)
        self._live[borrow.token] = borrow
        logger.debug("SECTION BORROW: token=%s path=%s exclusive=%s", borrow.token, path, exclusive)
        return borrow

    def release(self, token: int) -> None:
        if self._live.pop(token, None) is not None:
            logger.debug("SECTION RELEASE: token=%s", token)

    def close(self) -> None:
        self._closed = True
        self._live.clear()
