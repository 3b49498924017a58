from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Mapping, TextIO

from . import codec
from .borrows import BorrowRegistry
from .codec import Value
from .errors import ParseError, SerializeError, StoreIOError
from .json_store import dumps_pretty, loads_object
from .paths import ensure_dir, under_home
from .settings import Settings, get_settings
from .views import MutableTreeView

logger = logging.getLogger(__name__)


class Document(MutableTreeView):
    """
    An open JSON config file plus the object tree parsed from it.

    - Reads/writes go to the in-memory tree; nothing reaches the file until save().
    - save() rewrites the whole file from the tree.
    - close() (or leaving a ``with`` block) releases the file without saving.

    Use Document.open() or Document.open_under_home() to get an instance.
    """

    def __init__(self, file: TextIO, data: dict[str, Value], *, path: Path, settings: Settings):
        super().__init__(data, registry=BorrowRegistry())
        self._file = file
        self._path = path
        self._settings = settings

    # -- Opening ---------------------------------------------------------

    @classmethod
    def open(
        cls,
        base_directory: str | os.PathLike[str],
        file_name: str,
        *,
        settings: Settings | None = None,
    ) -> "Document":
        """Open or create *file_name* inside *base_directory*.

        Missing directories are created. An empty file starts as ``{}``.
        """
        settings = settings or get_settings()
        base = Path(base_directory)
        path = base / file_name
        try:
            ensure_dir(base)
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
        except OSError as e:
            raise StoreIOError(f"cannot open config file {path}: {e}") from e

        try:
            fh = open(fd, "r+", encoding=settings.encoding, newline="")
        except LookupError as e:
            raise StoreIOError(f"cannot open config file {path}: unknown encoding {settings.encoding!r}") from e
        try:
            data = _read_tree(fh, path)
        except BaseException:
            fh.close()
            raise

        logger.debug("DOCUMENT OPEN: %s (%d top-level keys)", path, len(data))
        return cls(fh, data, path=path.resolve(), settings=settings)

    @classmethod
    def open_under_home(
        cls,
        relative_path: str | os.PathLike[str],
        file_name: str,
        *,
        settings: Settings | None = None,
    ) -> "Document":
        """Like open(), with *relative_path* taken relative to the user's home directory."""
        return cls.open(under_home(relative_path), file_name, settings=settings)

    # -- File ------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._registry.closed

    def save(self) -> str:
        """Write the whole tree to the file, replacing its contents; returns the text written."""
        self._guard(self._key_path, write=False)
        text = dumps_pretty(self._data, indent=self._settings.indent)
        try:
            text.encode(self._settings.encoding)
        except UnicodeEncodeError as e:
            raise SerializeError(f"tree cannot be written as {self._settings.encoding}: {e}") from e
        try:
            self._file.truncate(0)
            self._file.seek(0)
            self._file.write(text)
            self._file.flush()
        except OSError as e:
            raise StoreIOError(f"cannot write config file {self._path}: {e}") from e
        logger.debug("DOCUMENT SAVE: wrote %d chars to %s", len(text), self._path)
        return text

    def close(self) -> None:
        if self._registry.closed:
            return
        self._registry.close()
        self._file.close()
        logger.debug("DOCUMENT CLOSE: %s", self._path)

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Document(path={str(self._path)!r})"

    # -- Whole tree ------------------------------------------------------

    def replace_all(self, new_tree: Mapping[str, Any]) -> None:
        """Swap in a copy of *new_tree* as the root; the file is untouched until save()."""
        self._guard(self._key_path, write=True)
        self._data = codec.to_object(new_tree)

    def snapshot(self) -> dict[str, Value]:
        """Independent deep copy of the root tree."""
        self._guard(self._key_path, write=False)
        return copy.deepcopy(self._data)


def _read_tree(fh: TextIO, path: Path) -> dict[str, Value]:
    try:
        raw = fh.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"config file {path} is not valid text: {e}") from e
    except OSError as e:
        raise StoreIOError(f"cannot read config file {path}: {e}") from e
    try:
        return loads_object(raw)
    except ParseError as e:
        logger.warning("DOCUMENT OPEN: failed to parse %s: %r", path, e)
        raise
