"""confdoc: typed key and section access to a JSON config file."""

from __future__ import annotations

from .codec import Value
from .document import Document
from .errors import (
    BorrowError,
    ClosedDocumentError,
    CodecError,
    ConfdocError,
    ConfigError,
    DeserializeError,
    HomeDirectoryError,
    KeyNotFoundError,
    ParseError,
    SerializeError,
    StoreIOError,
    WrongTypeError,
)
from .settings import Settings, get_settings
from .views import MutableSection, MutableTreeView, Section, TreeView

__all__ = [
    "Document",
    "TreeView",
    "MutableTreeView",
    "Section",
    "MutableSection",
    "Value",
    "Settings",
    "get_settings",
    "ConfdocError",
    "StoreIOError",
    "CodecError",
    "ParseError",
    "SerializeError",
    "DeserializeError",
    "ConfigError",
    "KeyNotFoundError",
    "WrongTypeError",
    "HomeDirectoryError",
    "BorrowError",
    "ClosedDocumentError",
]
