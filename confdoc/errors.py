from __future__ import annotations


class ConfdocError(Exception):
    """Base class for every error raised by confdoc."""


class StoreIOError(ConfdocError):
    """Directory creation, open, read, truncate, seek or write failed."""


class CodecError(ConfdocError):
    pass


class ParseError(CodecError):
    """File content is not valid JSON, or its root is not an object."""


class SerializeError(CodecError):
    """A value could not be converted into a JSON tree value."""


class DeserializeError(CodecError):
    """A stored tree value could not be converted into the requested type."""


class ConfigError(ConfdocError):
    """Logical misuse of a document or section."""


class KeyNotFoundError(ConfigError):
    def __init__(self, key: str, path: tuple[str, ...] = ()):
        self.key = key
        self.path = path
        super().__init__(f"Key not found: {_dotted(path, key)}")


class WrongTypeError(ConfigError):
    def __init__(self, key: str, path: tuple[str, ...] = ()):
        self.key = key
        self.path = path
        super().__init__(f"Key's value is not a json object: {_dotted(path, key)}")


class HomeDirectoryError(ConfigError):
    pass


class BorrowError(ConfigError):
    """A view tried to touch a region that another live view holds."""


class ClosedDocumentError(ConfigError):
    pass


def _dotted(path: tuple[str, ...], key: str) -> str:
    return ".".join((*path, key))
