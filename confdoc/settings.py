from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw.strip())


@dataclass(frozen=True)
class Settings:
    # Pretty-printing width used by Document.save()
    indent: int = 2

    # Text encoding of the backing file
    encoding: str = "utf-8"


def get_settings() -> Settings:
    indent = _env_int("CONFDOC_INDENT", 2)
    encoding = (os.getenv("CONFDOC_ENCODING", "utf-8")).strip() or "utf-8"

    return Settings(
        indent=indent,
        encoding=encoding,
    )
