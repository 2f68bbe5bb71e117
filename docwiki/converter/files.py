"""Uploaded file sources consumed by the conversion pipeline."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceFile(Protocol):
    """A named upload whose size is known before its content is read."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    async def read(self) -> bytes: ...


class LocalFile:
    """A file on disk, read in a worker thread."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r})"


class InMemoryFile:
    def __init__(self, name: str, data: bytes) -> None:
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return len(self._data)

    async def read(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"InMemoryFile({self._name!r}, {len(self._data)} bytes)"
