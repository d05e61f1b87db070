"""Key-value store contract used for local persistence."""

from __future__ import annotations

import abc
from typing import Protocol


class AbstractKeyValueStore(Protocol):
    """Byte blobs addressed by string keys, last writer wins."""

    @abc.abstractmethod
    def get(self, key: str) -> bytes | None: ...

    @abc.abstractmethod
    def set(self, key: str, value: bytes) -> None: ...

    @abc.abstractmethod
    def delete(self, key: str) -> None: ...
