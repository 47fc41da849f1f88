"""Application ports (interfaces). Implemented by infrastructure adapters."""

import uuid
from collections.abc import Callable
from typing import Protocol

IdFactory = Callable[[], str]


def new_id() -> str:
    """Default id source: random UUID4 string."""
    return str(uuid.uuid4())


class BlobStorage(Protocol):
    """Key-value store of opaque text blobs. The whole app state lives under one key."""

    def get(self, key: str) -> str | None:
        """Return the blob stored under key, or None if nothing was stored."""
        ...

    def put(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous blob."""
        ...
