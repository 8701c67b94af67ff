from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol


class TransactionScope(Protocol):
    """
    Unit-of-work boundary provided by the record store.

    Everything executed inside `atomic()` commits together or not at all, and runs
    serialized against other writers so a read-check-write sequence cannot interleave.
    """

    def atomic(self) -> AbstractContextManager[None]:
        raise NotImplementedError
