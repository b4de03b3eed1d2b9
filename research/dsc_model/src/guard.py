"""Reentrancy guard"""
from types import TracebackType
from typing import Optional, Type

from .errors import ReentrantCallError


class ReentrancyGuard:
    """Per-engine flag marking a guarded operation in progress.

    Used as a context manager. Entering while the flag is set raises
    ReentrantCallError without touching the flag, so only the outermost
    call releases it.
    """

    def __init__(self) -> None:
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    def __enter__(self) -> "ReentrancyGuard":
        if self._entered:
            raise ReentrantCallError("Reentrant call into a guarded operation")
        self._entered = True
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        self._entered = False
        return False
