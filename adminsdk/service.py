"""Base for services that share a database, logger and cache with a handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CombinedError(Exception):
    """Two errors reported as one, the later one wrapped."""

    def __init__(self, previous: BaseException, error: BaseException) -> None:
        super().__init__(f"{previous}; {error}")
        self.previous = previous
        self.error = error
        self.__cause__ = error


@dataclass
class Service:
    """State a service works with, plus the errors it has gathered."""

    orm: Any = None
    msg: str = ""
    msg_id: str = ""
    log: Any = None
    error: BaseException | None = None
    cache: Any = None

    def add_error(self, err: BaseException | None) -> BaseException | None:
        """Record err alongside earlier errors and return the combined error."""
        if self.error is None:
            self.error = err
        elif err is not None:
            self.error = CombinedError(self.error, err)
        return self.error