"""Captcha answers kept in a cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheStore:
    """Keeps captcha answers in a cache for a number of seconds."""

    cache: Any
    expiration: int

    def set(self, captcha_id: str, value: str) -> None:
        """Store the answer for a captcha; cache failures are ignored."""
        try:
            self.cache.set(captcha_id, value, self.expiration)
        except Exception:  # the store is best effort
            pass

    def get(self, captcha_id: str, clear: bool) -> str:
        """Return the stored answer, or '' if none; clear removes it."""
        try:
            value = self.cache.get(captcha_id)
        except Exception:
            return ""
        if clear:
            try:
                self.cache.delete(captcha_id)
            except Exception:  # the answer has been read either way
                pass
        return "" if value is None else value

    def verify(self, captcha_id: str, answer: str, clear: bool) -> bool:
        """Return True when answer matches the stored one."""
        return self.get(captcha_id, clear) == answer


def new_cache_store(cache: Any, expiration: int) -> CacheStore:
    return CacheStore(cache=cache, expiration=expiration)