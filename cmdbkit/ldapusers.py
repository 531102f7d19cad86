"""Directory users, fetched through a loader and cached for a while."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

log = logging.getLogger(__name__)

DEFAULT_TTL = 600.0


@dataclass(frozen=True)
class LdapUser:
    """A user of the directory: its uid and display name."""

    uid: str
    name: str


def uid_from_dn(dn: str) -> str:
    """Return the value of the ``uid`` component of a distinguished name, or ''."""
    for item in dn.split(","):
        parts = item.split("=")
        if parts[0] == "uid":
            if len(parts) < 2:
                raise ValueError(f"malformed uid component in {dn!r}")
            return parts[1]
    return ""


class UserCache:
    """Caches the user list returned by ``loader`` for ``ttl`` seconds.

    The loader returns ``(dn, cn)`` pairs, one per directory entry. An empty
    answer is not cached.
    """

    def __init__(
        self,
        loader: Callable[[], Iterable[tuple[str, str]]],
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._loader = loader
        self.ttl = ttl
        self._clock = clock
        self._users: list[LdapUser] | None = None
        self._loaded_at = 0.0
        self._lock = threading.Lock()

    def users(self) -> list[LdapUser]:
        """Return all users, loading them again once the cache has expired."""
        with self._lock:
            if self._users is not None and self._clock() - self._loaded_at < self.ttl:
                return list(self._users)
            log.debug("loading directory users")
            entries = list(self._loader())
            if not entries:
                return []
            users = [LdapUser(uid_from_dn(dn), cn) for dn, cn in entries]
            self._users = users
            self._loaded_at = self._clock()
            return list(users)

    def user_map(self) -> dict[str, LdapUser]:
        """Return users by uid; empty when they cannot be loaded."""
        try:
            users = self.users()
        except Exception as exc:
            log.warning("cannot load directory users: %s", exc)
            return {}
        return {user.uid: user for user in users}

    def name_of(self, uid: str) -> str:
        """Return the display name of ``uid``, or '' when unknown or unavailable."""
        try:
            users = self.users()
        except Exception as exc:
            log.warning("cannot load directory users: %s", exc)
            return ""
        return next((user.name for user in users if user.uid == uid), "")