import logging
import secrets
import threading
import time
from dataclasses import dataclass

from .errors import InvalidGrant

logger = logging.getLogger(__name__)


class ExpiringStore:
    """Thread-safe in-memory map whose entries vanish after a fixed TTL.

    Expiry is checked lazily on every access. Stale entries that are never
    read again are purged by ``sweep()``, which ``put()`` also runs once per
    TTL period. ``clock`` must be monotonic (seconds).
    """

    def __init__(self, ttl, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._data = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + ttl

    def now(self):
        return self._clock()

    def put(self, key, value):
        now = self._clock()
        with self._lock:
            self._data[key] = (now + self.ttl, value)
        if now >= self._next_sweep:
            self.sweep()

    def _live(self, key):
        # Caller holds the lock.
        item = self._data.get(key)
        if item is None:
            return None
        expires_at, value = item
        if expires_at <= self._clock():
            del self._data[key]
            return None
        return item

    def get(self, key):
        with self._lock:
            item = self._live(key)
        return item[1] if item else None

    def pop(self, key):
        with self._lock:
            item = self._live(key)
            if item is None:
                return None
            del self._data[key]
        return item[1]

    def sweep(self):
        with self._lock:
            now = self._clock()
            self._next_sweep = now + self.ttl
            stale = [k for k, (expires_at, _) in self._data.items() if expires_at <= now]
            for k in stale:
                del self._data[k]
        if stale:
            logger.debug(f"Swept {len(stale)} expired entries")
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._data)


@dataclass(frozen=True)
class PendingExchange:
    profile: object
    nonce: str
    created_at: float


@dataclass(frozen=True)
class RefreshBinding:
    profile: object
    created_at: float


class AuthCodeStore:
    """Single-use authorization codes."""

    def __init__(self, ttl, clock=time.monotonic):
        self._store = ExpiringStore(ttl, clock)

    def issue(self, profile, nonce):
        code = secrets.token_urlsafe(48)
        self._store.put(code, PendingExchange(profile, nonce, self._store.now()))
        return code

    def redeem(self, code):
        pending = self._store.pop(code) if code else None
        if pending is None:
            raise InvalidGrant("Authorization code is invalid, expired or already used")
        return pending

    def sweep(self):
        return self._store.sweep()

    def __len__(self):
        return len(self._store)


class RefreshTokenStore:
    """Refresh tokens, reusable until they expire.

    A token stays valid after it has been exchanged; it is never revoked.
    """

    def __init__(self, ttl, clock=time.monotonic):
        self._store = ExpiringStore(ttl, clock)

    def new_token(self):
        """A fresh token value, not usable until ``bind()`` is called."""
        return secrets.token_urlsafe(40)

    def bind(self, token, profile):
        self._store.put(token, RefreshBinding(profile, self._store.now()))
        return token

    def issue(self, profile):
        return self.bind(self.new_token(), profile)

    def lookup(self, token):
        binding = self._store.get(token) if token else None
        if binding is None:
            raise InvalidGrant("Refresh token is invalid or expired")
        return binding.profile

    def sweep(self):
        return self._store.sweep()

    def __len__(self):
        return len(self._store)
