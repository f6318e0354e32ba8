"""
Free-tier usage limiter.

Counts calculations per identity (email, or "guest") and rejects once the
free limit is reached. Check and increment happen under one lock so two
concurrent requests from the same identity cannot both slip past the limit.

Counts are process-local. They reset on restart and are not shared
between server instances. Billing resets an identity through reset().
"""

import logging
import threading

from .config import settings
from .errors import QuotaExceededError

logger = logging.getLogger(__name__)

GUEST_IDENTITY = "guest"


class UsageLimiter:

    def __init__(self, limit: int = None):
        self.limit = settings.FREE_LIMIT if limit is None else limit
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def check_and_consume(self, identity: str) -> int:
        """
        Consume one calculation for `identity`.
        Returns the new count, or raises QuotaExceededError at the limit.
        """
        identity = identity or GUEST_IDENTITY
        with self._lock:
            used = self._counts.get(identity, 0)
            if used >= self.limit:
                logger.info("Free limit reached for %s (%d/%d)", identity, used, self.limit)
                raise QuotaExceededError(identity, self.limit)
            self._counts[identity] = used + 1
            return used + 1

    def reset(self, identity: str) -> None:
        """Quota-reset signal, called after a verified payment."""
        with self._lock:
            self._counts[identity or GUEST_IDENTITY] = 0
        logger.info("Usage reset for %s", identity)

    def usage(self, identity: str) -> int:
        with self._lock:
            return self._counts.get(identity or GUEST_IDENTITY, 0)

    def remaining(self, identity: str) -> int:
        return max(self.limit - self.usage(identity), 0)

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()


# Shared by the request-gating dependency and the payment router
limiter = UsageLimiter()
