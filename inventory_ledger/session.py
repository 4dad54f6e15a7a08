"""
Demo session: credential check, the ledger store it owns, and simulated
latency for login and report generation.

Delayed callbacks are tied to the session. Closing the session cancels
everything still pending. A callback already being delivered finishes before
close returns.
"""
import logging
import threading
from typing import Any, Callable, Optional

from . import settings, utils
from .schemas import Report
from .store import LedgerStore

logger = logging.getLogger(__name__)


class SimulatedLatency:
    """
    Runs callbacks after a fixed delay on timer threads, cancellable as a group.

    Deliveries are serialized. `close` waits for a callback that is already
    running; any callback that has not started by then never runs.
    """

    def __init__(self, delay: float = settings.SIMULATED_DELAY_SECONDS):
        self.delay = delay
        self._lock = threading.Lock()
        # Held for the whole of a delivery, and by close while it flips _closed.
        self._delivery = threading.RLock()
        self._pending: set[threading.Timer] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def schedule(self, callback: Callable[..., Any], *args: Any) -> threading.Timer:
        def fire():
            with self._delivery:
                with self._lock:
                    if self._closed or timer not in self._pending:
                        return
                    self._pending.discard(timer)
                callback(*args)

        timer = threading.Timer(self.delay, fire)
        timer.daemon = True
        with self._lock:
            if self._closed:
                raise RuntimeError("Cannot schedule work on a closed session")
            self._pending.add(timer)
        timer.start()
        return timer

    def cancel_all(self) -> int:
        """Cancels every pending callback and returns how many were dropped."""
        with self._lock:
            timers = list(self._pending)
            self._pending.clear()
        for timer in timers:
            timer.cancel()
        return len(timers)

    def close(self) -> None:
        with self._delivery:
            with self._lock:
                self._closed = True
        dropped = self.cancel_all()
        if dropped:
            logger.debug(f"Cancelled {dropped} pending delayed callback(s)")


class Session:
    """
    A single user's view of the ledger.

    Login is a verbatim comparison against the configured demo credentials.
    It gates nothing in the store.
    """

    def __init__(
        self,
        store: LedgerStore,
        latency: Optional[SimulatedLatency] = None,
        email: str = settings.DEMO_EMAIL,
        password: str = settings.DEMO_PASSWORD,
    ):
        self.store = store
        self.latency = latency or SimulatedLatency()
        self._email = email
        self._password = password
        self.is_authenticated = False
        self.user_email: Optional[str] = None

    def login(self, email: str, password: str) -> bool:
        if email == self._email and password == self._password:
            self.is_authenticated = True
            self.user_email = email
            logger.info(f"🔓 Logged in as {email}")
            return True

        logger.warning("⚠️ Invalid credentials. Login rejected.")
        return False

    def logout(self) -> None:
        if self.is_authenticated:
            logger.info(f"Logged out {self.user_email}")
        self.is_authenticated = False
        self.user_email = None

    def login_async(
        self, email: str, password: str, on_done: Callable[[bool], Any]
    ) -> threading.Timer:
        """Checks the credentials after the simulated delay, then calls `on_done(success)`."""
        return self.latency.schedule(lambda: on_done(self.login(email, password)))

    def generate_report_async(
        self,
        on_ready: Callable[[Report], Any],
        item_filter: Optional[str] = settings.ALL_ITEMS,
        start_date: utils.DateLike = None,
        end_date: utils.DateLike = None,
    ) -> threading.Timer:
        """
        Builds the report now and delivers it after the simulated delay.
        Invalid date filters raise immediately.
        """
        report = self.store.generate_report(item_filter, start_date, end_date)
        return self.latency.schedule(on_ready, report)

    def close(self) -> None:
        self.latency.close()
        self.logout()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
