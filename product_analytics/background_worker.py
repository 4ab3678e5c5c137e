#!/usr/bin/env python3
"""
Background worker that periodically re-validates the user session
and drops cached product records so the dashboard picks up fresh data
"""

import logging
import signal
import threading
from typing import Optional

from product_analytics.auth import SessionService
from product_analytics.config import config
from product_analytics.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class RefreshWorker:
    def __init__(self, cache: TTLCache, session: SessionService,
                 interval_seconds: float = config.REFRESH_INTERVAL_SECONDS):
        self.cache = cache
        self.session = session
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> bool:
        """
        Perform a single refresh tick.

        Returns True when the session was still valid and got extended. The
        cache is cleared either way so no stale records survive a logout.
        """
        valid = self.session.is_session_valid()
        if valid:
            self.session.refresh()
            logger.info("💓 Session still valid - refreshed")
        else:
            logger.warning("⚠️ Session expired or missing")

        self.cache.clear()
        return valid

    def run(self):
        """Main worker loop"""
        logger.info("🔄 Refresh worker starting...")
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"❌ Error in refresh tick: {e}", exc_info=True)
        logger.info("Refresh worker stopped")

    def start(self) -> threading.Thread:
        if self.running:
            return self._thread
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name='refresh-worker', daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def handle_shutdown(self, signum, frame):
        """Handle graceful shutdown"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        self._stop_event.set()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    session = SessionService(user_id=config.ADMIN_USERNAME)
    worker = RefreshWorker(TTLCache(default_ttl_seconds=config.CACHE_TTL_SECONDS), session)

    # Set up signal handlers for graceful shutdown
    signal.signal(signal.SIGTERM, worker.handle_shutdown)
    signal.signal(signal.SIGINT, worker.handle_shutdown)

    worker.run()


if __name__ == '__main__':
    main()
