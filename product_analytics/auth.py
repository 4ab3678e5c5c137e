from flask import request, Response
from functools import wraps
import logging
import threading
import time
from typing import Callable, Optional

from .config import config

logger = logging.getLogger(__name__)

# Team credentials - read from configuration
TEAM_CREDENTIALS = {
    config.ADMIN_USERNAME: config.ADMIN_PASSWORD,
    config.TEAM_USERNAME: config.TEAM_PASSWORD,
}


class SessionExpiredError(Exception):
    """Raised when an operation needs a user but the session is gone or expired"""
    pass


class SessionService:
    """
    Tracks the signed-in user and when their session lapses.

    The clock is injectable so expiry can be driven from tests.
    """

    def __init__(self, user_id: Optional[str] = None,
                 ttl_seconds: float = config.SESSION_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._user_id = None
        self._expires_at = 0.0
        if user_id:
            self.start(user_id)

    def start(self, user_id: str) -> None:
        with self._lock:
            self._user_id = user_id
            self._expires_at = self._clock() + self.ttl_seconds
        logger.debug(f"Session started for {user_id}")

    def refresh(self) -> bool:
        """Extend a valid session; an expired one stays expired"""
        with self._lock:
            if self._user_id is None or self._clock() >= self._expires_at:
                return False
            self._expires_at = self._clock() + self.ttl_seconds
            return True

    def end(self) -> None:
        with self._lock:
            user_id = self._user_id
            self._user_id = None
            self._expires_at = 0.0
        if user_id:
            logger.debug(f"Session ended for {user_id}")

    def is_session_valid(self) -> bool:
        with self._lock:
            return self._user_id is not None and self._clock() < self._expires_at

    def get_current_user(self) -> Optional[str]:
        """The signed-in user, or None once the session has expired"""
        if not self.is_session_valid():
            return None
        return self._user_id

    def require_user(self) -> str:
        user_id = self.get_current_user()
        if user_id is None:
            raise SessionExpiredError("Session expired or not started")
        return user_id


def check_auth(username, password):
    """Check if username/password combination is valid"""
    return username in TEAM_CREDENTIALS and TEAM_CREDENTIALS[username] == password

def authenticate():
    """Send 401 response that enables basic auth"""
    return Response(
        'Could not verify your access level for that URL.\n'
        'You have to login with proper credentials', 401,
        {'WWW-Authenticate': 'Basic realm="Product Analytics"'})

def requires_auth(f):
    """Decorator that requires authentication"""
    @wraps(f)
    def decorated(*args, **kwargs):
        auth = request.authorization
        if not auth or not check_auth(auth.username, auth.password):
            return authenticate()
        return f(*args, **kwargs)
    return decorated

def session_from_request() -> SessionService:
    """Session for the basic-auth user of the current request (empty when unauthenticated)"""
    auth = request.authorization
    if auth and check_auth(auth.username, auth.password):
        return SessionService(user_id=auth.username)
    return SessionService()
