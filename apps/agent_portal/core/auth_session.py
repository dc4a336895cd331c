"""
In-memory agent session store
"""
import logging
import secrets
import threading
import time

logger = logging.getLogger(__name__)

PRIOR_WARNING_MESSAGE = 'Please note that the session limit is almost reached.'
LIMIT_REACHED_MESSAGE = 'Session limit reached! Please try again later.'


class SessionLimitReached(Exception):
    """Raised when a new agent session would exceed AGENT_SESSION_LIMIT"""


class AuthSessionStore:
    """Thread-safe session store keyed by session id"""

    def __init__(self, config, clock=time.time):
        self.config = config
        self._clock = clock
        self._sessions = {}
        self._lock = threading.Lock()

    def create_session(self, user_login, user_type='User'):
        """Create a session and return its id"""
        if not user_login:
            raise ValueError("user_login is required")

        with self._lock:
            self._evict_idle()
            limit = self.config.get('AGENT_SESSION_LIMIT') or 0
            if user_type == 'User' and limit:
                active = self._count_active(user_type)
                if active >= limit:
                    logger.warning(f"Agent session limit reached ({active}/{limit}), rejecting {user_login}")
                    raise SessionLimitReached(LIMIT_REACHED_MESSAGE)

            session_id = secrets.token_urlsafe(24)
            now = self._clock()
            self._sessions[session_id] = {
                'UserLogin': user_login,
                'UserType': user_type,
                'UserSessionStart': now,
                'UserLastRequest': now,
            }

        logger.info(f"Created {user_type} session for {user_login}")
        return session_id

    def get_session_data(self, session_id):
        """Session data for a valid session, None otherwise"""
        if not session_id:
            return None
        with self._lock:
            self._evict_idle()
            data = self._sessions.get(session_id)
            if data is None:
                return None
            return dict(data)

    def update_session(self, session_id):
        """Touch the last request time of a session"""
        with self._lock:
            self._evict_idle()
            data = self._sessions.get(session_id)
            if data is None:
                return False
            data['UserLastRequest'] = self._clock()
            return True

    def remove_session(self, session_id):
        with self._lock:
            data = self._sessions.pop(session_id, None)
        if data is not None:
            logger.info(f"Removed session for {data['UserLogin']}")
        return data is not None

    def get_active_sessions(self, user_type='User'):
        """Number of non-idle sessions of the given user type"""
        with self._lock:
            self._evict_idle()
            return self._count_active(user_type)

    def check_agent_session_limit_prior_warning(self):
        """Warning message when active agent sessions reach the prior warning threshold"""
        prior_warning = self.config.get('AGENT_SESSION_LIMIT_PRIOR_WARNING') or 0
        if not prior_warning:
            return None

        if self.get_active_sessions('User') >= prior_warning:
            return PRIOR_WARNING_MESSAGE
        return None

    def _evict_idle(self):
        """Drop idle sessions, caller holds the lock"""
        idle = [session_id for session_id, data in self._sessions.items() if not self._is_active(data)]
        for session_id in idle:
            data = self._sessions.pop(session_id)
            logger.info(f"Expired idle session for {data['UserLogin']}")

    def _count_active(self, user_type):
        return sum(
            1 for data in self._sessions.values()
            if data['UserType'] == user_type and self._is_active(data)
        )

    def _is_active(self, data):
        max_idle = self.config.get('SESSION_MAX_IDLE_TIME') or 0
        if not max_idle:
            return True
        return self._clock() - data['UserLastRequest'] <= max_idle
