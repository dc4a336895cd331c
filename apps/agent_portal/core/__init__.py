"""
Core services for agent portal components
"""
from .auth_session import AuthSessionStore, SessionLimitReached
from .database import Database
from .language import Language
from .layout import Layout
from .monitoring import LogBufferHandler, install_log_buffer

# Key under which shared collaborators live in app.extensions
EXTENSION_KEY = 'agent_portal'


def get_portal_state(app):
    """Shared collaborators registered by PortalApp.create_app"""
    return app.extensions[EXTENSION_KEY]


def get_request_session(app, request):
    """Session data of the requesting agent, None without a valid session

    The session id is read from the session cookie or the request values.
    """
    session_name = app.config.get('SESSION_NAME', 'AgentPortalSession')
    session_id = request.cookies.get(session_name) or request.values.get(session_name)
    return get_portal_state(app)['session_store'].get_session_data(session_id)


__all__ = [
    'AuthSessionStore',
    'SessionLimitReached',
    'Database',
    'Language',
    'Layout',
    'LogBufferHandler',
    'install_log_buffer',
    'EXTENSION_KEY',
    'get_portal_state',
    'get_request_session',
]
