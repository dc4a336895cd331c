"""
Agent portal configuration settings
"""
import os
import socket
from pathlib import Path

from .. import __version__

PORTAL_HOME = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'on', 'yes')


def _env_int(name, default=0):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


class PortalConfig:
    """Centralized configuration for the agent portal"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'agent-portal-dev-key-change-in-production')

    # Rate limiting
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', "100 per minute")
    RATELIMIT_ENABLED = _env_bool('RATELIMIT_ENABLED', True)

    # Product settings
    PRODUCT = os.environ.get('PRODUCT', 'Agent Portal')
    PRODUCT_NAME = os.environ.get('PRODUCT_NAME', 'Agent Portal')
    VERSION = os.environ.get('VERSION', __version__)
    HOME = os.environ.get('HOME_DIR', str(PORTAL_HOME))
    FQDN = os.environ.get('FQDN') or socket.getfqdn()
    SYSTEM_ID = _env_int('SYSTEM_ID', 10)
    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE', 'en')
    TICKET_HOOK = os.environ.get('TICKET_HOOK', 'Ticket#')

    # Frontend settings
    SCRIPT_ALIAS = os.environ.get('SCRIPT_ALIAS', '/')
    SESSION_NAME = os.environ.get('SESSION_NAME', 'AgentPortalSession')
    SESSION_MAX_IDLE_TIME = _env_int('SESSION_MAX_IDLE_TIME', 7200)

    # Agent session limits (0 disables)
    AGENT_SESSION_LIMIT = _env_int('AGENT_SESSION_LIMIT', 0)
    AGENT_SESSION_LIMIT_PRIOR_WARNING = _env_int('AGENT_SESSION_LIMIT_PRIOR_WARNING', 0)
    # Shipped disabled, the notification is an opt-in feature
    AGENT_SESSION_LIMIT_NOTIFICATION = _env_bool('AGENT_SESSION_LIMIT_NOTIFICATION', False)

    # Database settings
    DATABASE_TYPE = os.environ.get('DATABASE_TYPE', 'sqlite')
    DATABASE = os.environ.get('DATABASE', str(PORTAL_HOME / 'var' / 'agent_portal.db'))
    DATABASE_HOST = os.environ.get('DATABASE_HOST', 'localhost')
    DATABASE_USER = os.environ.get('DATABASE_USER', 'agent_portal')

    # Frontend modules, rendered in sorted key order
    HEADER_META_MODULES = {
        '2-TicketSearch': {
            'module': 'ticket_search',
            'action': 'AgentTicketSearch',
        },
    }
    NOTIFICATION_MODULES = {
        '1000-AgentSessionLimit': {
            'module': 'agent_session_limit',
        },
    }

    # Modules reported by the environment support bundle
    BUNDLED_MODULES = [
        'blinker',
        'click',
        'flask',
        'flask_limiter',
        'itsdangerous',
        'jinja2',
        'limits',
        'markupsafe',
        'psutil',
        'werkzeug',
    ]

    # UI settings
    MAX_LOG_ENTRIES = 1000

    @classmethod
    def get(cls, key, default=None):
        """Get a single configuration value"""
        return getattr(cls, key, default)
