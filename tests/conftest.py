"""Shared test fixtures for the agent portal."""
import pytest

from apps.agent_portal.core import Database, get_portal_state
from apps.agent_portal.portal_app import create_app


@pytest.fixture()
def config_overrides(tmp_path):
    """Overrides applied on top of PortalConfig for every test app"""
    return {
        'TESTING': True,
        'RATELIMIT_ENABLED': False,
        'DATABASE': str(tmp_path / 'agent_portal.db'),
        'PRODUCT_NAME': 'Agent Portal',
        'TICKET_HOOK': 'Ticket#',
        'DEFAULT_LANGUAGE': 'en',
    }


@pytest.fixture()
def app(config_overrides):
    app = create_app(config_overrides)
    get_portal_state(app)['log_buffer'].clear()
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def logged_in_client(client):
    """Test client holding an agent session cookie"""
    response = client.post('/login', data={'user': 'agent1'})
    assert response.status_code == 200
    return client


@pytest.fixture()
def portal_config(tmp_path):
    """Plain configuration mapping for service level tests"""
    return {
        'PRODUCT': 'Agent Portal',
        'PRODUCT_NAME': 'Agent Portal',
        'VERSION': '1.0.0',
        'HOME': '/opt/agent_portal',
        'FQDN': 'portal.example.com',
        'SYSTEM_ID': 42,
        'DEFAULT_LANGUAGE': 'en',
        'TICKET_HOOK': 'Ticket#',
        'SCRIPT_ALIAS': '/',
        'SESSION_NAME': 'AgentPortalSession',
        'SESSION_MAX_IDLE_TIME': 7200,
        'DATABASE_TYPE': 'sqlite',
        'DATABASE': str(tmp_path / 'env.db'),
        'DATABASE_HOST': 'dbserver.example.com',
        'DATABASE_USER': 'portal_user',
        'BUNDLED_MODULES': [],
    }


@pytest.fixture()
def database(portal_config):
    return Database(portal_config['DATABASE_TYPE'], portal_config['DATABASE'])
