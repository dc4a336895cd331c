"""Tests for the in-memory session store."""
import pytest

from apps.agent_portal.core import AuthSessionStore, SessionLimitReached
from apps.agent_portal.core.auth_session import PRIOR_WARNING_MESSAGE


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


def test_create_and_get_session(portal_config):
    store = AuthSessionStore(portal_config)

    session_id = store.create_session('agent1')

    data = store.get_session_data(session_id)
    assert data['UserLogin'] == 'agent1'
    assert data['UserType'] == 'User'


def test_create_session_requires_login(portal_config):
    with pytest.raises(ValueError):
        AuthSessionStore(portal_config).create_session('')


def test_unknown_session(portal_config):
    store = AuthSessionStore(portal_config)

    assert store.get_session_data('nope') is None
    assert store.get_session_data(None) is None
    assert store.update_session('nope') is False


def test_remove_session(portal_config):
    store = AuthSessionStore(portal_config)
    session_id = store.create_session('agent1')

    assert store.remove_session(session_id) is True
    assert store.get_session_data(session_id) is None
    assert store.remove_session(session_id) is False


def test_idle_sessions_expire(portal_config, clock):
    portal_config['SESSION_MAX_IDLE_TIME'] = 60
    store = AuthSessionStore(portal_config, clock=clock)
    session_id = store.create_session('agent1')

    clock.now += 30
    assert store.update_session(session_id) is True
    clock.now += 59
    assert store.get_session_data(session_id) is not None
    clock.now += 2
    assert store.get_session_data(session_id) is None
    assert store.get_active_sessions() == 0


def test_active_sessions_by_user_type(portal_config):
    store = AuthSessionStore(portal_config)
    store.create_session('agent1')
    store.create_session('agent2')
    store.create_session('customer1', user_type='Customer')

    assert store.get_active_sessions() == 2
    assert store.get_active_sessions('Customer') == 1


def test_agent_session_limit(portal_config):
    portal_config['AGENT_SESSION_LIMIT'] = 2
    store = AuthSessionStore(portal_config)
    store.create_session('agent1')
    store.create_session('agent2')

    with pytest.raises(SessionLimitReached):
        store.create_session('agent3')

    # customers are not counted against the agent limit
    store.create_session('customer1', user_type='Customer')


def test_session_limit_frees_up_after_logout(portal_config):
    portal_config['AGENT_SESSION_LIMIT'] = 1
    store = AuthSessionStore(portal_config)
    session_id = store.create_session('agent1')
    store.remove_session(session_id)

    assert store.create_session('agent2')


def test_prior_warning_disabled(portal_config):
    store = AuthSessionStore(portal_config)
    store.create_session('agent1')

    assert store.check_agent_session_limit_prior_warning() is None


def test_prior_warning_threshold(portal_config):
    portal_config['AGENT_SESSION_LIMIT_PRIOR_WARNING'] = 2
    store = AuthSessionStore(portal_config)

    store.create_session('agent1')
    assert store.check_agent_session_limit_prior_warning() is None

    store.create_session('agent2')
    assert store.check_agent_session_limit_prior_warning() == PRIOR_WARNING_MESSAGE


def test_idle_sessions_are_evicted(portal_config, clock):
    store = AuthSessionStore(portal_config, clock=clock)
    for number in range(100):
        store.create_session(f'agent{number}')

    clock.now += 10000
    session_id = store.create_session('agent100')

    assert len(store._sessions) == 1
    assert store.get_session_data(session_id)['UserLogin'] == 'agent100'
