"""
Notifications Component
Messages shown at the top of agent pages
"""
from .agent_session_limit import AgentSessionLimitNotification

__all__ = ['AgentSessionLimitNotification']
