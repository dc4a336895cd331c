"""
Agent session limit notification
"""
from .. import notification_registry, register_component


@register_component(notification_registry, 'agent_session_limit')
class AgentSessionLimitNotification:
    """Warns agents when the session limit is almost reached"""

    def run(self, layout, config, session_store, module_config=None):
        # disabled unless explicitly switched on
        if not config.get('AGENT_SESSION_LIMIT_NOTIFICATION'):
            return ''

        message = session_store.check_agent_session_limit_prior_warning()
        if not message:
            return ''

        return layout.notify(
            data=layout.translate(message),
            priority='Warning',
        )
