"""
Layout object for agent pages
Collects named output blocks and renders notification boxes and meta links
"""
from flask import render_template
from markupsafe import Markup


class Layout:
    """Per-request rendering facade

    Holds the session parameters needed to build links, the language
    used for translations and the blocks plugins add while a page is
    assembled.
    """

    def __init__(self, config, language, session_id=None, session_id_cookie=False):
        self.config = config
        self.language = language
        self.session_name = config.get('SESSION_NAME', 'AgentPortalSession')
        self.session_id = session_id or ''
        self.session_id_cookie = session_id_cookie
        self.baselink = config.get('SCRIPT_ALIAS', '/') + 'index?'
        self._blocks = []

    @classmethod
    def from_request(cls, config, language, request, params=None):
        """Build a layout from the current request

        A session id sent as cookie means links do not need to carry it.
        Otherwise it is taken from params (defaults to request.values).
        """
        session_name = config.get('SESSION_NAME', 'AgentPortalSession')
        session_id = request.cookies.get(session_name)
        if session_id:
            return cls(config, language, session_id=session_id, session_id_cookie=True)

        if params is None:
            params = request.values
        session_id = params.get(session_name)
        return cls(config, language, session_id=session_id, session_id_cookie=False)

    def block(self, name, data=None):
        """Add a named data block"""
        self._blocks.append({'name': name, 'data': dict(data or {})})

    def get_blocks(self, name):
        """Data of all blocks with the given name in insertion order"""
        return [block['data'] for block in self._blocks if block['name'] == name]

    def translate(self, text, *params):
        return self.language.translate(text, *params)

    def notify(self, data, priority='Notice', link=None):
        """Render a notification box"""
        return render_template(
            'notify.html',
            data=data,
            priority=priority,
            link=link,
        )

    def render_meta_links(self):
        """Render all MetaLink blocks as <link> tags"""
        return Markup(render_template('meta_links.html', links=self.get_blocks('MetaLink')))
