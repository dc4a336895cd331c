"""
Main page routes for the agent portal
"""
import logging
import re
from urllib.parse import parse_qsl

from flask import Blueprint, current_app, jsonify, render_template, request, Response
from markupsafe import Markup

from ..components import header_meta_registry, notification_registry
from ..components.header_meta import OpenSearchDescriptionService
from ..components.header_meta.service import OPENSEARCH_KINDS
from ..components.header_meta.ticket_search import OPENSEARCH_TYPE
from ..components import notifications  # noqa: F401  registers notification modules
from ..core import Language, Layout, SessionLimitReached, get_portal_state

logger = logging.getLogger(__name__)

# Create main blueprint
main_bp = Blueprint('main', __name__)


def _frontend_params():
    """Query and form parameters; the query string may use ';' or '&' separators"""
    params = {}
    query_string = request.query_string.decode('utf-8', errors='replace')
    for part in re.split(r'[;&]', query_string):
        for key, value in parse_qsl(part, keep_blank_values=True):
            params.setdefault(key, value)
    for key, value in request.form.items():
        params.setdefault(key, value)
    return params


def _build_layout(params=None):
    config = current_app.config
    language = Language(config.get('DEFAULT_LANGUAGE', 'en'))
    return Layout.from_request(config, language, request, params=params)


def _session_error(layout):
    return jsonify({'error': 'No valid session', 'session_name': layout.session_name}), 401


def run_header_meta_modules(layout, config):
    """Run the configured header meta modules in sorted key order"""
    modules = config.get('HEADER_META_MODULES') or {}
    for key in sorted(modules):
        module_config = modules[key]
        module_class = header_meta_registry.get_component(module_config.get('module'))
        if module_class is None:
            logger.warning(f"Header meta module {key} not registered: {module_config.get('module')}")
            continue
        module_class().run(layout, config, module_config)


def run_notification_modules(layout, config, session_store):
    """Run the configured notification modules and join their output"""
    modules = config.get('NOTIFICATION_MODULES') or {}
    output = []
    for key in sorted(modules):
        module_config = modules[key]
        module_class = notification_registry.get_component(module_config.get('module'))
        if module_class is None:
            logger.warning(f"Notification module {key} not registered: {module_config.get('module')}")
            continue
        result = module_class().run(layout, config, session_store, module_config)
        if result:
            output.append(result)
    return Markup(''.join(output))


@main_bp.route('/login', methods=['POST'])
def login():
    """Create an agent session and hand out the session cookie"""
    config = current_app.config
    session_store = get_portal_state(current_app)['session_store']
    language = Language(config.get('DEFAULT_LANGUAGE', 'en'))

    user_login = request.form.get('user') or (request.get_json(silent=True) or {}).get('user')
    if not user_login:
        return jsonify({'error': 'user is required'}), 400

    try:
        session_id = session_store.create_session(user_login, user_type='User')
    except SessionLimitReached as e:
        return jsonify({'error': language.translate(str(e))}), 429

    response = jsonify({'status': 'logged_in', 'user': user_login, 'session_id': session_id})
    response.set_cookie(config['SESSION_NAME'], session_id, httponly=True, samesite='Lax')
    return response


@main_bp.route('/logout', methods=['POST'])
def logout():
    """Remove the current session"""
    layout = _build_layout()
    session_store = get_portal_state(current_app)['session_store']
    session_store.remove_session(layout.session_id)

    response = jsonify({'status': 'logged_out'})
    response.delete_cookie(layout.session_name)
    return response


@main_bp.route('/')
def agent_page():
    """Agent start page"""
    return _render_agent_page(_build_layout())


@main_bp.route('/index')
def index():
    """Frontend dispatcher: Action/Subaction select what to render"""
    params = _frontend_params()
    layout = _build_layout(params)

    action = params.get('Action')
    if not action:
        return _render_agent_page(layout)

    session_store = get_portal_state(current_app)['session_store']
    if session_store.get_session_data(layout.session_id) is None:
        return _session_error(layout)

    subaction = params.get('Subaction', '')
    if action == 'AgentTicketSearch' and subaction in OPENSEARCH_KINDS:
        service = OpenSearchDescriptionService(current_app.config)
        xml = service.render(layout, action, subaction)
        return Response(xml, mimetype=OPENSEARCH_TYPE)

    return jsonify({'error': f'Unknown action: {action} {subaction}'.strip()}), 404


def _render_agent_page(layout):
    config = current_app.config
    session_store = get_portal_state(current_app)['session_store']

    session_data = session_store.get_session_data(layout.session_id)
    if session_data is None:
        return _session_error(layout)
    session_store.update_session(layout.session_id)

    run_header_meta_modules(layout, config)
    notification_output = run_notification_modules(layout, config, session_store)

    return render_template(
        'agent_page.html',
        layout=layout,
        meta_links=layout.render_meta_links(),
        notifications=notification_output,
        user=session_data['UserLogin'],
        product_name=config.get('PRODUCT_NAME'),
    )
