"""
System Environment Routes
"""

import logging

from flask import current_app, jsonify, request

from . import system_environment_bp
from ...core import get_portal_state, get_request_session

logger = logging.getLogger(__name__)

SECTIONS = ('os', 'python', 'database', 'product', 'hardware')


def _environment_service():
    return get_portal_state(current_app)['environment']


def _bundled_modules_requested():
    return request.args.get('bundled_modules', '').lower() in ('1', 'true', 'yes', 'on')


@system_environment_bp.before_request
def require_agent_session():
    """Environment data is only handed out to logged in agents"""
    if get_request_session(current_app, request) is None:
        return jsonify({'error': 'No valid session'}), 401


@system_environment_bp.route('/api/system/environment')
def api_system_environment():
    """Get the full environment support bundle"""
    try:
        bundle = _environment_service().get_support_bundle(
            bundled_modules=_bundled_modules_requested()
        )
    except Exception as e:
        logger.exception(f"Environment collection failed: {e}")
        return jsonify({'error': str(e)}), 500

    return jsonify(bundle)


@system_environment_bp.route('/api/system/environment/<section>')
def api_system_environment_section(section):
    """Get a single environment section"""
    if section not in SECTIONS:
        return jsonify({'error': f'Unknown environment section: {section}'}), 404

    try:
        data = _environment_service().get_section(
            section, bundled_modules=_bundled_modules_requested()
        )
    except Exception as e:
        logger.exception(f"Environment section {section} failed: {e}")
        return jsonify({'error': str(e)}), 500

    return jsonify(data)


@system_environment_bp.route('/api/system/modules/<module>')
def api_module_version(module):
    """Get the installed version of a Python module"""
    try:
        version = _environment_service().get_module_version(module)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({'module': module, 'version': version})
