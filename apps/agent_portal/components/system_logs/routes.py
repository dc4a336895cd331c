"""
System Logs Component Routes
"""

from flask import Blueprint, current_app, jsonify, request

from .service import SystemLogsService
from ...core import get_portal_state, get_request_session

# Create blueprint for system logs routes
system_logs_bp = Blueprint('system_logs', __name__)


@system_logs_bp.before_request
def require_agent_session():
    """Logs are only handed out to logged in agents"""
    if get_request_session(current_app, request) is None:
        return jsonify({'error': 'No valid session'}), 401


@system_logs_bp.route('/api/logs')
def api_logs():
    """Get portal logs with filtering"""
    level_filter = request.args.get('level', 'ALL').upper()
    try:
        limit = int(request.args.get('limit', 50))
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400
    if limit < 0:
        return jsonify({'error': 'limit must not be negative'}), 400

    service = SystemLogsService(get_portal_state(current_app)['log_buffer'])
    return jsonify(service.get_logs(level_filter=level_filter, limit=limit))
