"""
System Environment Component
Reports OS, interpreter, database and product information
"""

from flask import Blueprint

# Create blueprint for system environment
system_environment_bp = Blueprint(
    'system_environment',
    __name__,
)

# Import routes to register them
from . import routes  # noqa: E402
from .service import EnvironmentService  # noqa: E402


def init_system_environment(app):
    """Initialize system environment component with Flask app"""
    # Register blueprint
    app.register_blueprint(system_environment_bp, url_prefix='')

    return system_environment_bp


__all__ = ['system_environment_bp', 'init_system_environment', 'EnvironmentService']
