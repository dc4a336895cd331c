"""
Agent Portal
Flask application serving agent pages and environment diagnostics
"""
import logging
import os

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config.settings import PortalConfig
from .core import AuthSessionStore, Database, EXTENSION_KEY, install_log_buffer
from .routes.main_routes import main_bp

# Import System Environment component
from .components.system_environment import EnvironmentService, init_system_environment

# Import System Logs component
from .components.system_logs import init_system_logs

logger = logging.getLogger(__name__)

PORTAL_LOGGER = 'apps.agent_portal'


class PortalApp:
    """Main agent portal application class"""

    def __init__(self):
        self.app = None
        self.limiter = None

    def create_app(self, config_overrides=None):
        """Create and configure Flask application"""
        template_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')
        self.app = Flask(__name__, template_folder=template_dir)

        # Load configuration
        self.app.config.from_object(PortalConfig)
        if config_overrides:
            self.app.config.update(config_overrides)

        # Initialize extensions
        self.limiter = Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI']
        )

        # Shared collaborators, looked up by components via get_portal_state
        config = self.app.config
        database = Database(config['DATABASE_TYPE'], config['DATABASE'])
        self.app.extensions[EXTENSION_KEY] = {
            'session_store': AuthSessionStore(config),
            'database': database,
            'environment': EnvironmentService(config, database),
            'log_buffer': install_log_buffer(PORTAL_LOGGER, maxlen=config['MAX_LOG_ENTRIES']),
        }

        # Initialize components
        init_system_environment(self.app)
        init_system_logs(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        logger.info(f"{config['PRODUCT_NAME']} {config['VERSION']} initialized")
        return self.app

    def run(self, host='0.0.0.0', port=8080):
        """Start the agent portal"""
        logger.info(f"Agent portal starting on http://{host}:{port}")
        print(f"{self.app.config['PRODUCT_NAME']} {self.app.config['VERSION']}")
        print(f"Starting on: http://localhost:{port}")
        print("Links:")
        print(f"   - Agent page:   http://localhost:{port}/")
        print(f"   - Environment:  http://localhost:{port}/api/system/environment")
        print(f"   - Logs:         http://localhost:{port}/api/logs")

        self.app.run(host=host, port=port, debug=False)


def create_app(config_overrides=None):
    """Application factory"""
    return PortalApp().create_app(config_overrides)


def main():
    """Main entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='[%(asctime)s] %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    portal = PortalApp()
    portal.create_app()
    portal.run(port=int(os.environ.get('PORT', 8080)))


if __name__ == '__main__':
    main()
