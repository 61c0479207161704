import logging

from flask import Flask
from config import Config
from models.database import Database
from services.geo import build_provider
from services.resolver import Resolver

# Import blueprints
from routes.api import api_bp
from routes.health import health_bp

logger = logging.getLogger(__name__)


def configure_logging(level=None):
    """Root logger setup shared by the server and the CLI entry point"""
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def create_app(store=None, provider=None, clock=None):
    """
    Application factory

    Args:
        store: Database to use (default: SQLite at Config.DATABASE_PATH)
        provider: GeoProvider to use (default: chosen from the configured API key)
        clock: Optional clock passed to the resolver
    """
    app = Flask(__name__)

    # Load configuration
    app.config['ENV'] = Config.ENV
    app.config['DEBUG'] = Config.DEBUG

    # Initialize database
    if store is None:
        store = Database()
        store.init_db()

    if provider is None:
        provider = build_provider(Config.get_ipstack_api_key())
    logger.info("Using geolocation provider: %s", provider.name)

    app.extensions['resolver'] = Resolver(store, provider, clock=clock)

    # Register blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp)

    return app


def main():
    configure_logging()
    app = create_app()
    logger.info("Server starting on %s:%s (env=%s)", Config.HOST, Config.PORT, Config.ENV)
    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=Config.DEBUG,
        threaded=True
    )


if __name__ == '__main__':
    main()
