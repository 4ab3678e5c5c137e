import os
import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

# Import configuration and authentication
from product_analytics.config import config
from product_analytics.auth import requires_auth

# Import timezone utilities for consistent timezone handling
from product_analytics.utils.timezone_utils import now_in_timezone, format_for_display
from product_analytics.utils.cache import TTLCache
from product_analytics.utils.database_utils import DatabaseManager, get_database_manager

# Import database initialization
from product_analytics.database_init import initialize_database, check_database_health

# Import products blueprint
from product_analytics.dashboard.api.dashboard_routes import products_bp
from product_analytics.dashboard.services.record_repository import ProductRepository

logger = logging.getLogger(__name__)


def create_app(db_manager: Optional[DatabaseManager] = None,
               cache: Optional[TTLCache] = None) -> Flask:
    """Build the Flask app around one database and one shared records cache"""
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.SECRET_KEY

    db_manager = db_manager or get_database_manager()

    # Initialize database on startup
    logger.info("🚀 Initializing database on startup...")
    if initialize_database(db_manager):
        if check_database_health(db_manager):
            logger.info("✅ Database initialization completed successfully")
        else:
            logger.warning("⚠️ Database initialization completed but health check failed")
    else:
        logger.error("❌ Database initialization failed - app may not function properly")

    app.config['PRODUCT_REPOSITORY'] = ProductRepository(db_manager)
    app.config['ANALYSIS_CACHE'] = cache or TTLCache(default_ttl_seconds=config.CACHE_TTL_SECONDS)

    # Register products blueprint
    app.register_blueprint(products_bp)

    # Enable CORS for all routes to handle cross-origin requests
    allowed_origins = config.ALLOWED_ORIGINS.copy()
    public_domain = os.environ.get('PUBLIC_DOMAIN')
    if public_domain:
        allowed_origins.append(f'https://{public_domain}')

    CORS(app, origins=allowed_origins,
         allow_headers=['Content-Type', 'Authorization'],
         methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'])

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'ok',
            'database': check_database_health(db_manager),
            'time': format_for_display(now_in_timezone())
        })

    @app.route('/api/cache/clear', methods=['POST'])
    @requires_auth
    def clear_cache():
        app.config['ANALYSIS_CACHE'].clear()
        return jsonify({'success': True})

    return app


if __name__ == '__main__':
    # Set up logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app = create_app()
    logger.info(f"🚀 Starting Product Analytics on {config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT, debug=config.FLASK_DEBUG)
