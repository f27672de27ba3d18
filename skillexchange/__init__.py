import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_restx import Api, Resource
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def create_app(config_name='development'):
    from skillexchange.config import CONFIGS

    app = Flask(__name__)
    app.config.from_object(CONFIGS.get(config_name, CONFIGS['development']))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app)

    # API docs live under /api/docs, the JSON spec under /swagger.json
    api = Api(app, version='1.0', title='SkillExchange API',
              description='Skill search, catalog and profile endpoints', doc='/api/docs')
    system_ns = api.namespace('health', path='/api/health', description='Service health')

    @system_ns.route('')
    class HealthResource(Resource):
        def get(self):
            return {'status': 'ok'}

    from skillexchange.errors import register_error_handlers
    register_error_handlers(app)

    # Import models so create_all sees every table
    from skillexchange import models  # noqa: F401

    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            logger.warning(f'Could not create database tables: {e}')

    from skillexchange.routes import register_routes
    register_routes(app)

    from skillexchange.cli import register_commands
    register_commands(app)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
