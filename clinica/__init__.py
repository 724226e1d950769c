import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from clinica.config import Config

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

logger = logging.getLogger(__name__)


def create_api():
    return Api(
        title='Clinica API',
        version='1.0',
        description='API de reservas de citas médicas',
        doc='/docs',
        ui_config={
            'displayOperationId': True,
            'docExpansion': 'none',
            'filter': True,
            'defaultModelsExpandDepth': 1,
            'defaultModelExpandDepth': 1
        },
        security=[{'TokenAuth': []}],
        authorizations={
            'TokenAuth': {
                'type': 'apiKey',
                'in': 'header',
                'name': 'Authorization',
                'description': 'Pegue el token tal cual, sin el prefijo "Bearer"'
            }
        }
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # Token error responses
    from .utils.auth_middleware import setup_auth_middleware
    setup_auth_middleware(jwt)

    # Register API namespaces
    from .routes import register_namespaces
    api = create_api()
    register_namespaces(api)
    api.init_app(app)

    from . import models  # noqa: F401
    from .seeds import seed_defaults
    with app.app_context():
        db.create_all()  # Create all tables
        seed_defaults(app.config)

    logger.info(f"Clinica API ready ({config_class.__name__})")
    return app
