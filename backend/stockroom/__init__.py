from flask import Flask, current_app
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import os

load_dotenv()

jwt = JWTManager()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def create_app(config: Optional[Dict[str, Any]] = None):
    app = Flask(__name__)

    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite+pysqlite:///:memory:')
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')
    app.config['DEFAULT_ADMIN_EMAIL'] = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@example.com')
    app.config['DEFAULT_ADMIN_PASSWORD'] = os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin')
    app.config['JWT_COOKIE_SECURE'] = _env_flag('JWT_COOKIE_SECURE', False)
    app.config['CORS_ALLOW_CREDENTIALS'] = _env_flag('CORS_ALLOW_CREDENTIALS', True)
    app.config['PORT'] = int(os.getenv('PORT', '8080'))

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    from .config.security import SESSION_COOKIE_NAME, TOKEN_TTL, TOKEN_ALGORITHM
    # Session token travels only in the session cookie; the signing key is not configuration
    app.config.update({
        'JWT_TOKEN_LOCATION': ['cookies'],
        'JWT_ACCESS_COOKIE_NAME': SESSION_COOKIE_NAME,
        'JWT_ACCESS_TOKEN_EXPIRES': TOKEN_TTL,
        'JWT_ALGORITHM': TOKEN_ALGORITHM,
        'JWT_COOKIE_CSRF_PROTECT': False,
        'JWT_SESSION_COOKIE': False,
        'JWT_COOKIE_SAMESITE': 'Lax',
    })

    # Record stores, one engine each
    from .services.stores import UserStore, ItemStore, make_engine
    db_url = app.config['DATABASE_URL']
    users = UserStore(make_engine(db_url))
    items = ItemStore(make_engine(db_url))
    app.extensions['stockroom.users'] = users
    app.extensions['stockroom.items'] = items
    _seed_default_admin(app, users)

    # Signer lives as long as this app object; restarting invalidates every session
    from .services.tokens import SessionSigner
    from .services.policy import AccessGate
    jwt.init_app(app)
    signer = SessionSigner(users)
    signer.init_app(app, jwt)
    AccessGate(signer).init_app(app)

    from .utils.cors import init_cors
    init_cors(app)

    from .routes.auth import auth_bp
    from .routes.users import users_bp
    from .routes.inventory import inv_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(inv_bp, url_prefix='/inventory')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            if e.code and e.code >= 500:
                app.logger.error('%s: %s', e.name, e.description)
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    from .openapi_builder import build_openapi_spec

    @app.route('/openapi.json')
    def openapi_spec():
        return build_openapi_spec()

    @app.route('/docs')
    def docs_index():
        # Lightweight HTML referencing Redoc CDN (no local install) for quick browsing
        return (
            "<!DOCTYPE html><html><head><title>API Docs</title>"
            "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.css\" />"
            "</head><body><redoc spec-url='/openapi.json'></redoc>"
            "<script src='https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js'></script>"
            "</body></html>"
        )

    return app


def _seed_default_admin(app: Flask, users):
    from .constants.roles import Role
    email = app.config['DEFAULT_ADMIN_EMAIL']
    if users.find_by_email(email) is not None:
        return
    users.create(
        first_name='Admin',
        last_name='User',
        email=email,
        password=app.config['DEFAULT_ADMIN_PASSWORD'],
        role=Role.ADMIN,
        user_id=0,
    )
    app.logger.info('Seeded default admin %s', email)


def get_users():
    return current_app.extensions['stockroom.users']


def get_items():
    return current_app.extensions['stockroom.items']
