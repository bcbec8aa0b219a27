from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine
import logging
import os
import sqlite3
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def _database_url(config_name):
    if config_name == 'testing':
        return 'sqlite://'
    url = os.getenv('DATABASE_URL', 'sqlite:///duochat.db')
    # Render and Supabase hand out postgres:// URLs, SQLAlchemy wants postgresql://
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def create_app(config_name='development', translation_provider=None, **overrides):
    """Build the Flask application.

    Args:
        config_name: 'development', 'production' or 'testing'
        translation_provider: object exposing ``translate(text, source, target)``;
            defaults to a MyMemory client built from the environment
        **overrides: extra Flask config values, applied last
    """
    app = Flask(__name__)

    logging.basicConfig(level=os.getenv('LOG_LEVEL', 'INFO').upper())

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url(config_name)
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET'] = os.getenv('JWT_SECRET', 'dev-secret')
    app.config['PASSWORD_A_HASH'] = os.getenv('PASSWORD_A_HASH')
    app.config['PASSWORD_B_HASH'] = os.getenv('PASSWORD_B_HASH')
    app.config['COOKIE_SECURE'] = config_name == 'production'
    app.config['MYMEMORY_API_URL'] = os.getenv(
        'MYMEMORY_API_URL', 'https://api.mymemory.translated.net/get'
    )
    app.config['MYMEMORY_EMAIL'] = os.getenv('MYMEMORY_EMAIL')
    app.config['TRANSLATION_TIMEOUT'] = float(os.getenv('TRANSLATION_TIMEOUT', 10))

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['RATELIMIT_ENABLED'] = False

    app.config.update(overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(
        app,
        origins=os.getenv('FRONTEND_URL', 'http://localhost:5173'),
        supports_credentials=True,
    )

    if translation_provider is None:
        from duochat.services.mymemory import MyMemoryClient
        translation_provider = MyMemoryClient(
            api_url=app.config['MYMEMORY_API_URL'],
            timeout=app.config['TRANSLATION_TIMEOUT'],
            email=app.config['MYMEMORY_EMAIL'],
        )
    app.extensions['duochat'] = {'translation_provider': translation_provider}

    # Import models so create_all and Alembic see every table
    from duochat import models  # noqa: F401

    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            logging.getLogger(__name__).warning(
                f"Could not create database tables: {e}. "
                "This is OK if the database is not ready yet."
            )

    # Register routes
    from duochat.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
