from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import logging
import os
from dotenv import load_dotenv

from blogcms.events import EventBus

load_dotenv()

db = SQLAlchemy()
events = EventBus()


def create_app(config_name='development'):
    app = Flask(__name__)

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Config
    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv(
            'DATABASE_URL',
            'sqlite:///blogcms.db'
        )

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 2592000))
    app.config['GEMINI_API_BASE'] = os.getenv(
        'GEMINI_API_BASE',
        'https://generativelanguage.googleapis.com'
    )
    app.config['GEMINI_TIMEOUT'] = float(os.getenv('GEMINI_TIMEOUT', 60))
    app.config['TRANSLATION_BACKOFF_SECONDS'] = float(os.getenv('TRANSLATION_BACKOFF_SECONDS', 1))

    # Initialize extensions
    db.init_app(app)
    CORS(app)

    with app.app_context():
        from blogcms import models  # noqa: F401 - register tables
        try:
            db.create_all()
        except Exception as e:
            logging.getLogger(__name__).warning(f"Could not create database tables: {e}")

    # Translate posts right after they are committed
    from blogcms.services.translation import trigger_post_translation
    events.subscribe('post.created', trigger_post_translation)
    events.subscribe('post.updated', trigger_post_translation)

    # Register routes and CLI commands
    from blogcms.routes import register_routes
    register_routes(app)

    from blogcms.commands import register_commands
    register_commands(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
