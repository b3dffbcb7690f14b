from flask import Flask, request, jsonify
from flask_migrate import Migrate
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
import os
import logging
from routes.auth import auth_bp
from routes.bookings import bookings_bp
from routes.users import users_bp
from database.db import db
from utils.errors import ApiError, InternalError
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

migrate = Migrate()


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config():
    load_dotenv()
    return {
        'JWT_SECRET': os.environ.get('JWT_SECRET'),
        'SQLALCHEMY_DATABASE_URI': os.environ.get('DATABASE_URL'),
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'JWT_EXPIRES_IN': int(os.environ.get('JWT_EXPIRES_IN', 7 * 24 * 3600)),
        'ALLOWED_ORIGINS': os.environ.get('ALLOWED_ORIGINS', '*'),
        'USER_ID_MAX_ATTEMPTS': int(os.environ.get('USER_ID_MAX_ATTEMPTS', 50)),
        'EVENT_LOGGING': _env_flag('EVENT_LOGGING', True),
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'INFO'),
    }


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            logger.error("Request failed: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        db.session.rollback()
        logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify(InternalError().to_dict()), 500

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(InternalError().to_dict()), 500


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.update(load_config())
    if test_config:
        app.config.update(test_config)

    if not app.config['JWT_SECRET']:
        raise ValueError("JWT_SECRET environment variable is required")
    if not app.config['SQLALCHEMY_DATABASE_URI']:
        raise ValueError("DATABASE_URL environment variable is required")

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    allowed_origins = app.config['ALLOWED_ORIGINS'].split(',')
    CORS(app,
         resources={r"/api/*": {"origins": allowed_origins}},
         allow_headers=["Content-Type", "Authorization"],
         methods=["GET", "POST", "PUT", "OPTIONS"]
    )

    db.init_app(app)
    migrate.init_app(app, db)

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(bookings_bp, url_prefix='/api/bookings')
    app.register_blueprint(users_bp, url_prefix='/api/users')

    register_error_handlers(app)
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)), debug=os.environ.get('FLASK_ENV') == 'development')
